from datetime import date

import pytest

from apps.quran.pages import QuranLayout
from apps.tracker.models import LessonType, ProgressEntry
from apps.tracker.prefill import (
    Prefill, ProgressPrefillEngine, Track, compute_prefill, last_end_point,
)

pytestmark = pytest.mark.django_db


def lesson(student, day=date(2024, 3, 4), **fields):
    defaults = {"lesson_type": LessonType.HIFZ, "current_juz": 1, "current_surah": 2, "start_ayat": 10}
    defaults.update(fields)
    return ProgressEntry.objects.create(student=student, date=day, **defaults)


@pytest.fixture
def engine(reference):
    return ProgressPrefillEngine(reference)


def test_no_history(engine, student):
    assert engine.prefill_for(student.pk, Track.SABAQ) is None


def test_resumes_at_last_ayah(engine, student):
    lesson(student, end_ayat=19, quran_format="15")
    assert engine.prefill_for(student.pk, Track.SABAQ) == Prefill(
        surah=2, start_ayah=19, juz=1, layout=QuranLayout.FIFTEEN_LINE,
    )


def test_latest_lesson_wins(engine, student):
    lesson(student, day=date(2024, 3, 5), end_ayat=30)
    lesson(student, day=date(2024, 3, 4), end_ayat=50)
    assert engine.prefill_for(student.pk, Track.SABAQ).start_ayah == 30


def test_same_day_uses_latest_created(engine, student):
    lesson(student, end_ayat=20)
    lesson(student, end_ayat=25)
    assert engine.prefill_for(student.pk, Track.SABAQ).start_ayah == 25


def test_legacy_rows_without_lesson_type_are_sabaq(engine, student):
    lesson(student, lesson_type=None, end_ayat=12)
    assert engine.prefill_for(student.pk, Track.SABAQ).start_ayah == 12


def test_tracks_are_independent(engine, student):
    lesson(student, end_ayat=19)
    lesson(student, lesson_type=LessonType.NAZIRAH, current_juz=30, current_surah=78,
           start_ayat=1, end_ayat=16)
    lesson(student, lesson_type=LessonType.QAIDA, current_juz=None, current_surah=None,
           start_ayat=None, qaida_lesson=4)

    prefills = engine.prefill_all(student.pk)
    assert prefills[Track.SABAQ].surah == 2
    assert prefills[Track.NAZIRAH] == Prefill(surah=78, start_ayah=16, juz=30, layout=None)


@pytest.mark.parametrize("verses, expected", [(5, 14), (1, 10), (0, 10)])
def test_end_from_verse_count(student, verses, expected):
    entry = lesson(student, end_ayat=None, verses_memorized=verses)
    assert last_end_point(entry) == (2, expected)


def test_no_end_point(engine, student):
    lesson(student, end_ayat=None, verses_memorized=None)
    assert engine.prefill_for(student.pk, Track.SABAQ) is None


def test_lesson_crossing_into_next_surah(student, reference):
    entry = lesson(student, current_juz=1, current_surah=1, start_ayat=5, end_surah=2, end_ayat=3)
    prefill = compute_prefill(entry, reference)
    assert (prefill.surah, prefill.start_ayah, prefill.juz) == (2, 3, 1)


def test_stored_juz_not_holding_the_surah_is_replaced(student, reference):
    entry = lesson(student, current_juz=2, current_surah=2, start_ayat=250, end_surah=3, end_ayat=4)
    assert compute_prefill(entry, reference).juz == 3


def test_stored_juz_kept_without_reference(student):
    entry = lesson(student, current_juz=2, current_surah=2, start_ayat=250, end_surah=3, end_ayat=4)
    assert compute_prefill(entry).juz == 2


def test_missing_juz_is_looked_up(student, reference):
    entry = lesson(student, current_juz=None, current_surah=18, start_ayat=1, end_ayat=10)
    assert compute_prefill(entry, reference).juz == 15


@pytest.mark.parametrize("pages, verses, expected", [
    (2, 16, QuranLayout.THIRTEEN_LINE),
    (2, 20, QuranLayout.FIFTEEN_LINE),
    (None, 20, None),
])
def test_layout_inferred_from_history(student, reference, pages, verses, expected):
    entry = lesson(student, end_ayat=None, verses_memorized=verses, pages_memorized=pages)
    assert compute_prefill(entry, reference).layout == expected


def test_layout_inferred_from_range(student, reference):
    entry = lesson(student, start_ayat=1, end_ayat=16, pages_memorized=2)
    assert compute_prefill(entry, reference).layout == QuranLayout.THIRTEEN_LINE
