from datetime import date
from unittest import mock

import pytest
from django.db import IntegrityError

from apps.tracker.entry_form import Submission
from apps.tracker.exceptions import DhorSlotsFull, SubmissionError
from apps.tracker.models import JuzRevisionEntry, ProgressEntry, SabaqParaEntry
from apps.tracker.submission import next_dhor_slot, save_submission

pytestmark = pytest.mark.django_db

DAY = date(2024, 3, 10)


def revision(juz=5, day=DAY):
    return {"revision_date": day, "juz_revised": juz, "quarter_start": 1, "quarters_covered": 2,
            "memorization_quality": "good", "teacher_notes": None}


def sabaq():
    return {"date": DAY, "lesson_type": "hifz", "current_juz": 1, "current_surah": 2, "end_surah": 2,
            "start_ayat": 1, "end_ayat": 20, "verses_memorized": 20, "pages_memorized": 2,
            "quran_format": "15", "memorization_quality": "good", "teacher_notes": None}


def sabaq_para():
    return {"revision_date": DAY, "juz_number": 1, "quarters_revised": "2_quarters",
            "quality_rating": "excellent", "teacher_notes": None}


def test_first_slot_is_one(student):
    assert next_dhor_slot(student.pk, DAY) == 1


def test_slots_count_up_per_day(student):
    first = save_submission(Submission(student.pk, DAY, juz_revision=revision(5)))
    second = save_submission(Submission(student.pk, DAY, juz_revision=revision(6)))
    monday = date(2024, 3, 11)
    other_day = save_submission(Submission(student.pk, monday, juz_revision=revision(7, day=monday)))

    assert first.juz_revision.dhor_slot == 1
    assert second.juz_revision.dhor_slot == 2
    assert other_day.juz_revision.dhor_slot == 1


def test_third_dhor_is_refused(student):
    for juz in (5, 6):
        save_submission(Submission(student.pk, DAY, juz_revision=revision(juz)))

    with pytest.raises(SubmissionError) as info:
        save_submission(Submission(student.pk, DAY, juz_revision=revision(7)))

    assert isinstance(info.value.cause, DhorSlotsFull)
    assert info.value.record_type == "juz_revision"
    assert JuzRevisionEntry.objects.filter(student=student).count() == 2


def test_slot_limit_from_settings(student, settings):
    settings.TRACKER_MAX_DHOR_SLOTS = 1
    save_submission(Submission(student.pk, DAY, juz_revision=revision(5)))
    with pytest.raises(SubmissionError):
        save_submission(Submission(student.pk, DAY, juz_revision=revision(6)))


def test_all_record_types_saved(student):
    result = save_submission(Submission(student.pk, DAY, progress=[sabaq()], sabaq_para=sabaq_para(),
                                        juz_revision=revision()))
    assert len(result.saved()) == 3
    assert result.summary()["juz_revision"]["dhor_slot"] == 1
    assert ProgressEntry.objects.get().pages_memorized == 2
    assert SabaqParaEntry.objects.get().quarters_revised == "2_quarters"


def test_earlier_inserts_survive_a_failure(student):
    for juz in (5, 6):
        save_submission(Submission(student.pk, DAY, juz_revision=revision(juz)))

    with pytest.raises(SubmissionError) as info:
        save_submission(Submission(student.pk, DAY, progress=[sabaq()], sabaq_para=sabaq_para(),
                                   juz_revision=revision(7)))

    assert [type(r) for r in info.value.saved] == [ProgressEntry, SabaqParaEntry]
    assert ProgressEntry.objects.count() == 1
    assert SabaqParaEntry.objects.count() == 1


def test_atomic_submission_rolls_back(student, settings):
    settings.TRACKER_ATOMIC_SUBMISSION = True
    for juz in (5, 6):
        save_submission(Submission(student.pk, DAY, juz_revision=revision(juz)))

    with pytest.raises(SubmissionError) as info:
        save_submission(Submission(student.pk, DAY, progress=[sabaq()], sabaq_para=sabaq_para(),
                                   juz_revision=revision(7)))

    assert info.value.saved == []
    assert ProgressEntry.objects.count() == 0
    assert SabaqParaEntry.objects.count() == 0


def test_database_error_is_wrapped(student):
    with mock.patch.object(SabaqParaEntry.objects, "create", side_effect=IntegrityError("boom")):
        with pytest.raises(SubmissionError) as info:
            save_submission(Submission(student.pk, DAY, progress=[sabaq()], sabaq_para=sabaq_para()))

    assert info.value.record_type == "sabaq_para"
    assert isinstance(info.value.cause, IntegrityError)
    assert ProgressEntry.objects.count() == 1
