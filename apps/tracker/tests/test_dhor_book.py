from datetime import date

import pytest

from apps.tracker.dhor_book import (
    EMPTY, classroom_summary, daily_checklist, format_dhor, format_sabaq,
    week_days, weekly_grid,
)
from apps.tracker.models import (
    JuzRevisionEntry, LessonType, ProgressEntry, SabaqParaEntry, Student,
)

SUNDAY = date(2024, 3, 10)
WEDNESDAY = date(2024, 3, 13)


def test_week_starts_on_sunday():
    days = week_days(WEDNESDAY)
    assert days[0] == SUNDAY
    assert days[-1] == date(2024, 3, 16)
    assert week_days(SUNDAY) == days


def test_format_sabaq():
    entry = ProgressEntry(current_juz=1, current_surah=2, start_ayat=5, end_ayat=9)
    assert format_sabaq(entry) == "J1 S2:5-9"
    entry.end_surah = 3
    assert format_sabaq(entry) == "J1 S2:5-S3:9"
    assert format_sabaq(ProgressEntry(current_juz=1)) == EMPTY
    assert format_sabaq(None) == EMPTY


def test_format_dhor():
    entry = JuzRevisionEntry(juz_revised=5, quarter_start=2, quarters_covered=2, memorization_quality="good")
    assert format_dhor(entry) == "J5 (Qtr 2, 2c) Q: good"
    assert format_dhor(JuzRevisionEntry(juz_revised=5)) == "J5 Q: N/A"


@pytest.mark.django_db
class TestWithRecords:

    @pytest.fixture
    def records(self, student):
        ProgressEntry.objects.create(student=student, date=WEDNESDAY, lesson_type=LessonType.HIFZ,
                                     current_juz=1, current_surah=2, start_ayat=1, end_ayat=10,
                                     memorization_quality="excellent", teacher_notes="Well done")
        ProgressEntry.objects.create(student=student, date=WEDNESDAY, lesson_type=LessonType.NAZIRAH,
                                     current_juz=30, current_surah=78, start_ayat=1, end_ayat=10)
        SabaqParaEntry.objects.create(student=student, revision_date=WEDNESDAY, juz_number=1,
                                      quarters_revised="2_quarters", quality_rating="good")
        JuzRevisionEntry.objects.create(student=student, revision_date=WEDNESDAY, juz_revised=5,
                                        dhor_slot=1, memorization_quality="excellent")
        return student

    def test_weekly_grid(self, records):
        rows = weekly_grid(records, WEDNESDAY)
        assert len(rows) == 7
        wednesday = rows[3]
        assert wednesday["date"] == "2024-03-13"
        assert wednesday["sabaq"] == "J1 S2:1-10"
        assert wednesday["sabaq_para"] == "J1 (2_quarters) Q: good"
        assert wednesday["dhor_1"] == "J5 Q: excellent"
        assert wednesday["dhor_2"] == EMPTY
        assert wednesday["comments"] == "Well done"
        assert rows[0]["sabaq"] == EMPTY

    def test_daily_checklist(self, records):
        assert daily_checklist(records, WEDNESDAY) == {
            "date": "2024-03-13", "sabaq": True, "sabaq_para": True, "dhor_1": True, "dhor_2": False,
        }
        assert not any(v for k, v in daily_checklist(records, SUNDAY).items() if k != "date")

    def test_classroom_summary_sorted_by_score(self, records):
        idle = Student.objects.create(student_no="S0002", name="Idle")
        summary = classroom_summary([idle, records], WEDNESDAY)

        assert [s["id"] for s in summary] == [records.pk, idle.pk]
        # three tracks done, two of them excellent
        assert summary[0]["completion_score"] == 4.0
        assert summary[0]["dhor"] == {"done": True, "quality": "excellent"}
        assert summary[1]["completion_score"] == 0
