"""
Read side of the Dhor Book: the weekly grid, the daily checklist and the
classroom summary for one day.
"""
from datetime import date, timedelta
from typing import Iterable, List

from django.db.models import Q

from .models import JuzRevisionEntry, LessonType, ProgressEntry, Quality, SabaqParaEntry

EMPTY = "—"


def week_days(day: date) -> List[date]:
    """The seven dates of the week containing ``day``, Sunday first."""
    sunday = day - timedelta(days=(day.weekday() + 1) % 7)
    return [sunday + timedelta(days=i) for i in range(7)]


def _sabaq_filter():
    return Q(lesson_type__isnull=True) | Q(lesson_type=LessonType.HIFZ)


# ========= Cell formatting =========

def format_sabaq(entry) -> str:
    if not entry or None in (entry.current_juz, entry.current_surah, entry.start_ayat, entry.end_ayat):
        return EMPTY
    end = entry.end_ayat
    if entry.end_surah and entry.end_surah != entry.current_surah:
        end = f"S{entry.end_surah}:{entry.end_ayat}"
    return f"J{entry.current_juz} S{entry.current_surah}:{entry.start_ayat}-{end}"


def format_sabaq_para(entry) -> str:
    if not entry:
        return EMPTY
    quarters = entry.quarters_revised or "N/A quarters"
    return f"J{entry.juz_number} ({quarters}) Q: {entry.quality_rating or 'N/A'}"


def format_dhor(entry) -> str:
    if not entry:
        return EMPTY
    text = f"J{entry.juz_revised} " if entry.juz_revised else "N/A "
    if entry.quarter_start:
        text += f"(Qtr {entry.quarter_start}"
        if entry.quarters_covered:
            text += f", {entry.quarters_covered}c"
        text += ") "
    return text + f"Q: {entry.memorization_quality or 'N/A'}"


# ========= Weekly grid =========

def weekly_grid(student, day: date):
    days = week_days(day)
    first, last = days[0], days[-1]

    sabaq = {}
    for entry in (ProgressEntry.objects
                  .filter(_sabaq_filter(), student=student, date__range=(first, last))
                  .order_by("date", "-created_at")):
        sabaq.setdefault(entry.date, entry)

    sabaq_para = {}
    for entry in (SabaqParaEntry.objects
                  .filter(student=student, revision_date__range=(first, last))
                  .order_by("revision_date", "-created_at")):
        sabaq_para.setdefault(entry.revision_date, entry)

    dhor = {}
    for entry in JuzRevisionEntry.objects.filter(student=student, revision_date__range=(first, last)):
        dhor[(entry.revision_date, entry.dhor_slot)] = entry

    rows = []
    for d in days:
        lesson = sabaq.get(d)
        rows.append({
            "date": d.isoformat(),
            "sabaq": format_sabaq(lesson),
            "sabaq_para": format_sabaq_para(sabaq_para.get(d)),
            "dhor_1": format_dhor(dhor.get((d, 1))),
            "dhor_2": format_dhor(dhor.get((d, 2))),
            "quality": (lesson.memorization_quality if lesson else None) or EMPTY,
            "comments": (lesson.teacher_notes if lesson else None) or EMPTY,
        })
    return rows


def daily_checklist(student, day: date):
    slots = set(JuzRevisionEntry.objects
                .filter(student=student, revision_date=day)
                .values_list("dhor_slot", flat=True))
    has_sabaq = ProgressEntry.objects.filter(
        _sabaq_filter(), student=student, date=day,
        current_juz__isnull=False, current_surah__isnull=False,
        start_ayat__isnull=False, end_ayat__isnull=False,
    ).exists()
    return {
        "date": day.isoformat(),
        "sabaq": has_sabaq,
        "sabaq_para": SabaqParaEntry.objects.filter(student=student, revision_date=day).exists(),
        "dhor_1": 1 in slots,
        "dhor_2": 2 in slots,
    }


# ========= Classroom =========

def classroom_summary(students: Iterable, day: date):
    """
    Who did what today. Each completed track scores 1 and each "excellent"
    rating adds half a point; the list is sorted best first.
    """
    students = list(students)
    ids = [s.pk for s in students]

    progress = {}
    for entry in ProgressEntry.objects.filter(_sabaq_filter(), student_id__in=ids, date=day).order_by("-created_at"):
        progress.setdefault(entry.student_id, entry)
    sabaq_para = {}
    for entry in SabaqParaEntry.objects.filter(student_id__in=ids, revision_date=day).order_by("-created_at"):
        sabaq_para.setdefault(entry.student_id, entry)
    dhor = {}
    for entry in JuzRevisionEntry.objects.filter(student_id__in=ids, revision_date=day).order_by("dhor_slot"):
        dhor.setdefault(entry.student_id, entry)

    summaries = []
    for student in students:
        tracks = {
            "sabaq": progress.get(student.pk),
            "sabaq_para": sabaq_para.get(student.pk),
            "dhor": dhor.get(student.pk),
        }
        qualities = {
            "sabaq": getattr(tracks["sabaq"], "memorization_quality", None),
            "sabaq_para": getattr(tracks["sabaq_para"], "quality_rating", None),
            "dhor": getattr(tracks["dhor"], "memorization_quality", None),
        }
        score = sum(1 for record in tracks.values() if record is not None)
        score += 0.5 * sum(1 for q in qualities.values() if q == Quality.EXCELLENT)

        summaries.append({
            "id": student.pk,
            "name": student.name,
            **{name: {"done": tracks[name] is not None, "quality": qualities[name]} for name in tracks},
            "completion_score": score,
        })

    summaries.sort(key=lambda s: s["completion_score"], reverse=True)
    return summaries
