"""
Where a student's next lesson starts.

The entry dialog opens on the point the previous lesson of the same track
ended: same Surah, same Ayah. The next lesson resumes *at* that ayah rather
than after it, so the teacher re-hears the last verse before moving on.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from django.db import models
from django.db.models import Q

from apps.quran.pages import QuranLayout, infer_layout, normalize_layout
from .models import LessonType, ProgressEntry

logger = logging.getLogger(__name__)


class Track(models.TextChoices):
    SABAQ = "sabaq", "Sabaq"
    NAZIRAH = "nazirah", "Nazirah"


@dataclass(frozen=True)
class Prefill:
    surah: int
    start_ayah: int
    juz: Optional[int] = None
    layout: Optional[QuranLayout] = None

    def as_dict(self):
        return {
            "juz": self.juz,
            "surah": self.surah,
            "start_ayah": self.start_ayah,
            "layout": self.layout.value if self.layout else None,
        }


def track_entries(student_id, track):
    entries = ProgressEntry.objects.filter(student_id=student_id)
    if track == Track.NAZIRAH:
        return entries.filter(lesson_type=LessonType.NAZIRAH)
    return entries.filter(Q(lesson_type__isnull=True) | Q(lesson_type=LessonType.HIFZ))


def latest_entry(student_id, track) -> Optional[ProgressEntry]:
    return track_entries(student_id, track).order_by("-date", "-created_at", "-id").first()


def last_end_point(entry) -> Optional[Tuple[int, int]]:
    """
    ``(surah, ayah)`` the entry finished on, or None when the history is too
    thin to tell. Without an explicit end ayah the verse count is needed:
    ``start + verses - 1``, or the start ayah itself when the count was
    recorded as zero.
    """
    surah = entry.end_surah or entry.current_surah
    ayah = entry.end_ayat
    if ayah is None and entry.start_ayat is not None and entry.verses_memorized is not None:
        if entry.verses_memorized > 0:
            ayah = entry.start_ayat + entry.verses_memorized - 1
        else:
            ayah = entry.start_ayat
    if surah is None or ayah is None:
        return None
    return surah, ayah


def entry_layout(entry) -> Optional[QuranLayout]:
    recorded = normalize_layout(entry.quran_format)
    if recorded is not None:
        return recorded

    verses = entry.verses_memorized
    single_surah = entry.end_surah in (None, entry.current_surah)
    if not verses and single_surah and entry.start_ayat and entry.end_ayat and entry.end_ayat >= entry.start_ayat:
        verses = entry.end_ayat - entry.start_ayat + 1
    return infer_layout(entry.pages_memorized, verses)


def resolve_juz(entry, surah: int, reference=None) -> Optional[int]:
    """
    The stored Juz when it still holds ``surah`` (a lesson that crossed into
    the next Surah may also have crossed into the next Juz), otherwise the
    first Juz listing the Surah. Without a reference snapshot only the stored
    value is available.
    """
    stored = entry.current_juz
    if reference is None:
        return stored
    if stored and (stored not in reference.juz_lists or surah in reference.parsed_juz(stored)):
        return stored
    return reference.find_juz_containing(surah)


def compute_prefill(entry, reference=None) -> Optional[Prefill]:
    end_point = last_end_point(entry)
    if end_point is None:
        logger.info("No prefill for student %s: entry %s has no end point", entry.student_id, entry.pk)
        return None

    surah, ayah = end_point
    return Prefill(
        surah=surah,
        start_ayah=ayah,
        juz=resolve_juz(entry, surah, reference),
        layout=entry_layout(entry),
    )


class ProgressPrefillEngine:

    def __init__(self, reference=None):
        self.reference = reference

    def prefill_for(self, student_id, track) -> Optional[Prefill]:
        entry = latest_entry(student_id, track)
        if entry is None:
            logger.debug("No %s history for student %s", track, student_id)
            return None
        return compute_prefill(entry, self.reference)

    def prefill_all(self, student_id):
        return {track: self.prefill_for(student_id, track) for track in Track}
