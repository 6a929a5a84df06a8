"""
Page counts for a memorised ayah range under the 13-line and 15-line mushaf.

The verses-per-page figures are averages, so every result is an estimate
rounded up: a partly covered page still counts as a page.
"""
import math
from typing import Optional

from django.conf import settings
from django.db import models


class QuranLayout(models.TextChoices):
    THIRTEEN_LINE = "13", "13-line"
    FIFTEEN_LINE = "15", "15-line"


VERSES_PER_PAGE = {
    QuranLayout.THIRTEEN_LINE: 8,
    QuranLayout.FIFTEEN_LINE: 10,
}

# ratio below this is read as the denser 13-line print
LAYOUT_THRESHOLD = (VERSES_PER_PAGE[QuranLayout.THIRTEEN_LINE] + VERSES_PER_PAGE[QuranLayout.FIFTEEN_LINE]) / 2


def normalize_layout(value) -> Optional[QuranLayout]:
    """Accepts ``13``, ``"13"``, ``"13-line"`` or a ``QuranLayout``; None if unknown."""
    if value is None or value == "":
        return None
    text = str(value).strip().lower()
    if text.endswith("-line"):
        text = text[:-len("-line")]
    try:
        return QuranLayout(text)
    except ValueError:
        return None


def default_layout() -> QuranLayout:
    return normalize_layout(getattr(settings, "QURAN_DEFAULT_LAYOUT", None)) or QuranLayout.FIFTEEN_LINE


def pages_for_verse_count(layout, verses: int) -> int:
    resolved = normalize_layout(layout)
    if resolved is None:
        raise ValueError(f"Unknown quran layout: {layout!r}")
    if verses <= 0:
        raise ValueError("Verse count must be positive")
    return math.ceil(verses / VERSES_PER_PAGE[resolved])


def calculate_pages(layout, start_ayah: int, end_ayah: int) -> int:
    if not start_ayah or start_ayah < 1 or end_ayah < start_ayah:
        raise ValueError(f"Invalid ayah range {start_ayah}-{end_ayah}")
    return pages_for_verse_count(layout, end_ayah - start_ayah + 1)


def count_verses(reference, start_surah: int, start_ayah: int, end_surah: int, end_ayah: int) -> int:
    """Verses from ``start_surah:start_ayah`` to ``end_surah:end_ayah`` inclusive."""
    if end_surah == start_surah:
        if end_ayah < start_ayah:
            raise ValueError(f"Invalid ayah range {start_ayah}-{end_ayah}")
        return end_ayah - start_ayah + 1
    if end_surah < start_surah:
        raise ValueError(f"End surah {end_surah} is before start surah {start_surah}")

    verses = reference.total_ayahs_in(start_surah) - start_ayah + 1
    for surah_number in range(start_surah + 1, end_surah):
        verses += reference.total_ayahs_in(surah_number)
    return verses + end_ayah


def infer_layout(pages_memorized, verses_memorized) -> Optional[QuranLayout]:
    """
    Guess which print a historical entry was counted against from its
    verses-per-page ratio. None when either figure is missing or zero.
    """
    if not pages_memorized or not verses_memorized:
        return None
    if pages_memorized < 0 or verses_memorized < 0:
        return None
    ratio = verses_memorized / pages_memorized
    if ratio < LAYOUT_THRESHOLD:
        return QuranLayout.THIRTEEN_LINE
    return QuranLayout.FIFTEEN_LINE
