"""
Exact Juz boundaries: which Juz a verse sits in and how much of a Juz a
student's recorded lessons cover.
"""
from bisect import bisect_right
from typing import Iterable, Iterator, Optional, Set, Tuple

from .data import JUZ_STARTS, SURAH_AYAH_COUNTS

# ayahs before each surah, for a global 1-based verse index
_OFFSETS = {}
_running = 0
for _number in sorted(SURAH_AYAH_COUNTS):
    _OFFSETS[_number] = _running
    _running += SURAH_AYAH_COUNTS[_number]
TOTAL_AYAHS = _running

_JUZ_ORDER = sorted(JUZ_STARTS)


def _verse_index(surah: int, ayah: int) -> int:
    return _OFFSETS[surah] + ayah


_JUZ_START_INDEXES = [_verse_index(*JUZ_STARTS[j]) for j in _JUZ_ORDER]


def _valid_verse(surah, ayah) -> bool:
    return surah in SURAH_AYAH_COUNTS and 1 <= ayah <= SURAH_AYAH_COUNTS[surah]


def juz_of_ayah(surah: int, ayah: int) -> Optional[int]:
    if not _valid_verse(surah, ayah):
        return None
    position = bisect_right(_JUZ_START_INDEXES, _verse_index(surah, ayah))
    return _JUZ_ORDER[position - 1]


def total_ayahs_in_juz(juz_number: int) -> int:
    if juz_number not in JUZ_STARTS:
        return 0
    start = _verse_index(*JUZ_STARTS[juz_number])
    following = JUZ_STARTS.get(juz_number + 1)
    end = _verse_index(*following) if following else TOTAL_AYAHS + 1
    return end - start


def iter_verses(start_surah, start_ayah, end_surah, end_ayah) -> Iterator[Tuple[int, int]]:
    surah, ayah = start_surah, start_ayah
    while (surah, ayah) <= (end_surah, end_ayah) and surah in SURAH_AYAH_COUNTS:
        yield surah, ayah
        if ayah < SURAH_AYAH_COUNTS[surah]:
            ayah += 1
        else:
            surah, ayah = surah + 1, 1


def unique_ayahs_covered_in_juz(entries: Iterable, juz_number: int) -> Set[str]:
    """
    ``"surah:ayah"`` keys of every verse inside ``juz_number`` that any entry
    covers. Entries are progress rows (or anything with the same attributes);
    ones without a complete range are ignored.
    """
    covered = set()
    for entry in entries:
        surah = getattr(entry, "current_surah", None)
        start = getattr(entry, "start_ayat", None)
        end = getattr(entry, "end_ayat", None)
        end_surah = getattr(entry, "end_surah", None) or surah
        if surah is None or start is None or end is None:
            continue
        if (end_surah, end) < (surah, start):
            continue
        for verse in iter_verses(surah, start, end_surah, end):
            if juz_of_ayah(*verse) == juz_number:
                covered.add(f"{verse[0]}:{verse[1]}")
    return covered


def juz_completion(entries: Iterable, juz_number: int) -> float:
    total = total_ayahs_in_juz(juz_number)
    if not total:
        return 0.0
    covered = unique_ayahs_covered_in_juz(entries, juz_number)
    return round(len(covered) * 100 / total, 1)
