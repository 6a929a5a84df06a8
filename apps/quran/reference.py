"""
Juz / Surah / Ayah resolution over the reference tables.

The ``juz.surah_list`` column is free text written by hand in the admin, so
parsing is best-effort: tokens that cannot be resolved are skipped and
reported back in ``ParsedSurahList.skipped`` instead of raising.

Grammar (comma separated, optional surrounding ``{}``)::

    token := number | surah-name | bound "-" bound
    bound := number | surah-name
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from django.conf import settings
from django.core.cache import cache

from . import data

logger = logging.getLogger(__name__)

CACHE_KEY = "quran-reference"
FIRST_SURAH, LAST_SURAH = 1, 114

_INT_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class SurahInfo:
    surah_number: int
    name: str
    total_ayat: int


@dataclass(frozen=True)
class SkippedToken:
    token: str
    reason: str


@dataclass
class ParsedSurahList:
    surahs: List[int] = field(default_factory=list)
    skipped: List[SkippedToken] = field(default_factory=list)

    def __contains__(self, surah_number):
        return surah_number in self.surahs


# ========= Parsing =========

def _resolve_bound(part: str, names: Dict[str, int]) -> Optional[int]:
    part = part.strip().strip('"').strip()
    if _INT_RE.match(part):
        number = int(part)
        if FIRST_SURAH <= number <= LAST_SURAH:
            return number
        return None
    return names.get(part.lower())


def _split_range(token: str, names: Dict[str, int]) -> Optional[Tuple[int, int]]:
    # names such as "Al-Fatihah" carry their own hyphen, so every hyphen is a candidate split
    for i, ch in enumerate(token):
        if ch != "-":
            continue
        start = _resolve_bound(token[:i], names)
        end = _resolve_bound(token[i + 1:], names)
        if start is not None and end is not None:
            return start, end
    return None


def _resolve_token(token: str, names: Dict[str, int]) -> Tuple[Optional[List[int]], Optional[str]]:
    single = _resolve_bound(token, names)
    if single is not None:
        return [single], None

    if "-" in token:
        bounds = _split_range(token, names)
        if bounds is None:
            return None, "unresolvable range"
        start, end = bounds
        if start > end:
            return None, f"range start {start} is after end {end}"
        return list(range(start, end + 1)), None

    if _INT_RE.match(token):
        return None, "surah number out of range"
    return None, "unknown surah name"


def parse_surah_list(list_string: Optional[str], all_surahs: Iterable) -> ParsedSurahList:
    """
    Parse a Juz ``surah_list`` into sorted unique Surah numbers.

    ``all_surahs`` is anything with ``surah_number`` and ``name`` attributes
    (``Surah`` rows or ``SurahInfo``); it is only used to resolve names.
    """
    result = ParsedSurahList()
    if not list_string:
        return result

    names = {s.name.strip().lower(): s.surah_number for s in all_surahs}

    text = list_string.strip()
    if text.startswith("{") and text.endswith("}"):
        text = text[1:-1]

    found = set()
    for raw in text.split(","):
        token = raw.strip().strip('"').strip()
        if not token:
            continue
        numbers, reason = _resolve_token(token, names)
        if numbers is None:
            logger.warning("Skipping surah list token %r: %s", token, reason)
            result.skipped.append(SkippedToken(token=token, reason=reason))
            continue
        found.update(numbers)

    result.surahs = sorted(found)
    return result


# ========= Reference snapshot =========

class QuranReference:
    """Read-only lookups over one snapshot of the ``juz`` and ``surah`` tables."""

    def __init__(self, juz_lists: Dict[int, str], surahs: Iterable):
        self.juz_lists = dict(sorted(juz_lists.items()))
        self.surahs = {
            s.surah_number: SurahInfo(s.surah_number, s.name, s.total_ayat)
            for s in surahs
        }
        self._parsed: Dict[int, ParsedSurahList] = {}

    @classmethod
    def from_rows(cls, juz_rows, surah_rows):
        return cls({j.juz_number: j.surah_list for j in juz_rows}, surah_rows)

    @classmethod
    def offline(cls):
        return cls(
            data.JUZ_SURAH_LISTS,
            [SurahInfo(number, name, total) for number, name, total in data.SURAHS],
        )

    @property
    def juz_numbers(self) -> List[int]:
        return list(self.juz_lists)

    def parsed_juz(self, juz_number: int) -> ParsedSurahList:
        if juz_number not in self._parsed:
            self._parsed[juz_number] = parse_surah_list(
                self.juz_lists.get(juz_number), self.surahs.values()
            )
        return self._parsed[juz_number]

    def surahs_in_juz(self, juz_number: int) -> List[SurahInfo]:
        parsed = self.parsed_juz(juz_number)
        surahs = [self.surahs[n] for n in parsed.surahs if n in self.surahs]
        if not surahs:
            logger.info("No surahs found for juz %s", juz_number)
        return surahs

    def find_juz_containing(self, surah_number: int) -> Optional[int]:
        for juz_number in self.juz_lists:
            if surah_number in self.parsed_juz(juz_number):
                return juz_number
        logger.info("Surah %s is not listed in any juz", surah_number)
        return None

    def surah(self, surah_number: int) -> Optional[SurahInfo]:
        info = self.surahs.get(surah_number)
        if info is None and surah_number in data.SURAH_AYAH_COUNTS:
            number, name, total = data.SURAHS[surah_number - 1]
            info = SurahInfo(number, name, total)
        return info

    def total_ayahs_in(self, surah_number: int) -> int:
        info = self.surahs.get(surah_number)
        if info is not None:
            return info.total_ayat
        fallback = data.SURAH_AYAH_COUNTS.get(surah_number)
        if fallback is not None:
            logger.info("Surah %s missing from reference rows, using offline ayah count", surah_number)
            return fallback
        return 0

    def ayah_options(self, surah_number: int) -> List[int]:
        return list(range(1, self.total_ayahs_in(surah_number) + 1))


def _build_reference() -> QuranReference:
    from .models import Juz, Surah

    juz_rows = list(Juz.objects.all())
    surah_rows = list(Surah.objects.all())
    offline = QuranReference.offline()

    if not juz_rows:
        logger.warning("juz table is empty, using offline juz lists")
    if not surah_rows:
        logger.warning("surah table is empty, using offline surah data")

    juz_lists = {j.juz_number: j.surah_list for j in juz_rows} if juz_rows else offline.juz_lists
    surahs = surah_rows or list(offline.surahs.values())
    reference = QuranReference(juz_lists, surahs)
    # parsed here so the cached copy carries the results
    for juz_number in reference.juz_numbers:
        reference.parsed_juz(juz_number)
    return reference


def load_reference() -> QuranReference:
    """The cached reference snapshot (rebuilt after any Juz/Surah change)."""
    timeout = getattr(settings, "QURAN_REFERENCE_CACHE_TIMEOUT", None)
    return cache.get_or_set(CACHE_KEY, _build_reference, timeout=timeout)


def clear_reference_cache():
    cache.delete(CACHE_KEY)
