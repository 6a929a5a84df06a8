"""
State behind the Dhor Book entry dialog.

The dialog has four sub-forms: Sabaq, Sabaq Para, Dhor (Juz revision) and
Nazirah-or-Qaida. Sabaq and Nazirah are addressed by Juz/Surah/Ayah and each
gets its own ``TrackForm``; nothing is shared between the two, so editing
one track never disturbs the other.

A ``TrackForm`` keeps:

* ``state`` -- an immutable ``TrackSelection``, only ever replaced through the
  reducers below (``select_juz`` and friends);
* the option lists that depend on it (Surahs of the chosen Juz, Ayahs of the
  chosen Surah), ``None`` while not loaded;
* ``pending`` -- prefilled values waiting for their option list. Reference
  data and the student's history can arrive in either order, so every
  change to either one flushes the queue again.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from apps.quran.pages import (
    QuranLayout, calculate_pages, count_verses, default_layout,
    normalize_layout, pages_for_verse_count,
)
from apps.quran.reference import LAST_SURAH, QuranReference
from .models import LessonType, Quality, QuartersRevised
from .prefill import ProgressPrefillEngine, Track

logger = logging.getLogger(__name__)

FIELD_ORDER = ("juz", "surah", "start_ayah")


@dataclass(frozen=True)
class TrackSelection:
    juz: Optional[int] = None
    surah: Optional[int] = None
    end_surah: Optional[int] = None
    start_ayah: Optional[int] = None
    end_ayah: Optional[int] = None
    layout: Optional[QuranLayout] = None
    quality: Optional[str] = None


# ========= Reducers =========

def select_juz(state: TrackSelection, juz: int) -> TrackSelection:
    return replace(state, juz=juz, surah=None, end_surah=None, start_ayah=None, end_ayah=None)


def select_surah(state: TrackSelection, surah: int) -> TrackSelection:
    return replace(state, surah=surah, end_surah=surah, start_ayah=None, end_ayah=None)


def select_end_surah(state: TrackSelection, end_surah: int) -> TrackSelection:
    return replace(state, end_surah=end_surah, end_ayah=None)


def select_start_ayah(state: TrackSelection, ayah: int) -> TrackSelection:
    return replace(state, start_ayah=ayah, end_ayah=None)


def select_end_ayah(state: TrackSelection, ayah: int) -> TrackSelection:
    return replace(state, end_ayah=ayah)


def select_layout(state: TrackSelection, layout: QuranLayout) -> TrackSelection:
    return replace(state, layout=layout)


def select_quality(state: TrackSelection, quality: str) -> TrackSelection:
    return replace(state, quality=quality)


_PENDING_REDUCERS = {
    "juz": select_juz,
    "surah": select_surah,
    "start_ayah": select_start_ayah,
}


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ========= Pending values =========

class PendingValues:
    """Deferred assignments keyed by field name, applied in ``FIELD_ORDER``."""

    def __init__(self):
        self._values: Dict[str, int] = {}

    def queue(self, field_name: str, value: int):
        if field_name not in FIELD_ORDER:
            raise ValueError(f"{field_name!r} cannot be deferred")
        self._values[field_name] = value

    def get(self, field_name: str) -> Optional[int]:
        return self._values.get(field_name)

    def discard_from(self, field_name: str):
        """Drop ``field_name`` and every field that cascades from it."""
        if field_name not in FIELD_ORDER:
            return
        for name in FIELD_ORDER[FIELD_ORDER.index(field_name):]:
            self._values.pop(name, None)

    def clear(self):
        self._values.clear()

    def as_dict(self):
        return dict(self._values)

    def __contains__(self, field_name):
        return field_name in self._values

    def __len__(self):
        return len(self._values)

    def flush(self, options_for: Callable[[str], Optional[List[int]]],
              apply: Callable[[str], None]) -> List[str]:
        """
        Apply queued values whose option list has loaded and offers them.
        Stops at the first field that is still waiting, since everything
        after it depends on it.
        """
        applied = []
        for name in FIELD_ORDER:
            if name not in self._values:
                continue
            options = options_for(name)
            if options is None or self._values[name] not in options:
                break
            value = self._values.pop(name)
            apply(name, value)
            applied.append(name)
        return applied


# ========= One Surah/Ayah track =========

class TrackForm:

    def __init__(self, track, layout=None):
        self.track = track
        self.state = TrackSelection(layout=normalize_layout(layout) or default_layout())
        self.pending = PendingValues()
        self.reference: Optional[QuranReference] = None
        self.surah_options: Optional[List[int]] = None
        self.ayah_options: Optional[List[int]] = None
        self.touched = False
        self._resolve_juz = False

    # ----- inputs arriving from outside -----

    def reference_loaded(self, reference: QuranReference):
        self.reference = reference
        self._load_surah_options()
        self._load_ayah_options()
        self._flush()

    def prefill_loaded(self, prefill):
        if prefill is None:
            return
        if self.touched:
            logger.info("Ignoring %s prefill, the track was already edited", self.track)
            return

        self.pending.clear()
        if prefill.juz is not None:
            self.pending.queue("juz", prefill.juz)
        self.pending.queue("surah", prefill.surah)
        self.pending.queue("start_ayah", prefill.start_ayah)
        self._resolve_juz = prefill.juz is None
        if prefill.layout is not None:
            self.state = select_layout(self.state, prefill.layout)
        self._flush()

    def surah_options_loaded(self, juz: int, surah_numbers: Iterable[int]) -> bool:
        if juz != self.state.juz:
            logger.debug("Dropping stale surah options for juz %s (now %s)", juz, self.state.juz)
            return False
        self.surah_options = list(surah_numbers)
        self._flush()
        return True

    def ayah_options_loaded(self, surah: int, total_ayat: int) -> bool:
        if surah != self.state.surah:
            logger.debug("Dropping stale ayah options for surah %s (now %s)", surah, self.state.surah)
            return False
        self.ayah_options = list(range(1, total_ayat + 1))
        self._flush()
        return True

    # ----- user edits -----

    def select_juz(self, value) -> bool:
        juz = _as_int(value)
        if juz is None or (self.reference is not None and juz not in self.reference.juz_lists):
            return self._ignore("juz", value)
        self._user_edit("juz")
        self.state = select_juz(self.state, juz)
        self._load_surah_options()
        self._load_ayah_options()
        return True

    def select_surah(self, value) -> bool:
        surah = _as_int(value)
        if surah is None or self.surah_options is None or surah not in self.surah_options:
            return self._ignore("surah", value)
        self._user_edit("surah")
        self.state = select_surah(self.state, surah)
        self._load_ayah_options()
        return True

    def select_end_surah(self, value) -> bool:
        end_surah = _as_int(value)
        if end_surah is None or end_surah not in self.end_surah_options():
            return self._ignore("end_surah", value)
        self.touched = True
        self.state = select_end_surah(self.state, end_surah)
        return True

    def select_start_ayah(self, value) -> bool:
        ayah = _as_int(value)
        if ayah is None or self.ayah_options is None or ayah not in self.ayah_options:
            return self._ignore("start_ayah", value)
        self._user_edit("start_ayah")
        self.state = select_start_ayah(self.state, ayah)
        return True

    def select_end_ayah(self, value) -> bool:
        ayah = _as_int(value)
        if ayah is None or ayah not in self.end_ayah_options():
            return self._ignore("end_ayah", value)
        self.touched = True
        self.state = select_end_ayah(self.state, ayah)
        return True

    def select_layout(self, value) -> bool:
        layout = normalize_layout(value)
        if layout is None:
            return self._ignore("layout", value)
        self.state = select_layout(self.state, layout)
        return True

    def select_quality(self, value) -> bool:
        if value not in Quality.values:
            return self._ignore("quality", value)
        self.state = select_quality(self.state, value)
        return True

    def replay(self, values: Dict):
        """Apply submitted values in cascade order; blanks are skipped."""
        steps = (
            ("juz", self.select_juz),
            ("surah", self.select_surah),
            ("end_surah", self.select_end_surah),
            ("start_ayah", self.select_start_ayah),
            ("end_ayah", self.select_end_ayah),
            ("layout", self.select_layout),
            ("quality", self.select_quality),
        )
        for name, select in steps:
            value = values.get(name)
            if value is None or value == "":
                continue
            select(value)

    # ----- derived option lists -----

    def juz_options(self) -> Optional[List[int]]:
        return self.reference.juz_numbers if self.reference is not None else None

    def end_surah_options(self) -> List[int]:
        if self.state.surah is None:
            return []
        return list(range(self.state.surah, LAST_SURAH + 1))

    def end_ayah_options(self) -> List[int]:
        state = self.state
        if state.surah is None:
            return []
        end_surah = state.end_surah or state.surah
        if end_surah == state.surah:
            if state.start_ayah is None or self.ayah_options is None:
                return []
            return [a for a in self.ayah_options if a >= state.start_ayah]
        if self.reference is None:
            return []
        return self.reference.ayah_options(end_surah)

    def is_complete(self) -> bool:
        s = self.state
        return None not in (s.juz, s.surah, s.start_ayah, s.end_ayah)

    def as_dict(self):
        s = self.state
        return {
            "juz": s.juz,
            "surah": s.surah,
            "end_surah": s.end_surah,
            "start_ayah": s.start_ayah,
            "end_ayah": s.end_ayah,
            "layout": s.layout.value if s.layout else None,
            "quality": s.quality,
            "surah_options": self.surah_options,
            "end_surah_options": self.end_surah_options(),
            "ayah_options": self.ayah_options,
            "end_ayah_options": self.end_ayah_options(),
            "pending": self.pending.as_dict(),
        }

    # ----- internals -----

    def _ignore(self, name, value) -> bool:
        logger.warning("Ignoring invalid %s %s value %r", self.track, name, value)
        return False

    def _user_edit(self, name):
        self.touched = True
        self.pending.discard_from(name)
        if "surah" not in self.pending:
            self._resolve_juz = False

    def _load_surah_options(self):
        self.surah_options = None
        if self.reference is not None and self.state.juz is not None:
            self.surah_options = [s.surah_number for s in self.reference.surahs_in_juz(self.state.juz)]

    def _load_ayah_options(self):
        self.ayah_options = None
        if self.reference is not None and self.state.surah is not None:
            self.ayah_options = self.reference.ayah_options(self.state.surah)

    def _options_for(self, name) -> Optional[List[int]]:
        if name == "juz":
            return self.juz_options()
        if name == "surah":
            return self.surah_options
        return self.ayah_options

    def _apply_pending(self, name, value):
        self.state = _PENDING_REDUCERS[name](self.state, value)
        if name == "juz":
            self._load_surah_options()
            self._load_ayah_options()
        elif name == "surah":
            self._load_ayah_options()

    def _pending_juz_holds_surah(self) -> bool:
        juz = self.pending.get("juz")
        return (juz in self.reference.juz_lists
                and self.pending.get("surah") in self.reference.parsed_juz(juz))

    def _flush(self):
        if self.reference is not None and "surah" in self.pending and (self._resolve_juz or "juz" in self.pending):
            self._resolve_juz = False
            # a juz queued before the reference arrived was never checked against the surah
            if not self._pending_juz_holds_surah():
                surah = self.pending.get("surah")
                juz = self.reference.find_juz_containing(surah)
                if juz is None:
                    logger.warning("Giving up %s prefill: surah %s is not in any juz", self.track, surah)
                    self.pending.clear()
                    return
                self.pending.queue("juz", juz)
        self.pending.flush(self._options_for, self._apply_pending)


# ========= The other sub-forms =========

@dataclass
class SabaqParaSelection:
    juz: Optional[int] = None
    quarters_revised: Optional[str] = None
    quality: Optional[str] = None

    def is_complete(self):
        return self.juz is not None and self.quarters_revised in QuartersRevised.values


@dataclass
class RevisionSelection:
    juz: Optional[int] = None
    quarter_start: Optional[int] = None
    quarters_covered: Optional[int] = None
    quality: Optional[str] = None

    def is_complete(self):
        return self.juz is not None


@dataclass
class Submission:
    """Unsaved records for one dialog; each list/field is an independent insert."""
    student_id: int
    entry_date: date
    progress: List[Dict] = field(default_factory=list)
    sabaq_para: Optional[Dict] = None
    juz_revision: Optional[Dict] = None

    def is_empty(self):
        return not self.progress and self.sabaq_para is None and self.juz_revision is None

    def record_types(self):
        types = [record["lesson_type"] for record in self.progress]
        if self.sabaq_para is not None:
            types.append("sabaq_para")
        if self.juz_revision is not None:
            types.append("juz_revision")
        return types


# ========= The dialog =========

class EntryDialog:

    def __init__(self, student_id, entry_date: date, layout=None):
        self.student_id = student_id
        self.entry_date = entry_date
        self.sabaq = TrackForm(Track.SABAQ, layout)
        self.nazirah = TrackForm(Track.NAZIRAH, layout)
        self.sabaq_para = SabaqParaSelection()
        self.revision = RevisionSelection()
        self.reading_mode = LessonType.NAZIRAH
        self.qaida_lesson: Optional[int] = None
        self.qaida_quality: Optional[str] = None
        self.teacher_notes: Optional[str] = None

    def track_form(self, track) -> TrackForm:
        return self.nazirah if track == Track.NAZIRAH else self.sabaq

    def reference_loaded(self, reference):
        self.sabaq.reference_loaded(reference)
        self.nazirah.reference_loaded(reference)

    def prefill_loaded(self, track, prefill):
        self.track_form(track).prefill_loaded(prefill)

    def _reference(self):
        return self.sabaq.reference or self.nazirah.reference or QuranReference.offline()

    def _progress_record(self, form: TrackForm, lesson_type) -> Optional[Dict]:
        if not form.is_complete():
            return None
        s = form.state
        layout = s.layout or default_layout()
        end_surah = s.end_surah or s.surah
        if end_surah == s.surah:
            verses = s.end_ayah - s.start_ayah + 1
            pages = calculate_pages(layout, s.start_ayah, s.end_ayah)
        else:
            verses = count_verses(self._reference(), s.surah, s.start_ayah, end_surah, s.end_ayah)
            pages = pages_for_verse_count(layout, verses)
        return {
            "date": self.entry_date,
            "lesson_type": lesson_type,
            "current_juz": s.juz,
            "current_surah": s.surah,
            "end_surah": end_surah,
            "start_ayat": s.start_ayah,
            "end_ayat": s.end_ayah,
            "verses_memorized": verses,
            "pages_memorized": pages,
            "quran_format": layout.value,
            "memorization_quality": s.quality,
            "teacher_notes": self.teacher_notes,
        }

    def _reading_record(self) -> Optional[Dict]:
        if self.reading_mode == LessonType.QAIDA:
            if not self.qaida_lesson:
                return None
            return {
                "date": self.entry_date,
                "lesson_type": LessonType.QAIDA.value,
                "qaida_lesson": self.qaida_lesson,
                "memorization_quality": self.qaida_quality,
                "teacher_notes": self.teacher_notes,
            }
        return self._progress_record(self.nazirah, LessonType.NAZIRAH.value)

    def assemble(self) -> Submission:
        """
        Collect whichever sub-forms are complete. An incomplete sub-form is
        left out rather than reported, so a half filled dialog still saves
        the tracks that were finished.
        """
        submission = Submission(student_id=self.student_id, entry_date=self.entry_date)

        for record in (self._progress_record(self.sabaq, LessonType.HIFZ.value), self._reading_record()):
            if record is not None:
                submission.progress.append(record)

        if self.sabaq_para.is_complete():
            submission.sabaq_para = {
                "revision_date": self.entry_date,
                "juz_number": self.sabaq_para.juz,
                "quarters_revised": self.sabaq_para.quarters_revised,
                "quality_rating": self.sabaq_para.quality,
                "teacher_notes": self.teacher_notes,
            }

        if self.revision.is_complete():
            submission.juz_revision = {
                "revision_date": self.entry_date,
                "juz_revised": self.revision.juz,
                "quarter_start": self.revision.quarter_start,
                "quarters_covered": self.revision.quarters_covered,
                "memorization_quality": self.revision.quality,
                "teacher_notes": self.teacher_notes,
            }

        skipped = [t.label for t in Track if not self.track_form(t).is_complete() and self.track_form(t).touched]
        if skipped:
            logger.info("Student %s: incomplete %s left out of submission", self.student_id, ", ".join(skipped))
        return submission


def open_entry_dialog(student_id, entry_date: date, reference=None, layout=None) -> EntryDialog:
    """A dialog with both Surah/Ayah tracks prefilled from the student's history."""
    dialog = EntryDialog(student_id, entry_date, layout=layout)
    engine = ProgressPrefillEngine(reference)
    for track, prefill in engine.prefill_all(student_id).items():
        dialog.prefill_loaded(track, prefill)
    if reference is not None:
        dialog.reference_loaded(reference)
    return dialog
