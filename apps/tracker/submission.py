"""
Writing an assembled dialog to the progress, sabaq_para and juz_revisions
tables.

Each record type is its own insert. A failure stops the submission and is
reported, but records already written stay written unless
``TRACKER_ATOMIC_SUBMISSION`` is on.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction

from .entry_form import Submission
from .exceptions import DhorSlotsFull, SubmissionError
from .models import JuzRevisionEntry, ProgressEntry, SabaqParaEntry

logger = logging.getLogger(__name__)


def next_dhor_slot(student_id, revision_date) -> int:
    last = (JuzRevisionEntry.objects
            .filter(student_id=student_id, revision_date=revision_date)
            .order_by("-dhor_slot")
            .values_list("dhor_slot", flat=True)
            .first())
    return (last or 0) + 1


@dataclass
class SubmissionResult:
    progress: List[ProgressEntry] = field(default_factory=list)
    sabaq_para: Optional[SabaqParaEntry] = None
    juz_revision: Optional[JuzRevisionEntry] = None

    def saved(self):
        records = list(self.progress)
        if self.sabaq_para is not None:
            records.append(self.sabaq_para)
        if self.juz_revision is not None:
            records.append(self.juz_revision)
        return records

    def summary(self):
        return {
            "progress": [{"id": p.pk, "lesson_type": p.lesson_type, "pages_memorized": p.pages_memorized}
                         for p in self.progress],
            "sabaq_para": self.sabaq_para.pk if self.sabaq_para else None,
            "juz_revision": (
                {"id": self.juz_revision.pk, "dhor_slot": self.juz_revision.dhor_slot}
                if self.juz_revision else None
            ),
        }


def _create_revision(student_id, record):
    slot = next_dhor_slot(student_id, record["revision_date"])
    max_slots = getattr(settings, "TRACKER_MAX_DHOR_SLOTS", 2)
    if slot > max_slots:
        raise DhorSlotsFull(student_id, record["revision_date"], max_slots)
    return JuzRevisionEntry.objects.create(student_id=student_id, dhor_slot=slot, **record)


def _insert(record_type, result, student_id, create):
    try:
        with transaction.atomic():
            return create()
    except DhorSlotsFull as exc:
        logger.warning("%s", exc)
        raise SubmissionError(record_type, result.saved(), exc) from exc
    except DatabaseError as exc:
        logger.exception("Failed to save %s for student %s", record_type, student_id)
        raise SubmissionError(record_type, result.saved(), exc) from exc


def _save(submission: Submission) -> SubmissionResult:
    result = SubmissionResult()
    student_id = submission.student_id

    for record in submission.progress:
        entry = _insert(
            record["lesson_type"], result, student_id,
            lambda: ProgressEntry.objects.create(student_id=student_id, **record),
        )
        result.progress.append(entry)

    if submission.sabaq_para is not None:
        result.sabaq_para = _insert(
            "sabaq_para", result, student_id,
            lambda: SabaqParaEntry.objects.create(student_id=student_id, **submission.sabaq_para),
        )

    if submission.juz_revision is not None:
        result.juz_revision = _insert(
            "juz_revision", result, student_id,
            lambda: _create_revision(student_id, submission.juz_revision),
        )

    logger.info("Saved %s for student %s on %s", ", ".join(submission.record_types()) or "nothing",
                student_id, submission.entry_date)
    return result


def save_submission(submission: Submission) -> SubmissionResult:
    if not getattr(settings, "TRACKER_ATOMIC_SUBMISSION", False):
        return _save(submission)
    try:
        with transaction.atomic():
            return _save(submission)
    except SubmissionError as exc:
        # everything was rolled back with the outer transaction
        raise SubmissionError(exc.record_type, [], exc.cause) from exc.cause
