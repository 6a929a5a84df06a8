class TrackerError(Exception):
    """Base class for Dhor Book errors shown to the teacher."""


class DhorSlotsFull(TrackerError):
    def __init__(self, student_id, revision_date, max_slots):
        self.student_id = student_id
        self.revision_date = revision_date
        self.max_slots = max_slots
        super().__init__(
            f"Student {student_id} already has {max_slots} dhor sessions on {revision_date}."
        )


class SubmissionError(TrackerError):
    """
    An insert failed part way through a dialog submission. ``saved`` holds the
    records written before the failure; they are not rolled back.
    """

    def __init__(self, record_type, saved, cause):
        self.record_type = record_type
        self.saved = saved
        self.cause = cause
        super().__init__(f"Could not save {record_type}: {cause}")
