from django.db import models

from apps.quran.pages import QuranLayout


class Quality(models.TextChoices):
    EXCELLENT = "excellent", "Excellent"
    GOOD = "good", "Good"
    AVERAGE = "average", "Average"
    NEEDS_WORK = "needsWork", "Needs work"
    HORRIBLE = "horrible", "Horrible"


class LessonType(models.TextChoices):
    HIFZ = "hifz", "Sabaq"
    NAZIRAH = "nazirah", "Nazirah"
    QAIDA = "qaida", "Qaida"


class QuartersRevised(models.TextChoices):
    ONE = "1st_quarter", "1st quarter"
    TWO = "2_quarters", "2 quarters"
    THREE = "3_quarters", "3 quarters"
    FOUR = "4_quarters", "4 quarters"


QUARTER_CHOICES = [(n, str(n)) for n in range(1, 5)]


class Student(models.Model):
    student_no = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=150)
    joined_at = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class ProgressEntry(models.Model):
    """
    One lesson in the sequential tracks. ``lesson_type`` NULL or "hifz" is
    Sabaq; "nazirah" and "qaida" rows live in their own track.
    """
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="progress_entries")
    date = models.DateField()
    lesson_type = models.CharField(max_length=10, choices=LessonType.choices, null=True, blank=True)
    current_juz = models.PositiveSmallIntegerField(null=True, blank=True)
    current_surah = models.PositiveSmallIntegerField(null=True, blank=True)
    end_surah = models.PositiveSmallIntegerField(null=True, blank=True)
    start_ayat = models.PositiveSmallIntegerField(null=True, blank=True)
    end_ayat = models.PositiveSmallIntegerField(null=True, blank=True)
    verses_memorized = models.PositiveIntegerField(null=True, blank=True)
    pages_memorized = models.PositiveIntegerField(null=True, blank=True)
    quran_format = models.CharField(max_length=2, choices=QuranLayout.choices, null=True, blank=True)
    qaida_lesson = models.PositiveSmallIntegerField(null=True, blank=True)
    memorization_quality = models.CharField(max_length=10, choices=Quality.choices, null=True, blank=True)
    teacher_notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "progress"
        ordering = ["-date", "-created_at"]
        verbose_name_plural = "progress entries"

    def __str__(self):
        if self.current_surah and self.start_ayat:
            end = f"{self.end_surah}:{self.end_ayat}" if self.end_surah and self.end_surah != self.current_surah else self.end_ayat
            return f"{self.student} {self.date} {self.current_surah}:{self.start_ayat}-{end}"
        return f"{self.student} {self.date} {self.get_lesson_type_display() or 'Sabaq'}"


class SabaqParaEntry(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="sabaq_para_entries")
    revision_date = models.DateField()
    juz_number = models.PositiveSmallIntegerField()
    quarters_revised = models.CharField(max_length=12, choices=QuartersRevised.choices)
    quality_rating = models.CharField(max_length=10, choices=Quality.choices, null=True, blank=True)
    teacher_notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "sabaq_para"
        ordering = ["-revision_date", "-created_at"]

    def __str__(self):
        return f"{self.student} {self.revision_date} J{self.juz_number} ({self.quarters_revised})"


class JuzRevisionEntry(models.Model):
    """A Dhor session. ``dhor_slot`` counts sessions per student per day, starting at 1."""
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="juz_revisions")
    revision_date = models.DateField()
    juz_revised = models.PositiveSmallIntegerField()
    dhor_slot = models.PositiveSmallIntegerField(default=1)
    quarter_start = models.PositiveSmallIntegerField(choices=QUARTER_CHOICES, null=True, blank=True)
    quarters_covered = models.PositiveSmallIntegerField(choices=QUARTER_CHOICES, null=True, blank=True)
    memorization_quality = models.CharField(max_length=10, choices=Quality.choices, null=True, blank=True)
    teacher_notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "juz_revisions"
        ordering = ["-revision_date", "dhor_slot"]
        unique_together = ("student", "revision_date", "dhor_slot")

    def __str__(self):
        return f"{self.student} {self.revision_date} Dhor {self.dhor_slot}: J{self.juz_revised}"
