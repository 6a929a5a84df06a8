from django import forms
from django.utils import timezone

from apps.quran.pages import QuranLayout
from apps.quran.reference import load_reference
from .models import LessonType, Quality, QuartersRevised

QUALITY_CHOICES = [("", "---------")] + Quality.choices


def _blank_to_none(value):
    return value or None


class TrackEntryForm(forms.Form):
    """Sabaq or Nazirah sub-form. Only the ranges are checked here, not whether the track is complete."""
    juz = forms.IntegerField(required=False, min_value=1, max_value=30)
    surah = forms.IntegerField(required=False, min_value=1, max_value=114)
    end_surah = forms.IntegerField(required=False, min_value=1, max_value=114)
    start_ayah = forms.IntegerField(required=False, min_value=1)
    end_ayah = forms.IntegerField(required=False, min_value=1)
    layout = forms.ChoiceField(choices=[("", "---------")] + QuranLayout.choices, required=False)
    quality = forms.ChoiceField(choices=QUALITY_CHOICES, required=False)

    def __init__(self, *args, reference=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.reference = reference or load_reference()

    def clean(self):
        cleaned = super().clean()
        surah = cleaned.get("surah")
        end_surah = cleaned.get("end_surah")
        start = cleaned.get("start_ayah")
        end = cleaned.get("end_ayah")

        if surah and start:
            total = self.reference.total_ayahs_in(surah)
            if start > total:
                self.add_error("start_ayah", f"Surah {surah} has only {total} ayahs.")

        if surah and end_surah and end_surah < surah:
            self.add_error("end_surah", "End surah cannot come before the start surah.")

        last_surah = end_surah or surah
        if last_surah and end:
            total = self.reference.total_ayahs_in(last_surah)
            if end > total:
                self.add_error("end_ayah", f"Surah {last_surah} has only {total} ayahs.")

        if start and end and last_surah == surah and end < start:
            self.add_error("end_ayah", "End ayah must be on or after the start ayah.")

        cleaned["layout"] = _blank_to_none(cleaned.get("layout"))
        cleaned["quality"] = _blank_to_none(cleaned.get("quality"))
        return cleaned


class SabaqParaEntryForm(forms.Form):
    juz = forms.IntegerField(required=False, min_value=1, max_value=30)
    quarters_revised = forms.ChoiceField(choices=[("", "---------")] + QuartersRevised.choices, required=False)
    quality = forms.ChoiceField(choices=QUALITY_CHOICES, required=False)

    def clean(self):
        cleaned = super().clean()
        cleaned["quarters_revised"] = _blank_to_none(cleaned.get("quarters_revised"))
        cleaned["quality"] = _blank_to_none(cleaned.get("quality"))
        return cleaned


class RevisionEntryForm(forms.Form):
    juz = forms.IntegerField(required=False, min_value=1, max_value=30)
    quarter_start = forms.IntegerField(required=False, min_value=1, max_value=4)
    quarters_covered = forms.IntegerField(required=False, min_value=1, max_value=4)
    quality = forms.ChoiceField(choices=QUALITY_CHOICES, required=False)

    def clean(self):
        cleaned = super().clean()
        start = cleaned.get("quarter_start")
        covered = cleaned.get("quarters_covered")
        if start and covered and start + covered - 1 > 4:
            self.add_error("quarters_covered", "A juz only has 4 quarters.")
        cleaned["quality"] = _blank_to_none(cleaned.get("quality"))
        return cleaned


class ReadingEntryForm(forms.Form):
    """The Nazirah-or-Qaida tab: which of the two, and the Qaida lesson when it is Qaida."""
    mode = forms.ChoiceField(
        choices=[(LessonType.NAZIRAH, LessonType.NAZIRAH.label), (LessonType.QAIDA, LessonType.QAIDA.label)],
        required=False,
    )
    qaida_lesson = forms.IntegerField(required=False, min_value=1)
    qaida_quality = forms.ChoiceField(choices=QUALITY_CHOICES, required=False)

    def clean(self):
        cleaned = super().clean()
        cleaned["mode"] = cleaned.get("mode") or LessonType.NAZIRAH
        cleaned["qaida_quality"] = _blank_to_none(cleaned.get("qaida_quality"))
        return cleaned


class EntryDetailsForm(forms.Form):
    entry_date = forms.DateField(required=False)
    teacher_notes = forms.CharField(required=False, widget=forms.Textarea)

    def clean_entry_date(self):
        value = self.cleaned_data.get("entry_date")
        today = timezone.localdate()
        if value and value > today:
            raise forms.ValidationError("Entry date cannot be in the future.")
        return value or today


def bind_entry_forms(data, reference=None):
    """Every form of the dialog, bound to one POST under its own prefix."""
    return {
        "entry": EntryDetailsForm(data, prefix="entry"),
        "sabaq": TrackEntryForm(data, prefix="sabaq", reference=reference),
        "nazirah": TrackEntryForm(data, prefix="nazirah", reference=reference),
        "sabaq_para": SabaqParaEntryForm(data, prefix="sabaq_para"),
        "revision": RevisionEntryForm(data, prefix="revision"),
        "reading": ReadingEntryForm(data, prefix="reading"),
    }
