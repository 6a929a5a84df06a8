from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_GET, require_POST

from apps.quran.metadata import juz_completion
from apps.quran.reference import load_reference
from .dhor_book import classroom_summary, daily_checklist, weekly_grid
from .entry_form import EntryDialog, open_entry_dialog
from .exceptions import DhorSlotsFull, SubmissionError
from .forms import bind_entry_forms
from .models import Student
from .prefill import track_entries, Track
from .submission import save_submission


def _day_param(request, name):
    """``?name=YYYY-MM-DD``, today when absent; None when malformed."""
    raw = request.GET.get(name)
    if not raw:
        return timezone.localdate()
    try:
        return parse_date(raw)
    except ValueError:
        return None


# ========= Entry dialog =========

@login_required
@require_GET
def entry_defaults(request, student_id):
    """
    What the entry dialog opens with: both Surah/Ayah tracks prefilled from
    the student's last lessons, plus the option lists that go with them.
    """
    student = get_object_or_404(Student, pk=student_id)
    reference = load_reference()
    dialog = open_entry_dialog(student.pk, timezone.localdate(), reference)

    return JsonResponse({
        'status': 'success',
        'student': {'id': student.pk, 'name': student.name},
        'entry_date': dialog.entry_date.isoformat(),
        'juz_options': reference.juz_numbers,
        'sabaq': dialog.sabaq.as_dict(),
        'nazirah': dialog.nazirah.as_dict(),
    })


def _build_dialog(student, cleaned, reference):
    details = cleaned["entry"]
    dialog = EntryDialog(student.pk, details["entry_date"])
    dialog.teacher_notes = details["teacher_notes"] or None
    dialog.reference_loaded(reference)

    dialog.sabaq.replay(cleaned["sabaq"])
    dialog.nazirah.replay(cleaned["nazirah"])

    para = cleaned["sabaq_para"]
    dialog.sabaq_para.juz = para["juz"]
    dialog.sabaq_para.quarters_revised = para["quarters_revised"]
    dialog.sabaq_para.quality = para["quality"]

    revision = cleaned["revision"]
    dialog.revision.juz = revision["juz"]
    dialog.revision.quarter_start = revision["quarter_start"]
    dialog.revision.quarters_covered = revision["quarters_covered"]
    dialog.revision.quality = revision["quality"]

    reading = cleaned["reading"]
    dialog.reading_mode = reading["mode"]
    dialog.qaida_lesson = reading["qaida_lesson"]
    dialog.qaida_quality = reading["qaida_quality"]
    return dialog


@login_required
@require_POST
def submit_entry(request, student_id):
    student = get_object_or_404(Student, pk=student_id)
    reference = load_reference()

    forms = bind_entry_forms(request.POST, reference)
    errors = {name: form.errors.get_json_data() for name, form in forms.items() if not form.is_valid()}
    if errors:
        return JsonResponse({
            'status': 'error',
            'message': 'Please correct the highlighted fields.',
            'errors': errors,
        }, status=400)

    dialog = _build_dialog(student, {name: form.cleaned_data for name, form in forms.items()}, reference)
    submission = dialog.assemble()
    if submission.is_empty():
        return JsonResponse({'status': 'error', 'message': 'Nothing to save: no section was completed.'}, status=400)

    try:
        result = save_submission(submission)
    except SubmissionError as e:
        status = 409 if isinstance(e.cause, DhorSlotsFull) else 500
        return JsonResponse({
            'status': 'error',
            'message': str(e),
            'failed': e.record_type,
            'saved': [type(r).__name__ for r in e.saved],
        }, status=status)

    return JsonResponse({
        'status': 'success',
        'message': f'Dhor book entry saved for {student.name}.',
        'saved': result.summary(),
    })


# ========= Dhor Book =========

@login_required
@require_GET
def dhor_book_week(request, student_id):
    student = get_object_or_404(Student, pk=student_id)
    day = _day_param(request, 'week')
    if day is None:
        return JsonResponse({'status': 'error', 'message': 'Invalid week date.'}, status=400)
    return JsonResponse({'student': student.pk, 'rows': weekly_grid(student, day)})


@login_required
@require_GET
def student_checklist(request, student_id):
    student = get_object_or_404(Student, pk=student_id)
    day = _day_param(request, 'date')
    if day is None:
        return JsonResponse({'status': 'error', 'message': 'Invalid date.'}, status=400)
    return JsonResponse(daily_checklist(student, day))


@login_required
@require_GET
def student_juz_progress(request, student_id):
    """Percent of each Juz covered by the student's Sabaq lessons, Juz with no lessons left out."""
    student = get_object_or_404(Student, pk=student_id)
    entries = list(track_entries(student.pk, Track.SABAQ).filter(current_surah__isnull=False))

    progress = []
    for juz in sorted({e.current_juz for e in entries if e.current_juz}):
        progress.append({'juz': juz, 'completion': juz_completion(entries, juz)})
    return JsonResponse({'student': student.pk, 'juz': progress})


@login_required
@require_GET
def classroom_records(request):
    day = _day_param(request, 'date')
    if day is None:
        return JsonResponse({'status': 'error', 'message': 'Invalid date.'}, status=400)

    students = Student.objects.filter(is_active=True)
    ids = request.GET.get('students')
    if ids:
        try:
            students = students.filter(pk__in=[int(i) for i in ids.split(',')])
        except ValueError:
            return JsonResponse({'status': 'error', 'message': 'Invalid student list.'}, status=400)

    return JsonResponse({'date': day.isoformat(), 'students': classroom_summary(students, day)})
