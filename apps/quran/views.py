# apps/quran/views.py
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .reference import load_reference


@login_required
@require_GET
def juz_list(request):
    reference = load_reference()
    return JsonResponse({'juz': reference.juz_numbers})


@login_required
@require_GET
def juz_surahs(request, juz_number):
    """
    Surah dropdown for one Juz. An unparsable or empty surah_list gives an
    empty list, the dialog shows "no surahs found" for it.
    """
    reference = load_reference()
    if juz_number not in reference.juz_lists:
        return JsonResponse({'status': 'error', 'message': f'Juz {juz_number} not found.'}, status=404)

    surahs = [
        {'surah_number': s.surah_number, 'name': s.name, 'total_ayat': s.total_ayat}
        for s in reference.surahs_in_juz(juz_number)
    ]
    return JsonResponse({'juz': juz_number, 'surahs': surahs})


@login_required
@require_GET
def surah_ayahs(request, surah_number):
    reference = load_reference()
    surah = reference.surah(surah_number)
    if surah is None:
        return JsonResponse({'status': 'error', 'message': f'Surah {surah_number} not found.'}, status=404)

    return JsonResponse({
        'surah_number': surah.surah_number,
        'name': surah.name,
        'total_ayat': reference.total_ayahs_in(surah_number),
        'ayahs': reference.ayah_options(surah_number),
        'juz': reference.find_juz_containing(surah_number),
    })
