import pytest
from django.urls import reverse

from apps.quran.models import Juz

pytestmark = pytest.mark.django_db


def test_login_required(client):
    response = client.get(reverse('quran:juz_list'))
    assert response.status_code == 302


def test_juz_list(teacher_client):
    response = teacher_client.get(reverse('quran:juz_list'))
    assert response.json() == {'juz': list(range(1, 31))}


def test_juz_surahs(teacher_client):
    response = teacher_client.get(reverse('quran:juz_surahs', args=[1]))
    assert response.status_code == 200
    data = response.json()
    assert data['juz'] == 1
    assert data['surahs'][1] == {'surah_number': 2, 'name': 'Al-Baqarah', 'total_ayat': 286}


def test_juz_with_unparsable_list_gives_no_surahs(teacher_client):
    juz = Juz.objects.get(juz_number=5)
    juz.surah_list = "nonsense"
    juz.save()
    response = teacher_client.get(reverse('quran:juz_surahs', args=[5]))
    assert response.status_code == 200
    assert response.json()['surahs'] == []


def test_unknown_juz(teacher_client):
    response = teacher_client.get(reverse('quran:juz_surahs', args=[31]))
    assert response.status_code == 404
    assert response.json()['status'] == 'error'


def test_surah_ayahs(teacher_client):
    data = teacher_client.get(reverse('quran:surah_ayahs', args=[1])).json()
    assert data['name'] == 'Al-Fatihah'
    assert data['ayahs'] == [1, 2, 3, 4, 5, 6, 7]
    assert data['juz'] == 1


def test_unknown_surah(teacher_client):
    assert teacher_client.get(reverse('quran:surah_ayahs', args=[115])).status_code == 404


def test_post_not_allowed(teacher_client):
    assert teacher_client.post(reverse('quran:juz_list')).status_code == 405
