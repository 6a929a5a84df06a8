from django.urls import path
from . import views

app_name = 'quran'

urlpatterns = [
    path('juz/', views.juz_list, name='juz_list'),
    path('juz/<int:juz_number>/surahs/', views.juz_surahs, name='juz_surahs'),
    path('surahs/<int:surah_number>/ayahs/', views.surah_ayahs, name='surah_ayahs'),
]
