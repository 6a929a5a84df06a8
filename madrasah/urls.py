# madrasah/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Juz / Surah / Ayah lookups for the entry dialog dropdowns
    path('quran/', include('apps.quran.urls')),

    # Dhor Book entry dialog, weekly grid and classroom summary
    path('tracker/', include('apps.tracker.urls')),
]
