from django.urls import path
from . import views

app_name = 'tracker'

urlpatterns = [
    path('students/<int:student_id>/entry/', views.entry_defaults, name='entry_defaults'),
    path('students/<int:student_id>/entry/submit/', views.submit_entry, name='submit_entry'),
    path('students/<int:student_id>/dhor-book/', views.dhor_book_week, name='dhor_book_week'),
    path('students/<int:student_id>/checklist/', views.student_checklist, name='student_checklist'),
    path('students/<int:student_id>/juz-progress/', views.student_juz_progress, name='student_juz_progress'),
    path('classroom/', views.classroom_records, name='classroom_records'),
]
