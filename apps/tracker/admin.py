from django.contrib import admin
from .models import Student, ProgressEntry, SabaqParaEntry, JuzRevisionEntry


# ========== Helpers ==========
def _range_title(obj):
    s = obj.start_ayat
    e = obj.end_ayat
    if obj.current_surah and s and e:
        if obj.end_surah and obj.end_surah != obj.current_surah:
            return f"Surah {obj.current_surah}:{s} to {obj.end_surah}:{e}"
        return f"Surah {obj.current_surah} ayah {s} to {e}"
    if obj.qaida_lesson:
        return f"Qaida lesson {obj.qaida_lesson}"
    return "-"


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('student_no', 'name', 'joined_at', 'is_active')
    search_fields = ('student_no', 'name')
    list_filter = ('is_active',)


@admin.register(ProgressEntry)
class ProgressEntryAdmin(admin.ModelAdmin):
    list_display = ('student', 'date', 'lesson_type', 'current_juz', 'range_title', 'pages_memorized', 'memorization_quality')
    list_filter = ('date', 'lesson_type', 'memorization_quality')
    search_fields = ('student__name', 'student__student_no')

    def range_title(self, obj):
        return _range_title(obj)
    range_title.short_description = "Range"


@admin.register(SabaqParaEntry)
class SabaqParaEntryAdmin(admin.ModelAdmin):
    list_display = ('student', 'revision_date', 'juz_number', 'quarters_revised', 'quality_rating')
    list_filter = ('revision_date', 'quality_rating')
    search_fields = ('student__name',)


@admin.register(JuzRevisionEntry)
class JuzRevisionEntryAdmin(admin.ModelAdmin):
    list_display = ('student', 'revision_date', 'dhor_slot', 'juz_revised', 'quarter_start', 'quarters_covered', 'memorization_quality')
    list_filter = ('revision_date', 'dhor_slot', 'memorization_quality')
    search_fields = ('student__name',)
