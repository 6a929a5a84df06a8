from django.contrib import admin

from .models import Juz, Surah
from .reference import load_reference


# ========== Juz ==========
@admin.register(Juz)
class JuzAdmin(admin.ModelAdmin):
    list_display = ("juz_number", "surah_list", "parsed_surahs", "skipped_tokens")
    search_fields = ("surah_list",)
    ordering = ("juz_number",)

    def _parsed(self, obj):
        # the snapshot is rebuilt on every Juz/Surah save, so it matches the row
        return load_reference().parsed_juz(obj.juz_number)

    def parsed_surahs(self, obj):
        return ", ".join(str(n) for n in self._parsed(obj).surahs) or "-"
    parsed_surahs.short_description = "Surahs"

    def skipped_tokens(self, obj):
        skipped = self._parsed(obj).skipped
        return "; ".join(f"{s.token} ({s.reason})" for s in skipped) or "-"
    skipped_tokens.short_description = "Unparsed tokens"


# ========== Surah ==========
@admin.register(Surah)
class SurahAdmin(admin.ModelAdmin):
    list_display = ("surah_number", "name", "total_ayat")
    search_fields = ("name",)
    ordering = ("surah_number",)
