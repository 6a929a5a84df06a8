from django.db import models


class Juz(models.Model):
    """One of the 30 parts. ``surah_list`` is the compact list parsed by ``reference.parse_surah_list``."""
    juz_number = models.PositiveSmallIntegerField(unique=True)
    surah_list = models.CharField(max_length=255)

    class Meta:
        db_table = "juz"
        ordering = ["juz_number"]
        verbose_name_plural = "juz"

    def __str__(self):
        return f"Juz {self.juz_number}"


class Surah(models.Model):
    surah_number = models.PositiveSmallIntegerField(unique=True)
    name = models.CharField(max_length=64, unique=True)
    total_ayat = models.PositiveSmallIntegerField()

    class Meta:
        db_table = "surah"
        ordering = ["surah_number"]

    def __str__(self):
        return f"{self.surah_number}. {self.name}"
