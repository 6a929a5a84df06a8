# -*- coding: utf-8 -*-
from django.db import migrations

from apps.quran.data import JUZ_SURAH_LISTS, SURAHS


def seed_reference(apps, schema_editor):
    """
    Fill the juz and surah tables with the standard 30 parts and 114 chapters.
    """
    Juz = apps.get_model("quran", "Juz")
    Surah = apps.get_model("quran", "Surah")

    Surah.objects.bulk_create([
        Surah(surah_number=number, name=name, total_ayat=total)
        for number, name, total in SURAHS
    ])
    Juz.objects.bulk_create([
        Juz(juz_number=number, surah_list=surah_list)
        for number, surah_list in JUZ_SURAH_LISTS.items()
    ])


def unseed_reference(apps, schema_editor):
    apps.get_model("quran", "Juz").objects.all().delete()
    apps.get_model("quran", "Surah").objects.all().delete()


class Migration(migrations.Migration):

    dependencies = [
        ("quran", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_reference, unseed_reference),
    ]
