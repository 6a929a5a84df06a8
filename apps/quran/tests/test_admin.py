import logging

import pytest
from django.contrib import admin

from apps.quran.admin import JuzAdmin
from apps.quran.models import Juz
from apps.quran.reference import load_reference

pytestmark = pytest.mark.django_db


@pytest.fixture
def juz_admin():
    return JuzAdmin(Juz, admin.site)


@pytest.fixture
def edited_juz():
    juz = Juz.objects.get(juz_number=5)
    juz.surah_list = "4, Nowhere"
    juz.save()
    return juz


def test_columns_show_parse_result(juz_admin, edited_juz):
    assert juz_admin.parsed_surahs(edited_juz) == "4"
    assert juz_admin.skipped_tokens(edited_juz) == "Nowhere (unknown surah name)"
    assert juz_admin.skipped_tokens(Juz.objects.get(juz_number=1)) == "-"


def test_rows_render_from_cached_snapshot(juz_admin, edited_juz, django_assert_num_queries, caplog):
    load_reference()
    rows = list(Juz.objects.all())

    caplog.clear()
    with caplog.at_level(logging.WARNING), django_assert_num_queries(0):
        for juz in rows:
            juz_admin.parsed_surahs(juz)
            juz_admin.skipped_tokens(juz)

    assert "Nowhere" not in caplog.text
