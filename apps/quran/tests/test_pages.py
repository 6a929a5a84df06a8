import pytest

from apps.quran.pages import (
    QuranLayout, calculate_pages, count_verses, default_layout,
    infer_layout, normalize_layout, pages_for_verse_count,
)


@pytest.mark.parametrize("layout, start, end, pages", [
    (QuranLayout.THIRTEEN_LINE, 1, 8, 1),
    (QuranLayout.THIRTEEN_LINE, 1, 9, 2),
    (QuranLayout.FIFTEEN_LINE, 1, 10, 1),
    (QuranLayout.FIFTEEN_LINE, 1, 11, 2),
    ("15", 5, 5, 1),
    ("13", 1, 286, 36),
])
def test_calculate_pages(layout, start, end, pages):
    assert calculate_pages(layout, start, end) == pages


@pytest.mark.parametrize("start, end", [(5, 4), (0, 3), (None, 3)])
def test_calculate_pages_rejects_bad_range(start, end):
    with pytest.raises(ValueError):
        calculate_pages(QuranLayout.FIFTEEN_LINE, start, end)


def test_unknown_layout():
    with pytest.raises(ValueError):
        pages_for_verse_count("16", 10)


@pytest.mark.parametrize("value, expected", [
    (13, QuranLayout.THIRTEEN_LINE),
    ("15", QuranLayout.FIFTEEN_LINE),
    ("13-line", QuranLayout.THIRTEEN_LINE),
    (QuranLayout.FIFTEEN_LINE, QuranLayout.FIFTEEN_LINE),
    ("", None),
    ("12", None),
    (None, None),
])
def test_normalize_layout(value, expected):
    assert normalize_layout(value) == expected


def test_default_layout_from_settings(settings):
    settings.QURAN_DEFAULT_LAYOUT = "13"
    assert default_layout() == QuranLayout.THIRTEEN_LINE
    settings.QURAN_DEFAULT_LAYOUT = "bogus"
    assert default_layout() == QuranLayout.FIFTEEN_LINE


@pytest.mark.parametrize("pages, verses, expected", [
    (2, 16, QuranLayout.THIRTEEN_LINE),
    (2, 20, QuranLayout.FIFTEEN_LINE),
    (1, 9, QuranLayout.FIFTEEN_LINE),
    (3, 20, QuranLayout.THIRTEEN_LINE),
    (0, 10, None),
    (2, None, None),
    (None, 10, None),
])
def test_infer_layout(pages, verses, expected):
    assert infer_layout(pages, verses) == expected


def test_count_verses_within_surah(reference):
    assert count_verses(reference, 2, 10, 2, 19) == 10


def test_count_verses_across_surahs(reference):
    # 2:280-286 is 7 verses, then all of 3 (200), then 4:1-5
    assert count_verses(reference, 2, 280, 4, 5) == 7 + 200 + 5


def test_count_verses_backwards(reference):
    with pytest.raises(ValueError):
        count_verses(reference, 3, 1, 2, 5)
