from types import SimpleNamespace

import pytest

from apps.quran.metadata import (
    TOTAL_AYAHS, juz_completion, juz_of_ayah, total_ayahs_in_juz,
    unique_ayahs_covered_in_juz,
)


def entry(surah, start, end, end_surah=None):
    return SimpleNamespace(current_surah=surah, start_ayat=start, end_ayat=end, end_surah=end_surah)


def test_total_ayahs():
    assert TOTAL_AYAHS == 6236
    assert sum(total_ayahs_in_juz(j) for j in range(1, 31)) == 6236


@pytest.mark.parametrize("surah, ayah, juz", [
    (1, 1, 1),
    (2, 141, 1),
    (2, 142, 2),
    (2, 286, 3),
    (18, 74, 15),
    (18, 75, 16),
    (114, 6, 30),
])
def test_juz_of_ayah(surah, ayah, juz):
    assert juz_of_ayah(surah, ayah) == juz


def test_juz_of_invalid_ayah():
    assert juz_of_ayah(1, 8) is None
    assert juz_of_ayah(115, 1) is None


def test_total_ayahs_in_juz():
    assert total_ayahs_in_juz(1) == 148
    assert total_ayahs_in_juz(31) == 0


def test_overlapping_entries_count_once():
    covered = unique_ayahs_covered_in_juz([entry(1, 1, 5), entry(1, 3, 7)], 1)
    assert covered == {f"1:{a}" for a in range(1, 8)}


def test_only_verses_inside_the_juz_count():
    covered = unique_ayahs_covered_in_juz([entry(2, 140, 143)], 2)
    assert covered == {"2:142", "2:143"}


def test_entry_across_surahs():
    covered = unique_ayahs_covered_in_juz([entry(1, 6, 2, end_surah=2)], 1)
    assert covered == {"1:6", "1:7", "2:1", "2:2"}


def test_incomplete_entries_are_ignored():
    assert unique_ayahs_covered_in_juz([entry(1, None, 5), entry(None, 1, 5)], 1) == set()


def test_juz_completion():
    # 74 of the 148 verses of juz 1
    entries = [entry(1, 1, 7), entry(2, 1, 67)]
    assert juz_completion(entries, 1) == 50.0
    assert juz_completion([], 1) == 0.0
    assert juz_completion(entries, 31) == 0.0
