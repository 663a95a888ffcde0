from __future__ import annotations

import pytest

from gradesheet.matching.fuzzy import (
    find_row_by_name,
    find_row_by_number,
    levenshtein,
    match_student,
    name_similarity,
)
from gradesheet.models.config_models import ParserConfig
from gradesheet.models.match_result import NOT_FOUND


def _reference_distance(a: str, b: str) -> int:
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        table[i][0] = i
    for j in range(len(b) + 1):
        table[0][j] = j
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(table[i - 1][j] + 1, table[i][j - 1] + 1, table[i - 1][j - 1] + cost)
    return table[-1][-1]


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "abc", 3),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ],
)
def test_levenshtein_known_values(a, b, expected):
    assert levenshtein(a, b) == expected
    assert levenshtein(b, a) == expected


@pytest.mark.parametrize(
    "a,b",
    [
        ("احمد بناني", "أحمد بنانى"),
        ("سعيد", "سعيد العلوي"),
        ("intention", "execution"),
        ("abcdef", "fedcba"),
        ("x", "yyyy"),
    ],
)
def test_levenshtein_matches_full_table(a, b):
    assert levenshtein(a, b) == _reference_distance(a, b)


def test_name_similarity():
    assert name_similarity("abc", "abc") == 1.0
    assert name_similarity("", "") == 1.0
    assert name_similarity("محمد", "محمد امين") == 0.9
    assert name_similarity("abcd", "abce") == 0.75


def test_number_suffix_match():
    rows = [["id"], ["G000123456789"]]
    assert find_row_by_number("123456789", rows, 0) == 1
    assert find_row_by_number("G000123456789", [["id"], ["123456789"]], 0) == 1


def test_number_with_native_digits_in_roster_cell():
    assert find_row_by_number("123456789", [["id"], ["G١٢٣٤٥٦٧٨٩"]], 0) == 1
    assert find_row_by_number("٧", [["id"], ["G000000007"]], 0) == 1


def test_number_from_float_cell():
    assert find_row_by_number(123456789, [["id"], [123456789.0]], 0) == 1


def test_number_lookup_skips_header_and_empty_values():
    assert find_row_by_number("123", [["123"], ["999"]], 0) == NOT_FOUND
    assert find_row_by_number("", [["id"], ["123"]], 0) == NOT_FOUND
    assert find_row_by_number("abc", [["id"], ["123"]], 0) == NOT_FOUND
    # an empty id cell must not match everything
    assert find_row_by_number("123", [["id"], [None], ["x"], ["0123"]], 0) == 3


def test_name_match_ignores_diacritics():
    assert find_row_by_name("محمد", [["الاسم"], ["محمّد"]], 0) == 1


def test_name_match_collapses_allographs():
    rows = [["الاسم"], ["سعيد"], ["فاطمه"], ["احمد"]]
    assert find_row_by_name("فاطمة", rows, 0) == 2
    assert find_row_by_name("أحمد", rows, 0) == 3


def test_unknown_name_not_found():
    rows = [["الاسم"], ["أحمد بناني"], ["سعيد العلوي"], ["يوسف"]]
    assert find_row_by_name("زينب", rows, 0) == NOT_FOUND
    assert find_row_by_name("Zineb", rows, 0) == NOT_FOUND


def test_similarity_must_exceed_threshold():
    rows = [["name"], ["abcdefgxyz"]]
    # exactly 0.7 is not enough
    assert find_row_by_name("abcdefghij", rows, 0) == NOT_FOUND
    assert find_row_by_name("abcdefghiz", rows, 0) == 1


def test_threshold_from_config():
    rows = [["name"], ["abce"]]
    assert find_row_by_name("abcd", rows, 0) == 1
    assert find_row_by_name("abcd", rows, 0, ParserConfig(name_similarity_threshold=0.95)) == NOT_FOUND


def test_empty_name_never_matches():
    assert find_row_by_name("", [["name"], [""], ["أحمد"]], 0) == NOT_FOUND
    assert find_row_by_name("أحمد", [["name"], ["أحمد"]], -1) == NOT_FOUND


def test_match_student_id_then_name():
    rows = [["id", "name"], ["G000000007", "أحمد بناني"], ["G000000008", "محمّد أمين"]]

    by_id = match_student(7, "xyz", rows, 0, 1)
    assert (by_id.row_index, by_id.method, by_id.found) == (1, "id", True)

    by_name = match_student(99, "محمد امين", rows, 0, 1)
    assert (by_name.row_index, by_name.method, by_name.score) == (2, "name", 1.0)

    missing = match_student(99, "زينب", rows, 0, 1)
    assert not missing.found
    assert missing.row_index == NOT_FOUND
