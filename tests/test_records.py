from ocr_targets.csv.records import CsvRecordSet, is_blank_row, matrix_to_records
from ocr_targets.csv.tokenizer import parse_csv


def test_empty_matrix():
    record_set = matrix_to_records([])

    assert record_set.headers == []
    assert record_set.records == []


def test_headers_are_trimmed_and_none_becomes_empty():
    record_set = matrix_to_records([[" a ", None, "b\t"]])

    assert record_set.headers == ["a", "", "b"]
    assert record_set.records == []


def test_short_row_fills_missing_cells_with_empty_string():
    record_set = matrix_to_records([["h1", "h2", "h3"], ["1"]])

    assert record_set.records == [{"h1": "1", "h2": "", "h3": ""}]


def test_long_row_drops_extra_cells():
    record_set = matrix_to_records([["h1"], ["1", "2", "3"]])

    assert record_set.records == [{"h1": "1"}]


def test_blank_rows_are_skipped():
    matrix = parse_csv("h1,h2,h3\n1,2,3\n,,\n  , \t,\n4,5,6\n")

    record_set = matrix_to_records(matrix)

    assert [r["h1"] for r in record_set.records] == ["1", "4"]
    assert record_set.skipped_rows == 2


def test_none_and_empty_rows_are_skipped():
    record_set = matrix_to_records([["h"], None, [], ["x"]])

    assert record_set.records == [{"h": "x"}]


def test_duplicate_headers_last_column_wins():
    record_set = matrix_to_records([["id", "id"], ["first", "second"]])

    assert record_set.records == [{"id": "second"}]


def test_values_are_coerced_to_strings():
    record_set = matrix_to_records([["n", "missing"], [5, None]])

    assert record_set.records == [{"n": "5", "missing": ""}]


def test_record_count_matches_non_blank_lines():
    text = "a,b\n1,2\n\n3,4\n,\n5,6"

    record_set = matrix_to_records(parse_csv(text))
    non_blank_lines = [line for line in text.split("\n") if line.replace(",", "").strip()]

    assert record_set.total_records == len(non_blank_lines) - 1


def test_is_blank_row():
    assert is_blank_row(None)
    assert is_blank_row([" ", ""])
    assert not is_blank_row(["", "x"])


def test_str_for_logging():
    assert str(CsvRecordSet(headers=["a"], records=[{"a": "1"}])) == (
        "CsvRecordSet(headers=1, records=1, skipped_rows=0)"
    )
