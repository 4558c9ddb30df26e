import pytest

from diamondstats.ingest import coerce_count, coerce_rate


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        (42, 42),
        ("3.9", 3),
        (3.9, 3),
        (" 7 ", 7),
        ("1e3", 1000),
        (".5", 0),
        ("-5", -5),
    ],
)
def test_coerce_count_truncates_numeric_values(raw, expected):
    assert coerce_count(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "12abc", "N/A", True, False, [1], {"a": 1}, "nan", float("nan"), float("inf"), "１２", "٤٢"])
def test_coerce_count_defaults_to_zero(raw):
    assert coerce_count(raw) == 0


def test_coerce_rate_parses_numeric_values():
    assert coerce_rate(".305") == pytest.approx(0.305)
    assert coerce_rate("0.412") == pytest.approx(0.412)
    assert coerce_rate(1) == 1.0
    assert isinstance(coerce_rate(1), float)


def test_coerce_rate_keeps_zero_distinct_from_missing():
    assert coerce_rate("0") == 0.0
    assert coerce_rate("0") is not None
    assert coerce_rate(0) == 0.0


@pytest.mark.parametrize("raw", [None, "", "---", "N/A", False, [0.3], "０.３", "٠.٣"])
def test_coerce_rate_returns_none_for_non_numeric(raw):
    assert coerce_rate(raw) is None
