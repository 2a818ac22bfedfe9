from datetime import date, datetime

import pytest

from core.dates import parse_date, parse_date_or_none
from core.errors import InvalidDateError
from normalize import normalize_job_rows, parse_quantity


@pytest.mark.parametrize("raw,expected", [
    ("12,000", 12000),
    ("1,234,567", 1234567),
    (" 7 ", 7),
    (250, 250),
    ("", None),
    ("abc", None),
    (-3, None),
    (None, None),
])
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_parse_date_variants():
    assert parse_date("2024-01-03") == date(2024, 1, 3)
    assert parse_date("Jan 3, 2024") == date(2024, 1, 3)
    assert parse_date(datetime(2024, 1, 3, 15, 30)) == date(2024, 1, 3)
    assert parse_date(date(2024, 1, 3)) == date(2024, 1, 3)


@pytest.mark.parametrize("raw", ["2024-02-30", "soon", "", None, 12, "5", "March 3"])
def test_parse_date_rejects_junk(raw):
    with pytest.raises(InvalidDateError):
        parse_date(raw)
    assert parse_date_or_none(raw) is None


def test_normalize_job_rows():
    rows = [
        {"job_number": "41001.0", "quantity": "12,000", "start_date": "2024-01-01",
         "due_date": "2024-01-14", "job_name": " Spring catalog ", "client": None},
        {"job_number": None, "quantity": "5"},
        {"job_number": "41002", "quantity": "lots", "start_date": "bad", "due_date": None},
    ]
    jobs = normalize_job_rows(rows)
    assert [j.job_number for j in jobs] == ["41001", "41002"]
    first, second = jobs
    assert first.quantity == 12000
    assert first.start_date == date(2024, 1, 1)
    assert first.job_name == "Spring catalog"
    assert first.client == ""
    assert second.quantity == 0
    assert second.start_date is None
    assert second.due_date is None
