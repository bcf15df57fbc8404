from datetime import date, datetime

from stc_utils.normalizers import parse_date, to_iso_date


def test_iso_dates_and_timestamps():
    assert parse_date("2025-04-25") == date(2025, 4, 25)
    assert parse_date("2025-04-25T18:30:00") == date(2025, 4, 25)


def test_other_layouts():
    assert to_iso_date("2021/5/17") == "2021-05-17"
    assert to_iso_date("May 5, 21") == "2021-05-05"
    assert to_iso_date("September 9, 2024") == "2024-09-09"
    assert to_iso_date("12/31/2020") == "2020-12-31"
    assert to_iso_date("31/12/2020") == "2020-12-31"


def test_date_objects_pass_through():
    assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_date(datetime(2024, 2, 29, 12, 0)) == date(2024, 2, 29)


def test_garbage_returns_none():
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date("not a date") is None
    assert parse_date("2025-02-30") is None
    assert parse_date("13/13/2020") is None
    assert parse_date(20250101) is None
