from datetime import date, datetime, timedelta

import pytest

from medbook.temporal_utils import (
    InvalidDateError,
    InvalidDateOrTimeError,
    InvalidTimeError,
    combine_date_and_time,
    format_for_response,
    is_ambiguous_date,
    is_valid_future_date,
    normalize_date,
    normalize_date_and_time,
    normalize_time,
    weekday_index,
)


@pytest.mark.parametrize("raw,expected", [
    ("930", "09:30"),
    (930, "09:30"),
    (1430, "14:30"),
    ("0000", "00:00"),
    ("9:05", "09:05"),
    ("23:59", "23:59"),
    (" 10:30 ", "10:30"),
])
def test_normalize_time_accepts_supported_shapes(raw, expected):
    assert normalize_time(raw) == expected


def test_normalize_time_compact_matches_division():
    for n in (100, 905, 1159, 2359):
        assert normalize_time(n) == f"{n // 100:02d}:{n % 100:02d}"


@pytest.mark.parametrize("raw", ["24:00", "12:60", "2400", "960", "12", "12345", "abc", "", None, 9.5, True])
def test_normalize_time_rejects_out_of_range_or_malformed(raw):
    with pytest.raises(InvalidTimeError):
        normalize_time(raw)


def test_normalize_date_iso_and_datetime_strings():
    assert normalize_date("2030-03-04") == date(2030, 3, 4)
    assert normalize_date("2030-03-04T23:30:00+05:00") == date(2030, 3, 4)
    assert normalize_date("2030-03-04T10:00:00Z") == date(2030, 3, 4)


def test_normalize_date_native_values():
    assert normalize_date(date(2030, 1, 2)) == date(2030, 1, 2)
    assert normalize_date(datetime(2030, 1, 2, 15, 45)) == date(2030, 1, 2)


def test_normalize_date_epoch_millis_uses_local_calendar():
    ms = int(datetime(2030, 6, 1, 12, 0).timestamp() * 1000)
    assert normalize_date(ms) == date(2030, 6, 1)
    assert normalize_date(float(ms)) == date(2030, 6, 1)


def test_epoch_millis_early_today_is_still_today():
    early = datetime.combine(date.today(), datetime.min.time()).replace(minute=30)
    day = normalize_date(int(early.timestamp() * 1000))
    assert day == date.today()
    assert is_valid_future_date(day) is True


def test_normalize_date_slash_falls_back_to_month_first_only_when_needed():
    assert normalize_date("23/10/2025") == date(2025, 10, 23)
    assert normalize_date("10/23/2025") == date(2025, 10, 23)
    # Both readings valid: day-first wins without a hint
    assert normalize_date("05/10/2025") == date(2025, 10, 5)


def test_normalize_date_honours_format_hint():
    assert normalize_date("05/10/2025", "MDY") == date(2025, 5, 10)
    assert normalize_date("05/10/2025", "dmy") == date(2025, 10, 5)
    with pytest.raises(InvalidDateError):
        normalize_date("10/23/2025", "DMY")
    with pytest.raises(InvalidDateError):
        normalize_date("05/10/2025", "YMD")


@pytest.mark.parametrize("raw", ["2030-02-30", "31/31/2030", "tomorrow", "2030/01/01", "", [2030, 1, 1]])
def test_normalize_date_rejects_invalid(raw):
    with pytest.raises(InvalidDateError):
        normalize_date(raw)


def test_is_ambiguous_date():
    assert is_ambiguous_date("05/10/2025") is True
    assert is_ambiguous_date("23/10/2025") is False
    assert is_ambiguous_date("07/07/2025") is False
    assert is_ambiguous_date("2025-10-05") is False


def test_is_valid_future_date():
    today = date.today()
    assert is_valid_future_date(today) is True
    assert is_valid_future_date(today + timedelta(days=3)) is True
    assert is_valid_future_date(today - timedelta(days=1)) is False
    assert is_valid_future_date(today, allow_today=False) is False


def test_weekday_index_starts_on_sunday():
    assert weekday_index(date(2024, 6, 2)) == 0  # Sunday
    assert weekday_index(date(2024, 6, 3)) == 1  # Monday
    assert weekday_index(date(2024, 6, 8)) == 6  # Saturday


def test_combine_and_format():
    assert combine_date_and_time(date(2030, 1, 2), "09:30") == datetime(2030, 1, 2, 9, 30)
    assert format_for_response(date(2030, 1, 2)) == "2030-01-02"
    with pytest.raises(InvalidTimeError):
        combine_date_and_time(date(2030, 1, 2), "9:30")


def test_normalize_date_and_time_wraps_either_failure():
    assert normalize_date_and_time("2030-01-02", "930") == (date(2030, 1, 2), "09:30")
    with pytest.raises(InvalidDateOrTimeError):
        normalize_date_and_time("nope", "09:30")
    with pytest.raises(InvalidDateOrTimeError):
        normalize_date_and_time("2030-01-02", "25:00")
