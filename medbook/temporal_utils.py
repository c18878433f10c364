"""Normalization of loosely-typed date and time input.

Clients (web forms, the voice agent) send dates as ISO strings, epoch
milliseconds or hand-typed ``D/M/YYYY`` strings, and times as ``HH:MM`` or
bare numerals such as ``930``. Everything is reduced to a calendar
``date`` and a zero-padded 24-hour ``HH:MM`` string, which is the shape used
for storage and for lexicographic range checks.
"""
import re
from datetime import date, datetime, time
from typing import Optional, Tuple, Union

from .enums import DateOrder

DateInput = Union[str, int, float, date, datetime]
TimeInput = Union[str, int]

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T ].+)?")
SLASH_DATE_PATTERN = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")
COLON_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{2})")
COMPACT_TIME_PATTERN = re.compile(r"[0-9]{3,4}")
CANONICAL_TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


class TemporalInputError(ValueError):
    pass


class InvalidDateError(TemporalInputError):
    pass


class InvalidTimeError(TemporalInputError):
    pass


class InvalidDateOrTimeError(TemporalInputError):
    pass


# =========================
# Dates
# =========================
def _calendar_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _coerce_date_order(date_order) -> Optional[DateOrder]:
    if date_order is None or date_order == "":
        return None
    try:
        return DateOrder(str(getattr(date_order, "value", date_order)).upper())
    except ValueError:
        raise InvalidDateError(f"Unknown date format '{date_order}'. Use DMY or MDY")


def _parse_iso(value: str) -> Optional[date]:
    if not ISO_DATE_PATTERN.fullmatch(value):
        return None
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        # Calendar date is taken as written, no timezone shift
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _parse_slash(value: str, date_order: Optional[DateOrder]) -> Optional[date]:
    match = SLASH_DATE_PATTERN.fullmatch(value)
    if not match:
        return None
    first, second, year = (int(part) for part in match.groups())
    if date_order is DateOrder.DMY:
        return _calendar_date(year, second, first)
    if date_order is DateOrder.MDY:
        return _calendar_date(year, first, second)
    # No hint: day-first wins whenever it is a real calendar date
    return _calendar_date(year, second, first) or _calendar_date(year, first, second)


def normalize_date(value: DateInput, date_order=None) -> date:
    """Reduce a date-like value to a calendar date.

    Resolution order: native date/datetime, epoch milliseconds, ISO-8601
    string, then ``D/M/YYYY``. Slash dates follow ``date_order`` when given;
    otherwise day/month/year is tried first and month/day/year only when the
    day-first reading is not a valid date.

    Raises InvalidDateError.
    """
    order = _coerce_date_order(date_order)

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000).date()
        except (ValueError, OverflowError, OSError):
            raise InvalidDateError(f"Invalid timestamp: {value}")

    if isinstance(value, str):
        text = value.strip()
        parsed = _parse_iso(text) or _parse_slash(text, order)
        if parsed:
            return parsed
        raise InvalidDateError(f"Invalid date: '{value}'. Use YYYY-MM-DD or DD/MM/YYYY")

    raise InvalidDateError("Invalid date: expected a string, a timestamp or a date")


def is_ambiguous_date(value) -> bool:
    """True for slash dates that read as two different valid dates."""
    if not isinstance(value, str):
        return False
    match = SLASH_DATE_PATTERN.fullmatch(value.strip())
    if not match:
        return False
    first, second, year = (int(part) for part in match.groups())
    day_first = _calendar_date(year, second, first)
    month_first = _calendar_date(year, first, second)
    return bool(day_first and month_first and day_first != month_first)


def is_valid_future_date(day: date, allow_today: bool = True) -> bool:
    """Compare calendar dates only; time of day is ignored."""
    if isinstance(day, datetime):
        day = day.date()
    today = date.today()
    if allow_today:
        return day >= today
    return day > today


def weekday_index(day: date) -> int:
    """0=Sunday ... 6=Saturday, the numbering used by schedule entries."""
    return (day.weekday() + 1) % 7


def format_for_response(day: date) -> str:
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


# =========================
# Times
# =========================
def _format_time(hours: int, minutes: int) -> Optional[str]:
    if 0 <= hours < 24 and 0 <= minutes < 60:
        return f"{hours:02d}:{minutes:02d}"
    return None


def normalize_time(value: TimeInput) -> str:
    """Return a zero-padded ``HH:MM`` string.

    Accepts ``H:MM``/``HH:MM`` or a 3-4 digit numeral read as hour then
    minute after left-padding to four digits (``"930"`` -> ``"09:30"``).

    Raises InvalidTimeError.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidTimeError("Invalid time: expected HH:MM or a 3-4 digit number")

    text = str(value).strip()

    match = COLON_TIME_PATTERN.fullmatch(text)
    if match:
        formatted = _format_time(int(match.group(1)), int(match.group(2)))
        if formatted:
            return formatted

    if COMPACT_TIME_PATTERN.fullmatch(text):
        padded = text.zfill(4)
        formatted = _format_time(int(padded[:2]), int(padded[2:]))
        if formatted:
            return formatted

    raise InvalidTimeError(f"Invalid time: '{value}'. Use HH:MM")


def normalize_date_and_time(date_value: DateInput, time_value: TimeInput, date_order=None) -> Tuple[date, str]:
    try:
        return normalize_date(date_value, date_order), normalize_time(time_value)
    except TemporalInputError as exc:
        raise InvalidDateOrTimeError(str(exc)) from exc


def combine_date_and_time(day: date, hhmm: str) -> datetime:
    """Merge a calendar date and a canonical time into one naive datetime."""
    match = CANONICAL_TIME_PATTERN.fullmatch(hhmm or "")
    if not match:
        raise InvalidTimeError(f"Invalid time: '{hhmm}'. Use HH:MM")
    if isinstance(day, datetime):
        day = day.date()
    try:
        return datetime.combine(day, time(int(match.group(1)), int(match.group(2))))
    except ValueError:
        raise InvalidTimeError(f"Invalid time: '{hhmm}'. Use HH:MM")


def time_to_minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"
