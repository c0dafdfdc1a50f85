"""Timestamps in the many shapes that log records carry them."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from fractions import Fraction
from typing import Any, Callable

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_NUMBERS = {name: index for index, name in enumerate(_MONTHS, start=1)}


class TimestampKind(enum.Enum):
    """The format a timestamp was recognised in."""

    UNIX = "unix"
    RFC3339 = "rfc3339"
    ISO8601 = "iso8601"
    RFC2822 = "rfc2822"
    NGINX = "nginx"
    UNIX_FLOAT = "unix_float"
    UNIX_FLOAT_STRING = "unix_float_string"


@dataclass(frozen=True)
class AnyTimestamp:
    """A point in time together with the format it was parsed from."""

    kind: TimestampKind
    time: datetime


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _offset(sign: str, hours: str, minutes: str | None) -> timezone:
    hh = int(hours)
    mm = int(minutes) if minutes else 0
    if hh > 23 or mm > 59:
        raise ValueError("offset out of range")
    delta = timedelta(hours=hh, minutes=mm)
    return timezone(-delta if sign == "-" else delta)


def _fraction_micros(digits: str | None) -> int:
    if not digits:
        return 0
    return int((digits + "000000")[:6])


def _from_unix_nanos(nanos: int) -> datetime:
    seconds, remainder = divmod(nanos, _NANOS_PER_SECOND)
    micros = (remainder + 500) // 1000
    try:
        return _EPOCH + timedelta(seconds=seconds, microseconds=micros)
    except OverflowError as exc:
        raise ValueError("timestamp out of range") from exc


def _parse_unix(value: Any) -> datetime:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError("expected an integer Unix timestamp")
    return _from_unix_nanos(value * _NANOS_PER_SECOND)


_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))"
)


def _parse_rfc3339(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise ValueError("not an RFC 3339 timestamp")
    year, month, day, hour, minute, second, frac, zulu, sign, oh, om = match.groups()
    tz = timezone.utc if zulu else _offset(sign, oh, om)
    return datetime(int(year), int(month), int(day), int(hour), int(minute),
                    int(second), _fraction_micros(frac), tzinfo=tz)


_ISO_DATE = re.compile(
    r"""(?P<year>\d{4})(?:
        -(?P<ext_month>\d{2})-(?P<ext_day>\d{2})
      | -W(?P<ext_week>\d{2})-(?P<ext_wday>\d)
      | -(?P<ext_ordinal>\d{3})
      | W(?P<week>\d{2})(?P<wday>\d)
      | (?P<month>\d{2})(?P<day>\d{2})
      | (?P<ordinal>\d{3}))""",
    re.VERBOSE,
)
_ISO_TIME = re.compile(
    r"(?P<hour>\d{2})(?:(?P<sep>:?)(?P<minute>\d{2})(?:(?P=sep)(?P<second>\d{2}))?)?"
    r"(?:[.,](?P<frac>\d+))?"
    r"(?:(?P<zulu>Z)|(?P<sign>[+-])(?P<oh>\d{2})(?::?(?P<om>\d{2}))?)"
)


def _iso_date(text: str) -> date:
    match = _ISO_DATE.fullmatch(text)
    if match is None:
        raise ValueError("not an ISO 8601 date")
    parts = match.groupdict()
    year = int(parts["year"])
    month = parts["ext_month"] or parts["month"]
    if month is not None:
        return date(year, int(month), int(parts["ext_day"] or parts["day"]))
    week = parts["ext_week"] or parts["week"]
    if week is not None:
        return date.fromisocalendar(year, int(week), int(parts["ext_wday"] or parts["wday"]))
    ordinal = int(parts["ext_ordinal"] or parts["ordinal"])
    first = date(year, 1, 1)
    days_in_year = (date(year + 1, 1, 1) - first).days if year < 9999 else 365
    if not 1 <= ordinal <= days_in_year:
        raise ValueError("ordinal day out of range")
    return first + timedelta(days=ordinal - 1)


def _parse_iso8601(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    date_text, separator, time_text = value.partition("T")
    if not separator:
        raise ValueError("not an ISO 8601 date-time")
    day = _iso_date(date_text)
    match = _ISO_TIME.fullmatch(time_text)
    if match is None:
        raise ValueError("not an ISO 8601 time")
    parts = match.groupdict()
    tz = timezone.utc if parts["zulu"] else _offset(parts["sign"], parts["oh"], parts["om"])
    minute, second = parts["minute"], parts["second"]
    base = datetime(day.year, day.month, day.day, int(parts["hour"]),
                    int(minute or 0), int(second or 0), tzinfo=tz)
    frac = parts["frac"]
    if not frac:
        return base
    unit = 3600 if minute is None else 60 if second is None else 1
    micros = Fraction(int(frac), 10 ** len(frac)) * unit * 1_000_000
    return base + timedelta(microseconds=int(micros))


_RFC2822_ZONES = {
    "UT": 0, "GMT": 0, "EST": -5, "EDT": -4, "CST": -6, "CDT": -5,
    "MST": -7, "MDT": -6, "PST": -8, "PDT": -7,
}
_RFC2822 = re.compile(
    r"(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s*)?"
    r"(?P<day>\d{1,2})\s+(?P<month>" + "|".join(_MONTHS) + r")\s+"
    r"(?P<year>\d{4}|\d{2})\s+(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s+"
    r"(?P<zone>[+-]\d{4}|UT|GMT|[ECMP][SD]T|[A-IK-Za-ik-z])"
)


def _parse_rfc2822(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    match = _RFC2822.fullmatch(value)
    if match is None:
        raise ValueError("not an RFC 2822 timestamp")
    parts = match.groupdict()
    year = int(parts["year"])
    if len(parts["year"]) == 2:
        year += 2000 if year < 50 else 1900
    if year < 1900:
        raise ValueError("year before 1900")
    zone = parts["zone"]
    if zone[0] in "+-":
        tz = _offset(zone[0], zone[1:3], zone[3:5])
    else:
        tz = timezone(timedelta(hours=_RFC2822_ZONES.get(zone, 0)))
    return datetime(year, _MONTH_NUMBERS[parts["month"]], int(parts["day"]),
                    int(parts["hour"]), int(parts["minute"]), int(parts["second"] or 0),
                    tzinfo=tz)


_NGINX = re.compile(r"(\d{2})/([A-Z][a-z]{2})/(\d{4}):(\d{2}):(\d{2}):(\d{2}) ([+-])(\d{2})(\d{2})")


def parse_nginx_timestamp(text: Any) -> datetime:
    """Parse a timestamp as written in nginx access logs: 11/Jul/2022:10:56:04 +0000."""
    if not isinstance(text, str):
        raise ValueError("expected a string")
    match = _NGINX.fullmatch(text)
    if match is None or match.group(2) not in _MONTH_NUMBERS:
        raise ValueError(f"not an nginx timestamp: {text!r}")
    day, month, year, hour, minute, second, sign, oh, om = match.groups()
    return datetime(int(year), _MONTH_NUMBERS[month], int(day), int(hour), int(minute),
                    int(second), tzinfo=_offset(sign, oh, om))


def parse_unix_float(value: Any) -> datetime:
    """Convert a number of seconds since the Unix epoch, fractions allowed."""
    if not _is_number(value):
        raise ValueError("expected a number")
    seconds = float(value)
    if math.isnan(seconds):
        raise ValueError("expected a valid Unix timestamp")
    try:
        nanos = int(seconds * _NANOS_PER_SECOND)
    except OverflowError as exc:
        raise ValueError("timestamp out of range") from exc
    return _from_unix_nanos(nanos)


_FLOAT_TEXT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE
)


def _parse_unix_float_string(value: Any) -> datetime:
    if not isinstance(value, str) or _FLOAT_TEXT.fullmatch(value) is None:
        raise ValueError("expected a string holding a number")
    return parse_unix_float(float(value))


_VARIANTS: tuple[tuple[TimestampKind, Callable[[Any], datetime]], ...] = (
    (TimestampKind.UNIX, _parse_unix),
    (TimestampKind.RFC3339, _parse_rfc3339),
    (TimestampKind.ISO8601, _parse_iso8601),
    (TimestampKind.RFC2822, _parse_rfc2822),
    (TimestampKind.NGINX, parse_nginx_timestamp),
    (TimestampKind.UNIX_FLOAT, parse_unix_float),
    (TimestampKind.UNIX_FLOAT_STRING, _parse_unix_float_string),
)


def parse_any_timestamp(value: Any) -> AnyTimestamp:
    """Parse a decoded JSON value as the first timestamp format that fits it."""
    for kind, parser in _VARIANTS:
        try:
            return AnyTimestamp(kind, parser(value))
        except (ValueError, OverflowError):
            continue
    raise ValueError(f"data did not match any timestamp format: {value!r}")