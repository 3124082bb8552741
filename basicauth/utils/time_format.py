"""
Display formatting for ISO-8601 timestamps.

Renders instants as "MMM dd, yyyy hh:mm a" (e.g. "Mar 05, 2024 02:30 PM")
in the local time zone. Month names and the AM/PM marker are fixed English
strings so the output does not depend on the process locale.
"""

import re
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Optional trailing region id, e.g. 2024-03-05T15:30:00+01:00[Europe/Paris]
_ZONE_SUFFIX = re.compile(r"^(?P<stamp>[^\[\]]+)(?:\[(?P<zone>[^\[\]]+)\])?$")
# datetime.fromisoformat keeps at most microseconds
_FRACTION = re.compile(r"(\.\d{6})\d+")


class TimestampFormatError(ValueError):
    """Raised when a timestamp cannot be parsed as a zoned ISO-8601 date-time."""

    def __init__(self, value: str, reason: str):
        super().__init__(f"Cannot format timestamp {value!r}: {reason}")
        self.value = value
        self.reason = reason


def _convert(moment: datetime, tz: Optional[tzinfo], value: str) -> datetime:
    # Shifting by an offset can leave the year 1..9999 range
    try:
        return moment.astimezone(tz)
    except (OverflowError, OSError, ValueError) as e:
        raise TimestampFormatError(value, "out of range") from e


def parse_zoned_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date-time that carries an offset and, optionally, a region id."""
    if not isinstance(value, str):
        raise TimestampFormatError(repr(value), "expected a string")

    match = _ZONE_SUFFIX.match(value.strip())
    if not match:
        raise TimestampFormatError(value, "unbalanced zone brackets")

    stamp = _FRACTION.sub(r"\1", match.group("stamp"))
    try:
        parsed = datetime.fromisoformat(stamp)
    except ValueError as e:
        raise TimestampFormatError(value, str(e)) from e

    if parsed.tzinfo is None:
        raise TimestampFormatError(value, "missing UTC offset")

    zone = match.group("zone")
    if zone:
        try:
            region = ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise TimestampFormatError(value, f"unknown zone {zone}") from e
        parsed = _convert(parsed, region, value)
    return parsed


def format_datetime(moment: datetime) -> str:
    """Render an aware datetime with the fixed display pattern."""
    hour = moment.hour % 12 or 12
    marker = "AM" if moment.hour < 12 else "PM"
    return (
        f"{MONTH_ABBREVIATIONS[moment.month - 1]} {moment.day:02d}, {moment.year:04d} "
        f"{hour:02d}:{moment.minute:02d} {marker}"
    )


def format_timestamp(value: str, tz: Optional[tzinfo] = None) -> str:
    """
    Convert an ISO-8601 timestamp to local display form.

    Args:
        value: Date-time with offset, e.g. "2024-03-05T14:30:00Z".
        tz: Target zone. Defaults to the system's local zone.

    Raises:
        TimestampFormatError: if the value is malformed, has no offset, or
            falls outside the representable range once converted.
    """
    moment = parse_zoned_timestamp(value)
    return format_datetime(_convert(moment, tz, value))
