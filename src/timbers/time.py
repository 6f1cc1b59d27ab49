# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum

from timbers.errors import UserError

RFC3339_FORMAT = "YYYY-MM-DD[T]HH:mm:ss[Z]"

_DURATION_PATTERN = re.compile(r"^(\d+)([hdwm])$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def to_utc(datetime: pendulum.DateTime) -> pendulum.DateTime:
    return datetime.in_tz("UTC")


def datetime_to_rfc3339(datetime: pendulum.DateTime) -> str:
    """Second-precision UTC timestamp, e.g. 2026-01-15T15:04:05Z."""
    return to_utc(datetime).format(RFC3339_FORMAT)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_timestamp(timestamp: int) -> pendulum.DateTime:
    return pendulum.from_timestamp(timestamp, tz="UTC")


def datetime_to_utc_date_str(datetime: pendulum.DateTime) -> str:
    """Calendar day of the instant in UTC, formatted YYYY-MM-DD."""
    return to_utc(datetime).format("YYYY-MM-DD")


def datetime_to_display_str(datetime: pendulum.DateTime) -> str:
    return to_utc(datetime).format("YYYY-MM-DD HH:mm:ss [UTC]")


def parse_time_value(value: str, now: Optional[pendulum.DateTime] = None) -> pendulum.DateTime:
    """
    Parse a relative duration (24h, 7d, 2w, 1m) or an absolute date/datetime.

    Durations are measured back from `now`. Dates are taken as UTC midnight.
    """
    value = value.strip()
    reference = now if now is not None else now_utc()

    duration_match = _DURATION_PATTERN.match(value)
    if duration_match:
        amount = int(duration_match.group(1))
        if amount <= 0:
            raise UserError(f"invalid duration number: {duration_match.group(1)}")
        match duration_match.group(2):
            case "h":
                return reference.subtract(hours=amount)
            case "d":
                return reference.subtract(days=amount)
            case "w":
                return reference.subtract(weeks=amount)
            case "m":
                return reference.subtract(months=amount)

    try:
        parsed = pendulum.parse(value, tz="UTC")
    except ValueError:
        raise UserError(f"invalid time value: {value}")
    if not isinstance(parsed, pendulum.DateTime):
        raise UserError(f"invalid time value: {value}")
    return to_utc(parsed)


def parse_since_value(value: str, now: Optional[pendulum.DateTime] = None) -> pendulum.DateTime:
    try:
        return parse_time_value(value, now)
    except UserError:
        raise UserError(
            f"invalid --since value {value!r}; use duration (24h, 7d, 2w) or date (2026-01-17)"
        )


def parse_until_value(value: str, now: Optional[pendulum.DateTime] = None) -> pendulum.DateTime:
    """Like parse_since_value, but a bare date covers the whole day."""
    try:
        cutoff = parse_time_value(value, now)
    except UserError:
        raise UserError(
            f"invalid --until value {value!r}; use duration (24h, 7d, 2w) or date (2026-01-17)"
        )
    if _DATE_PATTERN.match(value.strip()):
        cutoff = cutoff.end_of("day").set(microsecond=0)
    return cutoff
