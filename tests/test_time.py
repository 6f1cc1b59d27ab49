# SPDX-License-Identifier: MIT

import pendulum
import pytest

from timbers.errors import UserError
from timbers.time import (
    datetime_to_rfc3339,
    datetime_to_utc_date_str,
    parse_since_value,
    parse_time_value,
    parse_until_value,
)

NOW = pendulum.datetime(2026, 3, 15, 12, 0, 0, tz="UTC")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("24h", pendulum.datetime(2026, 3, 14, 12, 0, 0, tz="UTC")),
        ("7d", pendulum.datetime(2026, 3, 8, 12, 0, 0, tz="UTC")),
        ("2w", pendulum.datetime(2026, 3, 1, 12, 0, 0, tz="UTC")),
        ("1m", pendulum.datetime(2026, 2, 15, 12, 0, 0, tz="UTC")),
    ],
)
def test_durations_are_relative_to_now(value, expected):
    assert parse_time_value(value, NOW) == expected


def test_date_is_utc_midnight():
    assert parse_time_value("2026-01-17", NOW) == pendulum.datetime(2026, 1, 17, tz="UTC")


def test_rfc3339_datetime():
    assert parse_time_value("2026-01-17T10:00:00+02:00", NOW) == pendulum.datetime(
        2026, 1, 17, 8, 0, 0, tz="UTC"
    )


@pytest.mark.parametrize("value", ["0d", "yesterday-ish", "7x"])
def test_invalid_values(value):
    with pytest.raises(UserError):
        parse_time_value(value, NOW)


def test_until_date_covers_whole_day():
    assert parse_until_value("2026-01-17", NOW) == pendulum.datetime(
        2026, 1, 17, 23, 59, 59, tz="UTC"
    )


def test_since_error_names_the_flag():
    with pytest.raises(UserError, match="--since"):
        parse_since_value("bogus", NOW)


def test_formatting():
    moment = pendulum.datetime(2026, 1, 15, 23, 30, 0, tz="America/New_York")

    assert datetime_to_rfc3339(moment) == "2026-01-16T04:30:00Z"
    assert datetime_to_utc_date_str(moment) == "2026-01-16"
