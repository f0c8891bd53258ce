from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from folio.core.time import date_to_long_string, date_to_string, parse_datetime, utc_now


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo is not None


def test_parse_plain_date_is_midnight_utc() -> None:
    assert parse_datetime(date(2013, 8, 14)) == datetime(2013, 8, 14, tzinfo=UTC)
    assert parse_datetime("2013-08-14") == datetime(2013, 8, 14, tzinfo=UTC)


def test_parse_naive_datetime_assumes_utc() -> None:
    assert parse_datetime(datetime(2013, 8, 14, 9)) == datetime(2013, 8, 14, 9, tzinfo=UTC)


def test_parse_keeps_offsets() -> None:
    dt = parse_datetime("2013-08-14 10:00:00 +0200")
    assert dt.utcoffset() == timedelta(hours=2)
    assert dt.hour == 10

    aware = datetime(2013, 8, 14, 10, tzinfo=timezone(timedelta(hours=-5)))
    assert parse_datetime(aware) is aware


def test_parse_z_suffix() -> None:
    assert parse_datetime("2013-08-14T10:00:00Z") == datetime(2013, 8, 14, 10, tzinfo=UTC)


def test_parse_garbage_raises() -> None:
    with pytest.raises(ValueError):
        parse_datetime("last tuesday")


def test_date_strings() -> None:
    assert date_to_string(date(2013, 8, 1)) == "01 Aug 2013"
    assert date_to_long_string(date(2013, 8, 14)) == "14 August 2013"
