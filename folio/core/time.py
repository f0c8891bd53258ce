"""folio.core.time

This module is the *only* date helper surface in the codebase.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)


def parse_datetime(value: str | date | datetime) -> datetime:
    """Coerce a front-matter date into an aware datetime.

    Accepts:
    - `datetime.date` (midnight UTC)
    - `datetime.datetime` (naive assumed UTC, offsets preserved)
    - ISO-8601 strings, with `Z` suffix or `+0200` style offsets

    Raises:
        ValueError: if parsing fails.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    else:
        v = str(value).strip()
        if v.endswith("Z"):
            v = v[:-1] + "+00:00"
        # "2013-08-14 10:00:00 +0200" -> "2013-08-14 10:00:00+02:00"
        parts = v.rsplit(" ", 1)
        if len(parts) == 2 and parts[1][:1] in "+-" and len(parts[1]) == 5 and parts[1][1:].isdigit():
            v = f"{parts[0]}{parts[1][:3]}:{parts[1][3:]}"
        dt = datetime.fromisoformat(v)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def date_to_string(value: date) -> str:
    """`14 Aug 2013`."""

    return f"{value.day:02d} {value.strftime('%b %Y')}"


def date_to_long_string(value: date) -> str:
    """`14 August 2013`."""

    return f"{value.day:02d} {value.strftime('%B %Y')}"
