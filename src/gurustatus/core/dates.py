"""Lenient date parsing for free-text record fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pendulum

SECONDS_PER_DAY = 86_400
DAYS_PER_YEAR = 365.25
SECONDS_PER_YEAR = SECONDS_PER_DAY * DAYS_PER_YEAR

NowProvider = Callable[[], pendulum.DateTime]


@dataclass(frozen=True, slots=True)
class ParsedDate:
    """Outcome of parsing a date field: a datetime, or nothing usable."""

    raw: str | None
    value: pendulum.DateTime | None = None

    @property
    def is_valid(self) -> bool:
        return self.value is not None


def parse_date(value: Any) -> ParsedDate:
    """Parse ``value`` into a :class:`ParsedDate` without ever raising."""
    if isinstance(value, pendulum.DateTime):
        return ParsedDate(raw=value.to_iso8601_string(), value=value)
    if not isinstance(value, str):
        return ParsedDate(raw=None)
    text = value.strip()
    if not text:
        return ParsedDate(raw=value)
    try:
        if len(text) == 7 and text[4] == "-":
            parsed: Any = pendulum.datetime(int(text[:4]), int(text[5:7]), 1)
        else:
            parsed = pendulum.parse(text)
    except (ValueError, TypeError, OverflowError):
        return ParsedDate(raw=value)
    if isinstance(parsed, pendulum.DateTime):
        return ParsedDate(raw=value, value=parsed)
    if isinstance(parsed, pendulum.Date):
        return ParsedDate(
            raw=value,
            value=pendulum.datetime(parsed.year, parsed.month, parsed.day),
        )
    return ParsedDate(raw=value)


def elapsed_years(start: pendulum.DateTime, now: pendulum.DateTime) -> float:
    """Signed years from ``start`` to ``now`` using 365.25-day years."""
    return (now.timestamp() - start.timestamp()) / SECONDS_PER_YEAR


def resolve_as_of(value: Any, now_provider: NowProvider | None = None) -> pendulum.DateTime:
    """Return the reference instant for a run, falling back to the current time."""
    now = (now_provider or pendulum.now)()
    if value is None:
        return now
    parsed = parse_date(value)
    return parsed.value if parsed.value is not None else now
