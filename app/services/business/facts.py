"""
Time fact construction.

Two separate ways of turning "now" into a (day of week, time of day) pair:
checkout uses the cart's own timestamp and local clock, status queries use the
server clock in a fixed reference timezone.
"""
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from .hours import TimeFact, Weekday


class InvalidTimestampError(ValueError):
    pass


def parse_created_at(created_at: str) -> datetime:
    """parse an ISO-8601 timestamp such as "2025-03-01T21:30:00Z"."""
    raw = created_at.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid timestamp: {created_at!r}") from e


def fact_from_cart(created_at: str, hour: int, minute: int) -> TimeFact:
    """day from the cart timestamp in its own offset, time from the cart's local clock."""
    created = parse_created_at(created_at)
    # out-of-range values are left for the evaluator to reject as malformed
    time_of_day = f"{hour:02d}:{minute:02d}"
    return TimeFact(day_of_week=Weekday.from_index(created.weekday()), time_of_day=time_of_day)


def fact_from_reference_now(timezone_name: str, now: Optional[datetime] = None) -> TimeFact:
    """day and time of the current instant (or `now`) in the reference timezone."""
    tz = ZoneInfo(timezone_name)
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    else:
        now = now.astimezone(tz)

    return TimeFact(day_of_week=Weekday.from_index(now.weekday()), time_of_day=now.strftime("%H:%M"))
