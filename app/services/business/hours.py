"""
Open hours evaluation.
Decides whether a shop is open for a given day of week and time of day,
against a weekly schedule of single open/close windows.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

# strict 24h HH:MM, no seconds, no AM/PM
_TIME_RE = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_index(cls, weekday: int) -> "Weekday":
        """map python's weekday() (0=Monday, 6=Sunday) to a Weekday."""
        return list(cls)[weekday]

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        for day in cls:
            if day.value.lower() == name.strip().lower():
                return day
        raise ValueError(f"Invalid day name: {name}")

    @property
    def position(self) -> int:
        return list(Weekday).index(self)


@dataclass(frozen=True)
class DayWindow:
    """open/close pair for a single day, both HH:MM."""
    open_time: str
    close_time: str


WeeklySchedule = Dict[Weekday, DayWindow]


@dataclass(frozen=True)
class TimeFact:
    """a concrete day of week + local time of day to evaluate against."""
    day_of_week: Weekday
    time_of_day: str


class ClosedReason(str, Enum):
    NO_SCHEDULE = "no_schedule"
    NO_SCHEDULE_FOR_DAY = "no_schedule_for_day"
    OUTSIDE_WINDOW = "outside_window"


@dataclass(frozen=True)
class Decision:
    is_open: bool
    reason: Optional[ClosedReason] = None

    @classmethod
    def open(cls) -> "Decision":
        return cls(is_open=True)

    @classmethod
    def closed(cls, reason: ClosedReason) -> "Decision":
        return cls(is_open=False, reason=reason)


class MissingDayPolicy(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class MalformedTimeError(ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Malformed time of day: {value!r}. Expected HH:MM")


def parse_time_of_day(value: str) -> int:
    """convert "HH:MM" to minutes since midnight (0..1439)."""
    if not isinstance(value, str):
        raise MalformedTimeError(value)
    match = _TIME_RE.fullmatch(value)
    if not match:
        raise MalformedTimeError(value)
    return int(match.group(1)) * 60 + int(match.group(2))


def evaluate(
    schedule: WeeklySchedule,
    fact: TimeFact,
    *,
    on_missing_day: Union[MissingDayPolicy, str],
    on_empty_schedule: bool,
) -> Decision:
    """decide open/closed for one time fact.

    Both defaults are supplied by the caller: an empty schedule resolves to
    ``on_empty_schedule``, a schedule without the fact's day resolves to
    ``on_missing_day``. Boundary minutes are open. A window whose close is
    before its open never matches (no overnight wraparound).

    Raises MalformedTimeError when the window or the fact time is not HH:MM.
    """
    if not schedule:
        if on_empty_schedule:
            return Decision.open()
        return Decision.closed(ClosedReason.NO_SCHEDULE)

    window = schedule.get(fact.day_of_week)
    if window is None:
        if MissingDayPolicy(on_missing_day) == MissingDayPolicy.OPEN:
            return Decision.open()
        return Decision.closed(ClosedReason.NO_SCHEDULE_FOR_DAY)

    open_minutes = parse_time_of_day(window.open_time)
    close_minutes = parse_time_of_day(window.close_time)
    now_minutes = parse_time_of_day(fact.time_of_day)

    if open_minutes <= now_minutes <= close_minutes:
        return Decision.open()
    return Decision.closed(ClosedReason.OUTSIDE_WINDOW)


@dataclass(frozen=True)
class EvaluationPolicy:
    """named pair of missing-data defaults for one call site."""
    on_missing_day: MissingDayPolicy
    on_empty_schedule: bool

    def evaluate(self, schedule: WeeklySchedule, fact: TimeFact) -> Decision:
        return evaluate(
            schedule,
            fact,
            on_missing_day=self.on_missing_day,
            on_empty_schedule=self.on_empty_schedule,
        )


def _usable_window(window: Optional[DayWindow]) -> Optional[Tuple[int, int]]:
    if window is None:
        return None
    try:
        open_minutes = parse_time_of_day(window.open_time)
        close_minutes = parse_time_of_day(window.close_time)
    except MalformedTimeError:
        return None
    if close_minutes < open_minutes:
        return None
    return open_minutes, close_minutes


def next_opening(schedule: WeeklySchedule, fact: TimeFact) -> Optional[Tuple[Weekday, str]]:
    """get the next (day, open_time) the shop opens after the given fact."""
    now_minutes = parse_time_of_day(fact.time_of_day)

    # still before today's opening
    today = schedule.get(fact.day_of_week)
    today_range = _usable_window(today)
    if today_range and now_minutes < today_range[0]:
        return fact.day_of_week, today.open_time

    # look for the next open day (up to 7 days ahead, today again last)
    days = list(Weekday)
    for offset in range(1, 8):
        day = days[(fact.day_of_week.position + offset) % 7]
        window = schedule.get(day)
        if _usable_window(window):
            return day, window.open_time

    return None
