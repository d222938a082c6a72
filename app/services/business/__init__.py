"""
Business logic services package.

This package contains services for handling business logic including:
- Open hours evaluation (time windows, missing-data policies)
- Checkout gating by open hours
- Store status for the status endpoints
"""

from .hours import (
    Weekday,
    DayWindow,
    WeeklySchedule,
    TimeFact,
    ClosedReason,
    Decision,
    MissingDayPolicy,
    EvaluationPolicy,
    MalformedTimeError,
    parse_time_of_day,
    evaluate,
    next_opening
)

__all__ = [
    'Weekday',
    'DayWindow',
    'WeeklySchedule',
    'TimeFact',
    'ClosedReason',
    'Decision',
    'MissingDayPolicy',
    'EvaluationPolicy',
    'MalformedTimeError',
    'parse_time_of_day',
    'evaluate',
    'next_opening'
]
