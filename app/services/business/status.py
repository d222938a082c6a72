"""
Store status (open/closed) for the status endpoints.

Always resolves to a boolean. The two endpoints disagree on what missing data
means, so each one gets its own named policy over the same evaluator.
"""
import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

from app.core.config import settings
from .facts import fact_from_reference_now
from .hours import EvaluationPolicy, MalformedTimeError, MissingDayPolicy, WeeklySchedule

logger = logging.getLogger(__name__)

# merchant from the admin session: no hours at all => open, no entry today => closed
SESSION_STATUS_POLICY = EvaluationPolicy(on_missing_day=MissingDayPolicy.CLOSED, on_empty_schedule=True)

# merchant from the ?shop= parameter: no hours at all => closed, no entry today => open
QUERY_STATUS_POLICY = EvaluationPolicy(on_missing_day=MissingDayPolicy.OPEN, on_empty_schedule=False)


def query_is_open(
    schedule: WeeklySchedule,
    policy: EvaluationPolicy,
    now: Optional[datetime] = None,
    timezone_name: Optional[str] = None,
) -> bool:
    """check if the shop is open now in the reference timezone."""
    zone = timezone_name or settings.REFERENCE_TIMEZONE
    try:
        fact = fact_from_reference_now(zone, now)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.error(f"Reference timezone {zone!r} is unusable ({e}), reporting closed")
        return False
    try:
        decision = policy.evaluate(schedule, fact)
    except MalformedTimeError as e:
        logger.warning(f"Stored open hours unreadable for {fact.day_of_week.value}: {e.value!r}, reporting closed")
        return False
    return decision.is_open
