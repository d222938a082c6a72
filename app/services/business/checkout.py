"""
Checkout validation against open hours.

Runs the checks in a fixed order and stops at the first failure. Every failure
becomes a single user error whose message is shown verbatim to the shopper.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from app.schemas.checkout import CartSnapshot, OpenHoursConfig
from .facts import InvalidTimestampError, fact_from_cart
from .hours import (
    ClosedReason,
    DayWindow,
    EvaluationPolicy,
    MalformedTimeError,
    MissingDayPolicy,
    Weekday,
    WeeklySchedule,
    parse_time_of_day,
)

logger = logging.getLogger(__name__)

# a day without a window blocks checkout, and so does an empty config
CHECKOUT_POLICY = EvaluationPolicy(on_missing_day=MissingDayPolicy.CLOSED, on_empty_schedule=False)


class CheckoutErrorKind(str, Enum):
    MISSING_CONFIG = "missing_config"
    INVALID_CONFIG_FORMAT = "invalid_config_format"
    MISSING_LOCAL_TIME = "missing_local_time"
    MISSING_CREATED_AT = "missing_created_at"
    INVALID_CREATED_AT = "invalid_created_at"
    NO_SCHEDULE_FOR_DAY = "no_schedule_for_day"
    MALFORMED_TIME = "malformed_time"
    OUTSIDE_WINDOW = "outside_window"


ERROR_MESSAGES = {
    CheckoutErrorKind.MISSING_CONFIG: "Missing configuration.",
    CheckoutErrorKind.INVALID_CONFIG_FORMAT: "Invalid configuration format.",
    CheckoutErrorKind.MISSING_LOCAL_TIME: "Missing cart local time.",
    CheckoutErrorKind.MISSING_CREATED_AT: "Missing cart created_at timestamp.",
    CheckoutErrorKind.INVALID_CREATED_AT: "Invalid cart created_at timestamp.",
    CheckoutErrorKind.NO_SCHEDULE_FOR_DAY: "No open hours configuration found for {day}.",
    CheckoutErrorKind.MALFORMED_TIME: "Invalid time format. Expected HH:MM.",
    CheckoutErrorKind.OUTSIDE_WINDOW: "The store is currently closed. Please try again during our open hours.",
}


@dataclass
class UserError:
    message: str
    target: List[str] = field(default_factory=list)

    def dict(self) -> Dict[str, Any]:
        return {"message": self.message, "target": list(self.target)}


@dataclass
class CheckoutResult:
    """result of checkout validation, empty user_errors means allow."""
    user_errors: List[UserError] = field(default_factory=list)
    kind: Optional[CheckoutErrorKind] = None

    @property
    def ok(self) -> bool:
        return not self.user_errors

    def to_output(self) -> Dict[str, Any]:
        return {"userErrors": [e.dict() for e in self.user_errors]}


class CheckoutValidationError(Exception):
    def __init__(self, kind: CheckoutErrorKind, **params):
        self.kind = kind
        self.message = ERROR_MESSAGES[kind].format(**params)
        super().__init__(self.message)


CartInput = Union[CartSnapshot, Mapping, None]


def _is_weekly_schedule(config: Mapping) -> bool:
    return all(isinstance(k, Weekday) and isinstance(v, DayWindow) for k, v in config.items())


def load_schedule(config: Any) -> WeeklySchedule:
    """turn the checkout config (JSON string, mapping or schedule) into a WeeklySchedule."""
    if config is None or (isinstance(config, str) and config == ""):
        raise CheckoutValidationError(CheckoutErrorKind.MISSING_CONFIG)

    try:
        if isinstance(config, str):
            parsed = OpenHoursConfig.model_validate_json(config)
        elif isinstance(config, Mapping):
            if _is_weekly_schedule(config):
                return dict(config)
            # Weekday members hash by member name, so key on the plain day name
            normalized = {(k.value if isinstance(k, Weekday) else k): v for k, v in config.items()}
            parsed = OpenHoursConfig.model_validate(normalized)
        else:
            raise CheckoutValidationError(CheckoutErrorKind.INVALID_CONFIG_FORMAT)
    except ValidationError as e:
        logger.info(f"Rejected checkout config: {e.error_count()} validation error(s)")
        raise CheckoutValidationError(CheckoutErrorKind.INVALID_CONFIG_FORMAT) from e

    schedule = {}
    for day in Weekday:
        hours = getattr(parsed, day.value)
        if hours is not None:
            schedule[day] = DayWindow(open_time=hours.openTime, close_time=hours.closeTime)
    return schedule


def _as_cart(cart: Any) -> CartSnapshot:
    if isinstance(cart, CartSnapshot):
        return cart
    if isinstance(cart, Mapping):
        return CartSnapshot(local_time=cart.get("local_time"), created_at=cart.get("created_at"))
    # anything that isn't an object carries no cart facts
    return CartSnapshot()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _local_clock(local_time: Any) -> Tuple[int, int]:
    """(hour, minute) from a LocalTime, a {"hour", "minute"} mapping or an "HH:MM" string."""
    if isinstance(local_time, str):
        try:
            minutes = parse_time_of_day(local_time)
        except MalformedTimeError as e:
            raise CheckoutValidationError(CheckoutErrorKind.MALFORMED_TIME) from e
        return divmod(minutes, 60)

    if isinstance(local_time, Mapping):
        hour, minute = local_time.get("hour"), local_time.get("minute")
    else:
        hour, minute = getattr(local_time, "hour", None), getattr(local_time, "minute", None)

    if not (_is_int(hour) and _is_int(minute)):
        logger.warning(f"Unreadable cart local time: {local_time!r}")
        raise CheckoutValidationError(CheckoutErrorKind.MALFORMED_TIME)
    return hour, minute


def _check_checkout(config: Any, cart: CartSnapshot) -> None:
    schedule = load_schedule(config)

    if cart.local_time is None:
        raise CheckoutValidationError(CheckoutErrorKind.MISSING_LOCAL_TIME)

    if cart.created_at is None or cart.created_at == "":
        raise CheckoutValidationError(CheckoutErrorKind.MISSING_CREATED_AT)

    if not isinstance(cart.created_at, str):
        raise CheckoutValidationError(CheckoutErrorKind.INVALID_CREATED_AT)

    hour, minute = _local_clock(cart.local_time)
    try:
        fact = fact_from_cart(cart.created_at, hour, minute)
    except InvalidTimestampError as e:
        raise CheckoutValidationError(CheckoutErrorKind.INVALID_CREATED_AT) from e

    try:
        decision = CHECKOUT_POLICY.evaluate(schedule, fact)
    except MalformedTimeError as e:
        logger.warning(f"Malformed time during checkout validation: {e.value!r}")
        raise CheckoutValidationError(CheckoutErrorKind.MALFORMED_TIME) from e

    if decision.is_open:
        return

    if decision.reason in (ClosedReason.NO_SCHEDULE, ClosedReason.NO_SCHEDULE_FOR_DAY):
        raise CheckoutValidationError(CheckoutErrorKind.NO_SCHEDULE_FOR_DAY, day=fact.day_of_week.value)
    raise CheckoutValidationError(CheckoutErrorKind.OUTSIDE_WINDOW)


def validate_checkout(config: Any, cart: CartInput = None) -> CheckoutResult:
    """validate a checkout against the open hours config.

    Returns an empty result to allow the checkout, or a result holding exactly
    one user error (the first failed check). Badly shaped input is reported
    as a user error, never raised.
    """
    try:
        _check_checkout(config, _as_cart(cart))
    except CheckoutValidationError as e:
        logger.info(f"Checkout blocked ({e.kind.value}): {e.message}")
        return CheckoutResult(user_errors=[UserError(message=e.message)], kind=e.kind)

    return CheckoutResult()
