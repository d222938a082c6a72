import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_current_shop
from app.db.session import get_db
from app.schemas.open_hours import (
    CurrentStatusOut,
    DayHoursUpdate,
    OpenHoursOut,
    OpenHoursPageOut,
    SaveResult,
    WeeklyHoursUpdate,
)
from app.services.business.facts import fact_from_reference_now
from app.services.business.hours import DayWindow, MalformedTimeError, Weekday, next_opening
from app.services.business.status import SESSION_STATUS_POLICY
from app.services.store.open_hours import OpenHoursStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/open-hours", tags=["admin"])

SAVE_ERROR_MESSAGE = "Error saving open hours."


def _save_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"status": "error", "message": SAVE_ERROR_MESSAGE})


def _warn_if_inverted(shop_id: str, day: Weekday, hours: DayHoursUpdate) -> None:
    # close before open is stored as-is and evaluates as closed all day
    if hours.close_time < hours.open_time:
        logger.warning(
            f"{shop_id}: {day.value} closes ({hours.close_time}) before it opens ({hours.open_time}), "
            f"the store will be treated as closed that day"
        )


@router.get("", response_model=OpenHoursPageOut)
def get_open_hours(
    db: Session = Depends(get_db),
    shop_id: str = Depends(get_current_shop),
):
    """get stored open hours with the current status."""
    store = OpenHoursStore(db)
    rows = store.list_rows(shop_id)
    schedule = store.get_all(shop_id)

    fact = fact_from_reference_now(settings.REFERENCE_TIMEZONE)
    current_status = CurrentStatusOut(
        is_open=False,
        current_day=fact.day_of_week.value,
        current_time=fact.time_of_day,
    )
    try:
        decision = SESSION_STATUS_POLICY.evaluate(schedule, fact)
        current_status.is_open = decision.is_open
        current_status.reason = decision.reason.value if decision.reason else None
    except MalformedTimeError as e:
        logger.warning(f"{shop_id}: unreadable stored time {e.value!r}")
        current_status.reason = "malformed_time"

    if not current_status.is_open:
        upcoming = next_opening(schedule, fact)
        if upcoming:
            current_status.next_open_day = upcoming[0].value
            current_status.next_open_time = upcoming[1]

    return OpenHoursPageOut(
        shop_id=shop_id,
        open_hours=[OpenHoursOut.model_validate(r) for r in rows],
        current_status=current_status,
    )


@router.put("", response_model=SaveResult)
def save_open_hours(
    payload: WeeklyHoursUpdate,
    db: Session = Depends(get_db),
    shop_id: str = Depends(get_current_shop),
):
    """save open hours for the week, one upsert per provided day."""
    store = OpenHoursStore(db)
    updated_days = []

    try:
        for day in Weekday:
            hours = getattr(payload, day.value.lower())
            if hours is None:
                continue
            _warn_if_inverted(shop_id, day, hours)
            store.upsert(shop_id, day, DayWindow(open_time=hours.open_time, close_time=hours.close_time))
            updated_days.append(day.value)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error saving open hours for {shop_id}")
        return _save_error()

    logger.info(f"{shop_id}: open hours saved for {', '.join(updated_days) or 'no days'}")
    return SaveResult(
        status="success",
        message=f"Open hours updated for {len(updated_days)} days",
        updated_days=updated_days,
    )


@router.put("/day/{day_name}", response_model=SaveResult)
def save_day_hours(
    day_name: str,
    payload: DayHoursUpdate,
    db: Session = Depends(get_db),
    shop_id: str = Depends(get_current_shop),
):
    """save open hours for a single day."""
    try:
        day = Weekday.from_name(day_name)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid day name. Use: monday, tuesday, wednesday, thursday, friday, saturday, sunday")

    _warn_if_inverted(shop_id, day, payload)
    try:
        OpenHoursStore(db).upsert(shop_id, day, DayWindow(open_time=payload.open_time, close_time=payload.close_time))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error saving {day.value} open hours for {shop_id}")
        return _save_error()

    return SaveResult(
        status="success",
        message=f"Open hours for {day.value} updated successfully",
        updated_days=[day.value],
    )
