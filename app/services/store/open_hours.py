import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app import models
from app.services.business.hours import DayWindow, Weekday, WeeklySchedule

logger = logging.getLogger(__name__)


class OpenHoursStore:
    """open hours per (shop, day of week), backed by the open_hours table."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, shop_id: str, day: Weekday) -> Optional[models.OpenHours]:
        return (
            self.db.query(models.OpenHours)
            .filter(models.OpenHours.shop_id == shop_id, models.OpenHours.day_of_week == day.value)
            .first()
        )

    def get(self, shop_id: str, day: Weekday) -> Optional[DayWindow]:
        row = self._row(shop_id, day)
        if not row:
            return None
        return DayWindow(open_time=row.open_time, close_time=row.close_time)

    def list_rows(self, shop_id: str) -> List[models.OpenHours]:
        """stored rows for a shop, Monday first."""
        rows = self.db.query(models.OpenHours).filter(models.OpenHours.shop_id == shop_id).all()
        order = {day.value: day.position for day in Weekday}
        # rows with a day name we don't know sort last
        return sorted(rows, key=lambda r: order.get(r.day_of_week, len(order)))

    def get_all(self, shop_id: str) -> WeeklySchedule:
        schedule = {}
        for row in self.list_rows(shop_id):
            try:
                day = Weekday.from_name(row.day_of_week)
            except ValueError:
                logger.warning(f"Skipping open hours row {row.id} for {shop_id}: unknown day {row.day_of_week!r}")
                continue
            schedule[day] = DayWindow(open_time=row.open_time, close_time=row.close_time)
        return schedule

    def upsert(self, shop_id: str, day: Weekday, window: DayWindow) -> models.OpenHours:
        """insert or update the window for one day. flushes, caller commits."""
        row = self._row(shop_id, day)
        if row:
            row.open_time = window.open_time
            row.close_time = window.close_time
        else:
            row = models.OpenHours(
                shop_id=shop_id,
                day_of_week=day.value,
                open_time=window.open_time,
                close_time=window.close_time,
            )
            self.db.add(row)
        self.db.flush()
        return row
