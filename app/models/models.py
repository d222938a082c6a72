from datetime import datetime
from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


# helpers
now = datetime.utcnow


class OpenHours(Base):
    __tablename__ = "open_hours"
    __table_args__ = (
        UniqueConstraint("shop_id", "day_of_week", name="uq_open_hours_shop_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    shop_id: Mapped[str] = mapped_column(String(255), index=True)  # e.g. "demo.myshopify.com"
    day_of_week: Mapped[str] = mapped_column(String(16))  # Monday..Sunday
    open_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    close_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)
