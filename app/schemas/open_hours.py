from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

TIME_PATTERN = "^([01][0-9]|2[0-3]):[0-5][0-9]$"


class DayHoursUpdate(BaseModel):
    """schema for the open/close pair of a single day."""
    open_time: str = Field(..., description="Opening time in HH:MM format", pattern=TIME_PATTERN)
    close_time: str = Field(..., description="Closing time in HH:MM format", pattern=TIME_PATTERN)


class WeeklyHoursUpdate(BaseModel):
    """schema for saving the week, days left out are not touched."""
    monday: Optional[DayHoursUpdate] = None
    tuesday: Optional[DayHoursUpdate] = None
    wednesday: Optional[DayHoursUpdate] = None
    thursday: Optional[DayHoursUpdate] = None
    friday: Optional[DayHoursUpdate] = None
    saturday: Optional[DayHoursUpdate] = None
    sunday: Optional[DayHoursUpdate] = None


class OpenHoursOut(BaseModel):
    day_of_week: str
    open_time: str
    close_time: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CurrentStatusOut(BaseModel):
    is_open: bool
    reason: Optional[str] = None
    current_day: str
    current_time: str
    next_open_day: Optional[str] = None
    next_open_time: Optional[str] = None


class OpenHoursPageOut(BaseModel):
    shop_id: str
    open_hours: List[OpenHoursOut] = []
    current_status: CurrentStatusOut


class SaveResult(BaseModel):
    status: str  # success|error
    message: Optional[str] = None
    updated_days: List[str] = []
