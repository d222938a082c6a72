from typing import Any, List, Optional
from pydantic import BaseModel


class HoursConfig(BaseModel):
    openTime: str  # e.g. "09:00"
    closeTime: str  # e.g. "17:00"


class OpenHoursConfig(BaseModel):
    """checkout configuration JSON, one optional window per day."""
    Monday: Optional[HoursConfig] = None
    Tuesday: Optional[HoursConfig] = None
    Wednesday: Optional[HoursConfig] = None
    Thursday: Optional[HoursConfig] = None
    Friday: Optional[HoursConfig] = None
    Saturday: Optional[HoursConfig] = None
    Sunday: Optional[HoursConfig] = None


class LocalTime(BaseModel):
    hour: int
    minute: int
    second: int = 0


class CartSnapshot(BaseModel):
    # shapes are checked by the checkout service so bad input becomes a user error
    local_time: Optional[Any] = None  # LocalTime, {"hour", "minute"} or "HH:MM"
    created_at: Optional[Any] = None  # ISO8601, e.g. "2025-03-01T21:30:00Z"


class CheckoutValidationRequest(BaseModel):
    config: Optional[Any] = None  # JSON string (or object) with open hours per day
    cart: Optional[Any] = None  # CartSnapshot shape, checked by the service


class UserErrorOut(BaseModel):
    message: str
    target: List[str] = []


class CheckoutValidationResponse(BaseModel):
    userErrors: List[UserErrorOut] = []
