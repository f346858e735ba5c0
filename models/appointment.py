"""Appointment models for completed bookings."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Weekday(str, Enum):
    """Day of the week the client wants to be visited on."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_label(cls, label: str) -> Optional["Weekday"]:
        """Return the weekday whose label matches exactly, or None."""
        try:
            return cls(label)
        except ValueError:
            return None


class Location(BaseModel):
    """Device-reported coordinates."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class AppointmentCreate(BaseModel):
    """Appointment creation model (everything except the store-assigned id)."""

    chat_id: int = Field(..., description="Telegram chat ID of the client")
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1, description="Typed address or geocoded short name")
    full_address: Optional[str] = None
    location: Optional[Location] = None
    weekday: Weekday
    created_at: datetime

    @model_validator(mode="after")
    def full_address_requires_location(self) -> "AppointmentCreate":
        if self.full_address and self.location is None:
            raise ValueError("full_address is only set for geocoded locations")
        return self


class Appointment(AppointmentCreate):
    """Stored appointment."""

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        # Supabase returns bigint identity columns as int
        return str(value) if value is not None else value
