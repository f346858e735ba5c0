"""Conversation session kept in memory while a booking is in progress."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.appointment import AppointmentCreate, Location, Weekday


class Step(str, Enum):
    """Position in the booking dialog."""

    MAIN_MENU = "main_menu"
    CONFIRM_NAME = "confirm_name"
    ASK_NAME = "ask_name"
    ASK_PHONE = "ask_phone"
    ASK_ADDRESS = "ask_address"
    ASK_WEEKDAY = "ask_weekday"
    CONFIRM_APPOINTMENT = "confirm_appointment"


@dataclass
class ConversationSession:
    step: Step = Step.MAIN_MENU
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    full_address: Optional[str] = None
    location: Optional[Location] = None
    weekday: Optional[Weekday] = None
    # Booking assembled on the first confirmation; reused if the insert is retried.
    pending: Optional[AppointmentCreate] = None
