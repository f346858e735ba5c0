"""Pydantic models and session records."""

from .appointment import Appointment, AppointmentCreate, Location, Weekday
from .session import ConversationSession, Step

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "ConversationSession",
    "Location",
    "Step",
    "Weekday",
]
