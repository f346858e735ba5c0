"""
Booking summaries.

Every formatter accepts any appointment-shaped record: a stored
``Appointment`` or an in-progress ``ConversationSession``. The only branches
are on whether a location and a full address are present.
"""

from typing import Sequence

from models.appointment import Appointment
from utils.datetime_utils import format_display_datetime


def _weekday_label(weekday) -> str:
    return getattr(weekday, "value", weekday) or ""


def format_details(record) -> str:
    """Name, phone, address and weekday lines."""
    lines = [
        f"👤 Name: {record.full_name}",
        f"📞 Phone: {record.phone}",
    ]

    if record.location is not None:
        lines.append(f"📍 Location: {record.address}")
        if record.full_address:
            lines.append(f"🏠 Full address: {record.full_address}")
    else:
        lines.append(f"📍 Address: {record.address}")

    lines.append(f"📅 Day: {_weekday_label(record.weekday)}")
    return "\n".join(lines) + "\n"


def format_confirmation(record) -> str:
    """Summary shown to the client before the final confirmation."""
    return f"✅ Appointment details:\n\n{format_details(record)}"


def format_operator_message(appointment: Appointment) -> str:
    """Summary sent to the operator chat for a new booking."""
    return (
        f"🔔 New appointment:\n\n"
        f"{format_details(appointment)}"
        f"🆔 Chat ID: {appointment.chat_id}"
    )


def format_listing_entry(appointment: Appointment, index: int) -> str:
    """One numbered entry of the client's appointment list."""
    lines = [
        f"{index + 1}. 👤 {appointment.full_name}",
        f"📞 {appointment.phone}",
        f"📍 {appointment.address}",
    ]
    if appointment.location is not None and appointment.full_address:
        lines.append(f"🏠 {appointment.full_address}")
    lines.append(f"📅 {_weekday_label(appointment.weekday)}")
    lines.append(f"🕒 {format_display_datetime(appointment.created_at)}")
    return "\n".join(lines) + "\n\n"


def format_listing(appointments: Sequence[Appointment]) -> str:
    return "".join(
        format_listing_entry(appointment, index)
        for index, appointment in enumerate(appointments)
    )
