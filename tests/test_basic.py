"""
Basic unit tests for models and helpers.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from models.appointment import Appointment, AppointmentCreate, Location, Weekday
from models.session import ConversationSession, Step
from utils.datetime_utils import parse_iso_datetime, to_iso_string
from utils.exceptions import DatabaseError, PersistenceError, ValidationError
from utils.validation import require_text, sanitize_text

NOW = datetime(2025, 3, 5, 14, 7, tzinfo=timezone.utc)


def test_weekday_labels():
    """Test there are exactly seven weekdays in order."""
    assert [w.value for w in Weekday] == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ]
    assert Weekday.from_label("Friday") is Weekday.FRIDAY
    assert Weekday.from_label("Funday") is None


def test_step_enum():
    assert Step.MAIN_MENU.value == "main_menu"
    assert ConversationSession().step is Step.MAIN_MENU


def test_full_address_requires_location():
    """Test a typed address cannot carry a geocoded description."""
    with pytest.raises(PydanticValidationError):
        AppointmentCreate(
            chat_id=1,
            full_name="Jane Doe",
            phone="+998901234567",
            address="Amir Temur 15",
            full_address="Tashkent, Uzbekistan",
            weekday=Weekday.MONDAY,
            created_at=NOW,
        )


def test_location_range():
    with pytest.raises(PydanticValidationError):
        Location(latitude=91, longitude=0)


def test_appointment_id_is_string():
    appointment = Appointment(
        id=5,
        chat_id=1,
        full_name="Jane Doe",
        phone="+998901234567",
        address="Amir Temur 15",
        weekday="Monday",
        created_at=NOW,
    )
    assert appointment.id == "5"
    assert appointment.weekday is Weekday.MONDAY


def test_iso_round_trip():
    assert to_iso_string(NOW) == "2025-03-05T14:07:00+00:00"
    assert parse_iso_datetime("2025-03-05T14:07:00Z") == NOW
    assert parse_iso_datetime("2025-03-05T14:07:00") == NOW


def test_sanitize_text():
    assert sanitize_text("  Jane\x00 Doe ") == "Jane Doe"
    assert sanitize_text(None) == ""
    assert sanitize_text("abcdef", max_length=3) == "abc"


def test_require_text_rejects_blank():
    with pytest.raises(ValidationError):
        require_text("   ", "full_name")
    assert require_text(" Jane ", "full_name") == "Jane"


def test_require_text_rejects_overlong_instead_of_truncating():
    with pytest.raises(ValidationError):
        require_text("a" * 101, "full_name", max_length=100)
    assert require_text(" " + "a" * 100 + " ", "full_name", max_length=100) == "a" * 100


def test_persistence_error_is_database_error():
    assert issubclass(PersistenceError, DatabaseError)
