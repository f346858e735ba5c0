"""
Pytest configuration and shared fixtures.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are instantiated on import of `config`; seed the required values first.
os.environ.setdefault("BOT_TOKEN", "123456:test_token")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test_key")
os.environ.setdefault("ADMIN_CHAT_ID", "42")

import pytest  # noqa: E402

from bot.dialog import ChatUser, DialogController  # noqa: E402
from bot.session_store import SessionStore  # noqa: E402
from models.appointment import Appointment, AppointmentCreate  # noqa: E402
from utils.geocoding import GeocodeResult  # noqa: E402

FIXED_NOW = datetime(2025, 3, 5, 14, 7, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def user():
    """Telegram user with a profile name."""
    return ChatUser(chat_id=123456789, display_name="Jane Doe")


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def repository():
    """Repository mock that echoes inserts back with sequential ids."""
    repo = MagicMock()
    counter = {"next": 1}

    def _insert(appointment: AppointmentCreate) -> Appointment:
        stored = Appointment(id=str(counter["next"]), **appointment.model_dump())
        counter["next"] += 1
        return stored

    repo.insert_appointment = AsyncMock(side_effect=_insert)
    repo.list_appointments_by_user = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def geocoder():
    geocoder = MagicMock()
    geocoder.resolve = AsyncMock(
        return_value=GeocodeResult(
            short_address="Tashkent", full_address="Tashkent, Uzbekistan"
        )
    )
    return geocoder


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.notify = AsyncMock()
    return notifier


@pytest.fixture
def controller(sessions, repository, geocoder, notifier):
    return DialogController(
        sessions=sessions,
        repository=repository,
        geocoder=geocoder,
        notifier=notifier,
        contact_phone="+998-93-804-30-90",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def appointment_factory():
    """Build stored appointments with sensible defaults."""

    def _make(**overrides) -> Appointment:
        data = {
            "id": "1",
            "chat_id": 123456789,
            "full_name": "Jane Doe",
            "phone": "+998901234567",
            "address": "Amir Temur 15",
            "weekday": "Monday",
            "created_at": FIXED_NOW,
        }
        data.update(overrides)
        return Appointment(**data)

    return _make
