"""
Unit tests for operator notifications.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bot.notifier import TelegramNotifier
from models.appointment import Location
from utils.exceptions import NotificationError


@pytest.fixture
def mock_bot():
    """Mock Telegram bot that records call order."""
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.send_location = AsyncMock()
    return bot


@pytest.mark.asyncio
async def test_notify_text_only(mock_bot, appointment_factory):
    """Test typed-address bookings send only the summary."""
    notifier = TelegramNotifier(mock_bot, "42")

    await notifier.notify(appointment_factory(id="9"))

    mock_bot.send_location.assert_not_called()
    mock_bot.send_message.assert_awaited_once()
    chat_id, text = mock_bot.send_message.call_args[0]
    assert chat_id == "42"
    assert "🔔 New appointment" in text
    assert "📍 Address: Amir Temur 15" in text
    assert "🆔 Chat ID: 123456789" in text


@pytest.mark.asyncio
async def test_notify_sends_pin_before_summary(mock_bot, appointment_factory):
    """Test geocoded bookings send the location first."""
    manager = MagicMock()
    manager.attach_mock(mock_bot.send_location, "send_location")
    manager.attach_mock(mock_bot.send_message, "send_message")
    notifier = TelegramNotifier(mock_bot, "42")

    await notifier.notify(
        appointment_factory(
            address="Tashkent",
            full_address="Tashkent, Uzbekistan",
            location=Location(latitude=41.31, longitude=69.28),
        )
    )

    assert [c[0] for c in manager.mock_calls] == ["send_location", "send_message"]
    mock_bot.send_location.assert_awaited_once_with(
        "42", latitude=41.31, longitude=69.28
    )
    text = mock_bot.send_message.call_args[0][1]
    assert "📍 Location: Tashkent" in text
    assert "🏠 Full address: Tashkent, Uzbekistan" in text


@pytest.mark.asyncio
async def test_notify_failure_raises_notification_error(mock_bot, appointment_factory):
    """Test send failures are wrapped."""
    mock_bot.send_message.side_effect = Exception("Bot error")
    notifier = TelegramNotifier(mock_bot, "42")

    with pytest.raises(NotificationError):
        await notifier.notify(appointment_factory())
