"""
Operator notifications for new bookings.
"""

import logging

from aiogram import Bot

from bot.formatting import format_operator_message
from models.appointment import Appointment
from utils.exceptions import NotificationError

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Sends every new booking to one fixed operator chat."""

    def __init__(self, bot: Bot, admin_chat_id):
        self.bot = bot
        self.admin_chat_id = admin_chat_id

    async def notify(self, appointment: Appointment) -> None:
        """
        Send the map pin (when the client shared a location) and then the
        text summary.

        Raises:
            NotificationError: If any message cannot be sent
        """
        try:
            if appointment.location is not None:
                await self.bot.send_location(
                    self.admin_chat_id,
                    latitude=appointment.location.latitude,
                    longitude=appointment.location.longitude,
                )

            await self.bot.send_message(
                self.admin_chat_id, format_operator_message(appointment)
            )
        except Exception as e:
            raise NotificationError(
                f"Failed to notify operator about appointment {appointment.id}: {e}"
            ) from e

        logger.info(f"Operator notified about appointment {appointment.id}")
