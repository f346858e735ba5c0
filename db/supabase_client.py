"""
Supabase database client for appointments.
The appointments table is append-only: rows are inserted once and never updated.

Expected table (SQL):
---------------------
CREATE TABLE appointments (
    id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
    chat_id BIGINT NOT NULL,
    full_name TEXT NOT NULL,
    phone TEXT NOT NULL,
    address TEXT NOT NULL,
    full_address TEXT,
    location JSONB,
    weekday TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL
);
CREATE INDEX appointments_chat_id_idx ON appointments (chat_id, created_at);
"""

import logging
from typing import Any, Dict, List, Optional

from supabase import Client as SupabaseClientType
from supabase import create_client

from config import settings
from models.appointment import Appointment, AppointmentCreate
from utils.datetime_utils import parse_iso_datetime, to_iso_string
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Supabase wrapper implementing the appointment repository."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: Optional[str] = None,
    ):
        self.client: SupabaseClientType = create_client(
            url or settings.supabase_url, key or settings.supabase_key
        )
        self.table = table or settings.appointments_table

    @staticmethod
    def _parse_appointment(row: Dict[str, Any]) -> Appointment:
        """Parse a row, normalizing the timestamp string."""
        data = dict(row)
        if isinstance(data.get("created_at"), str):
            data["created_at"] = parse_iso_datetime(data["created_at"])
        return Appointment(**data)

    async def insert_appointment(self, appointment: AppointmentCreate) -> Appointment:
        """
        Store a finalized booking.

        Returns:
            The stored appointment with its store-assigned id

        Raises:
            PersistenceError: If the store is unavailable or returns nothing
        """
        try:
            data = appointment.model_dump(mode="json", exclude_none=True)
            data["created_at"] = to_iso_string(appointment.created_at)

            response = self.client.table(self.table).insert(data).execute()

            if not response.data:
                raise ValueError("no data returned")

            stored = self._parse_appointment(response.data[0])
        except Exception as e:
            raise PersistenceError(f"Failed to create appointment: {e}") from e

        logger.info(f"Appointment {stored.id} stored for chat {stored.chat_id}")
        return stored

    async def list_appointments_by_user(self, chat_id: int) -> List[Appointment]:
        """
        Get all appointments for a chat in creation order (oldest first).

        Raises:
            PersistenceError: If the store is unavailable
        """
        try:
            response = (
                self.client.table(self.table)
                .select("*")
                .eq("chat_id", chat_id)
                .order("created_at", desc=False)
                .order("id", desc=False)
                .execute()
            )

            return [self._parse_appointment(item) for item in response.data]
        except Exception as e:
            raise PersistenceError(f"Failed to get appointments: {e}") from e


# Global database client instance
_db_client: Optional[SupabaseClient] = None


def get_db_client() -> SupabaseClient:
    """Get or create database client instance."""
    global _db_client
    if _db_client is None:
        _db_client = SupabaseClient()
    return _db_client
