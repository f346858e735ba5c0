"""
In-memory conversation sessions, one per chat.
State is volatile and lives as long as the process.
"""

import asyncio
from typing import Dict

from models.session import ConversationSession


class SessionStore:
    """Maps a user identity to its conversation session."""

    def __init__(self):
        self._sessions: Dict[int, ConversationSession] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    def get(self, user_id: int) -> ConversationSession:
        """Return the user's session, creating an idle one if needed."""
        return self._sessions.setdefault(user_id, ConversationSession())

    def reset(self, user_id: int) -> ConversationSession:
        """Drop everything collected so far and return to the main menu."""
        self._sessions[user_id] = ConversationSession()
        return self._sessions[user_id]

    def lock(self, user_id: int) -> asyncio.Lock:
        """
        Per-user lock.

        Held for the whole handling of one inbound event, so a second event
        from the same user waits until the first one has finished its
        geocoding, insert and notification awaits.
        """
        return self._locks.setdefault(user_id, asyncio.Lock())
