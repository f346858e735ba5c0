"""
Booking dialog controller.

Consumes one inbound event for a chat, updates that chat's session and
returns at most one reply. Transport-specific types stay out of this module:
handlers translate aiogram updates into the events below and render the
returned ``Reply`` back into Telegram messages.

Flow:
    main_menu → confirm_name → (ask_name) → ask_phone → ask_address
    → ask_weekday → confirm_appointment → main_menu
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from bot import texts
from bot.formatting import format_confirmation, format_listing
from bot.notifier import TelegramNotifier
from bot.session_store import SessionStore
from db.supabase_client import SupabaseClient
from models.appointment import AppointmentCreate, Location, Weekday
from models.session import ConversationSession, Step
from utils.datetime_utils import utc_now
from utils.exceptions import NotificationError, PersistenceError, ValidationError
from utils.geocoding import NominatimGeocoder
from utils.validation import (
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    require_text,
    sanitize_text,
)

logger = logging.getLogger(__name__)


class KeyboardHint(str, Enum):
    """Which reply keyboard the transport should show with a reply."""

    MAIN_MENU = "main_menu"
    YES_NO = "yes_no"
    REQUEST_PHONE = "request_phone"
    REQUEST_LOCATION = "request_location"
    WEEKDAYS = "weekdays"
    CONFIRM_APPOINTMENT = "confirm_appointment"
    REMOVE = "remove"


class MenuAction(str, Enum):
    NEW_APPOINTMENT = "new_appointment"
    LIST_APPOINTMENTS = "list_appointments"
    HELP = "help"
    CONTACT = "contact"


@dataclass(frozen=True)
class ChatUser:
    chat_id: int
    display_name: str = ""


# ========== Inbound events ==========


@dataclass(frozen=True)
class StartRequested:
    pass


@dataclass(frozen=True)
class CancelRequested:
    pass


@dataclass(frozen=True)
class MenuRequested:
    action: MenuAction


@dataclass(frozen=True)
class TextReceived:
    text: str


@dataclass(frozen=True)
class LocationShared:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ContactShared:
    phone: str


@dataclass(frozen=True)
class Reply:
    text: str
    keyboard: Optional[KeyboardHint] = None


_MENU_BUTTONS = {
    texts.BTN_NEW_APPOINTMENT: MenuAction.NEW_APPOINTMENT,
    texts.BTN_MY_APPOINTMENTS: MenuAction.LIST_APPOINTMENTS,
    texts.BTN_HELP: MenuAction.HELP,
    texts.BTN_CONTACT: MenuAction.CONTACT,
}


def classify(event):
    """Turn button labels that arrive as plain text into their events."""
    if isinstance(event, TextReceived):
        label = event.text.strip()
        if label == texts.BTN_CANCEL:
            return CancelRequested()
        if label in _MENU_BUTTONS:
            return MenuRequested(_MENU_BUTTONS[label])
    return event


class DialogController:
    """
    Drives one booking conversation per chat.

    Events that apply in any step (start, cancel, menu actions) are handled
    first; everything else goes through ``_transitions``, keyed by
    ``(step, event type)``. A pair missing from the table is ignored.
    """

    def __init__(
        self,
        sessions: SessionStore,
        repository: SupabaseClient,
        geocoder: NominatimGeocoder,
        notifier: TelegramNotifier,
        contact_phone: str = "",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.sessions = sessions
        self.repository = repository
        self.geocoder = geocoder
        self.notifier = notifier
        self.contact_phone = contact_phone
        self.clock = clock

    async def handle(self, user: ChatUser, event) -> Optional[Reply]:
        """Process one inbound event; returns the reply to send, if any."""
        async with self.sessions.lock(user.chat_id):
            return await self._dispatch(user, classify(event))

    async def reset(self, chat_id: int) -> None:
        """Return a chat to the main menu once its current event is done."""
        async with self.sessions.lock(chat_id):
            self.sessions.reset(chat_id)

    async def _dispatch(self, user: ChatUser, event) -> Optional[Reply]:
        if isinstance(event, StartRequested):
            self.sessions.reset(user.chat_id)
            return Reply(texts.WELCOME, KeyboardHint.MAIN_MENU)

        if isinstance(event, CancelRequested):
            self.sessions.reset(user.chat_id)
            return Reply(texts.ACTION_CANCELLED, KeyboardHint.MAIN_MENU)

        if isinstance(event, MenuRequested):
            return await self._on_menu(user, event.action)

        session = self.sessions.get(user.chat_id)
        transition = self._transitions.get((session.step, type(event)))
        if transition is None:
            logger.debug(
                f"Ignoring {type(event).__name__} for chat {user.chat_id} "
                f"in step {session.step.value}"
            )
            return None
        return await transition(self, user, session, event)

    # ========== Main menu ==========

    async def _on_menu(self, user: ChatUser, action: MenuAction) -> Reply:
        session = self.sessions.reset(user.chat_id)

        if action is MenuAction.NEW_APPOINTMENT:
            session.full_name = sanitize_text(user.display_name, MAX_NAME_LENGTH)
            session.step = Step.CONFIRM_NAME
            return Reply(
                texts.CONFIRM_NAME.format(name=session.full_name),
                KeyboardHint.YES_NO,
            )

        if action is MenuAction.LIST_APPOINTMENTS:
            return await self._list_appointments(user)

        if action is MenuAction.HELP:
            return Reply(texts.HELP, KeyboardHint.MAIN_MENU)

        return Reply(
            texts.CONTACT.format(phone=self.contact_phone), KeyboardHint.MAIN_MENU
        )

    async def _list_appointments(self, user: ChatUser) -> Reply:
        try:
            appointments = await self.repository.list_appointments_by_user(
                user.chat_id
            )
        except PersistenceError as e:
            logger.error(
                f"Failed to fetch appointments for chat {user.chat_id}: {e}",
                exc_info=True,
            )
            return Reply(texts.APPOINTMENTS_FAILED, KeyboardHint.MAIN_MENU)

        if not appointments:
            return Reply(texts.NO_APPOINTMENTS, KeyboardHint.MAIN_MENU)

        return Reply(
            texts.APPOINTMENTS_HEADER + format_listing(appointments),
            KeyboardHint.MAIN_MENU,
        )

    # ========== Name ==========

    async def _on_confirm_name(
        self, user: ChatUser, session: ConversationSession, event: TextReceived
    ) -> Optional[Reply]:
        answer = event.text.strip()

        if answer == texts.BTN_YES:
            if not session.full_name:
                # Nothing to confirm when the profile has no name
                session.step = Step.ASK_NAME
                return Reply(texts.ASK_NAME, KeyboardHint.REMOVE)
            session.step = Step.ASK_PHONE
            return Reply(texts.ASK_PHONE, KeyboardHint.REQUEST_PHONE)

        if answer == texts.BTN_NO:
            session.full_name = None
            session.step = Step.ASK_NAME
            return Reply(texts.ASK_NAME, KeyboardHint.REMOVE)

        return None

    async def _on_name(
        self, user: ChatUser, session: ConversationSession, event: TextReceived
    ) -> Reply:
        try:
            name = require_text(event.text, "full_name", MAX_NAME_LENGTH)
        except ValidationError:
            if sanitize_text(event.text):
                return Reply(
                    texts.NAME_TOO_LONG.format(limit=MAX_NAME_LENGTH), KeyboardHint.REMOVE
                )
            return Reply(texts.ASK_NAME, KeyboardHint.REMOVE)

        session.full_name = name
        session.step = Step.ASK_PHONE
        return Reply(
            texts.ASK_PHONE_AFTER_NAME.format(name=name), KeyboardHint.REQUEST_PHONE
        )

    # ========== Phone ==========

    async def _on_phone(
        self, user: ChatUser, session: ConversationSession, event: ContactShared
    ) -> Reply:
        phone = sanitize_text(event.phone)
        if not phone:
            return await self._reprompt_phone(user, session, event)

        session.phone = phone
        session.step = Step.ASK_ADDRESS
        return Reply(texts.ASK_ADDRESS, KeyboardHint.REQUEST_LOCATION)

    async def _reprompt_phone(
        self, user: ChatUser, session: ConversationSession, event
    ) -> Reply:
        return Reply(texts.ASK_PHONE_AGAIN, KeyboardHint.REQUEST_PHONE)

    # ========== Address ==========

    async def _on_location(
        self, user: ChatUser, session: ConversationSession, event: LocationShared
    ) -> Reply:
        result = await self.geocoder.resolve(event.latitude, event.longitude)
        if result.degraded:
            logger.warning(
                f"Using fallback address for chat {user.chat_id} "
                f"at ({event.latitude}, {event.longitude})"
            )

        session.location = Location(latitude=event.latitude, longitude=event.longitude)
        session.address = result.short_address
        session.full_address = result.full_address
        session.step = Step.ASK_WEEKDAY

        return Reply(
            texts.LOCATION_RECEIVED.format(
                address=result.full_address or result.short_address
            ),
            KeyboardHint.WEEKDAYS,
        )

    async def _on_address_text(
        self, user: ChatUser, session: ConversationSession, event: TextReceived
    ) -> Reply:
        try:
            address = require_text(event.text, "address", MAX_ADDRESS_LENGTH)
        except ValidationError:
            if sanitize_text(event.text):
                return Reply(
                    texts.ADDRESS_TOO_LONG.format(limit=MAX_ADDRESS_LENGTH),
                    KeyboardHint.REQUEST_LOCATION,
                )
            return Reply(texts.ASK_ADDRESS_AGAIN, KeyboardHint.REQUEST_LOCATION)

        session.address = address
        session.location = None
        session.full_address = None
        session.step = Step.ASK_WEEKDAY
        return Reply(texts.ASK_WEEKDAY, KeyboardHint.WEEKDAYS)

    # ========== Weekday ==========

    async def _on_weekday(
        self, user: ChatUser, session: ConversationSession, event: TextReceived
    ) -> Optional[Reply]:
        weekday = Weekday.from_label(event.text.strip())
        if weekday is None:
            return None

        session.weekday = weekday
        session.step = Step.CONFIRM_APPOINTMENT
        return Reply(
            texts.CONFIRM_APPOINTMENT.format(details=format_confirmation(session)),
            KeyboardHint.CONFIRM_APPOINTMENT,
        )

    # ========== Confirmation ==========

    async def _on_confirm_appointment(
        self, user: ChatUser, session: ConversationSession, event: TextReceived
    ) -> Optional[Reply]:
        if event.text.strip() != texts.BTN_YES:
            return None
        return await self._commit(user, session)

    def _build_appointment(
        self, user: ChatUser, session: ConversationSession
    ) -> AppointmentCreate:
        return AppointmentCreate(
            chat_id=user.chat_id,
            full_name=session.full_name,
            phone=session.phone,
            address=session.address,
            full_address=session.full_address if session.location else None,
            location=session.location,
            weekday=session.weekday,
            created_at=self.clock(),
        )

    async def _commit(self, user: ChatUser, session: ConversationSession) -> Reply:
        """Persist, then notify. Only a persistence failure keeps the session."""
        if session.pending is None:
            session.pending = self._build_appointment(user, session)

        try:
            appointment = await self.repository.insert_appointment(session.pending)
        except PersistenceError as e:
            logger.error(
                f"Failed to save appointment for chat {user.chat_id}: {e}",
                exc_info=True,
            )
            return Reply(texts.BOOKING_FAILED, KeyboardHint.CONFIRM_APPOINTMENT)

        try:
            await self.notifier.notify(appointment)
        except NotificationError as e:
            logger.error(
                f"Appointment {appointment.id} saved but the operator "
                f"was not notified: {e}",
                exc_info=True,
            )

        self.sessions.reset(user.chat_id)
        return Reply(texts.BOOKING_SAVED, KeyboardHint.MAIN_MENU)

    _transitions = {
        (Step.CONFIRM_NAME, TextReceived): _on_confirm_name,
        (Step.ASK_NAME, TextReceived): _on_name,
        (Step.ASK_PHONE, ContactShared): _on_phone,
        (Step.ASK_PHONE, TextReceived): _reprompt_phone,
        (Step.ASK_PHONE, LocationShared): _reprompt_phone,
        (Step.ASK_ADDRESS, LocationShared): _on_location,
        (Step.ASK_ADDRESS, TextReceived): _on_address_text,
        (Step.ASK_WEEKDAY, TextReceived): _on_weekday,
        (Step.CONFIRM_APPOINTMENT, TextReceived): _on_confirm_appointment,
    }
