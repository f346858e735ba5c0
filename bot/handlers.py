"""
Bot handlers for the Telegram appointment bot.
Translate Telegram updates into dialog events and render the replies.
"""

import logging
from typing import List, Optional

from aiogram import F, Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command
from aiogram.types import BotCommand, ErrorEvent, Message

from bot import texts
from bot.dialog import (
    CancelRequested,
    ChatUser,
    ContactShared,
    DialogController,
    LocationShared,
    MenuAction,
    MenuRequested,
    Reply,
    StartRequested,
    TextReceived,
)
from bot.keyboards import get_keyboard, get_main_menu_keyboard
from utils.exceptions import TransportError

logger = logging.getLogger(__name__)

router = Router()


def get_bot_commands() -> List[BotCommand]:
    """Commands shown in the Telegram command menu."""
    return [
        BotCommand(command="start", description="Start the bot"),
        BotCommand(command="help", description="Get help"),
        BotCommand(command="appointments", description="Show my appointments"),
        BotCommand(command="new", description="Book a new appointment"),
        BotCommand(command="cancel", description="Cancel the current action"),
        BotCommand(command="contact", description="Contact information"),
    ]


def chat_user(message: Message) -> ChatUser:
    display_name = message.from_user.full_name if message.from_user else ""
    return ChatUser(chat_id=message.chat.id, display_name=display_name)


async def send_reply(message: Message, reply: Optional[Reply]) -> None:
    """Send the controller's reply, if any, with the keyboard it asks for."""
    if reply is None:
        return

    try:
        await message.answer(reply.text, reply_markup=get_keyboard(reply.keyboard))
    except TelegramAPIError as e:
        raise TransportError(
            f"Failed to deliver reply to chat {message.chat.id}: {e}"
        ) from e


async def process(message: Message, controller: DialogController, event) -> None:
    reply = await controller.handle(chat_user(message), event)
    await send_reply(message, reply)


# ========== Commands ==========


@router.message(Command("start"))
async def cmd_start(message: Message, controller: DialogController):
    """Handle /start command."""
    await process(message, controller, StartRequested())


@router.message(Command("new"))
async def cmd_new(message: Message, controller: DialogController):
    """Handle /new command."""
    await process(message, controller, MenuRequested(MenuAction.NEW_APPOINTMENT))


@router.message(Command("appointments"))
async def cmd_appointments(message: Message, controller: DialogController):
    """Handle /appointments command."""
    await process(message, controller, MenuRequested(MenuAction.LIST_APPOINTMENTS))


@router.message(Command("help"))
async def cmd_help(message: Message, controller: DialogController):
    await process(message, controller, MenuRequested(MenuAction.HELP))


@router.message(Command("contact"))
async def cmd_contact(message: Message, controller: DialogController):
    await process(message, controller, MenuRequested(MenuAction.CONTACT))


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, controller: DialogController):
    """Handle /cancel command."""
    await process(message, controller, CancelRequested())


# ========== Payloads ==========


@router.message(F.location)
async def handle_location(message: Message, controller: DialogController):
    """Handle a shared device location."""
    location = message.location
    await process(
        message,
        controller,
        LocationShared(latitude=location.latitude, longitude=location.longitude),
    )


@router.message(F.contact)
async def handle_contact(message: Message, controller: DialogController):
    """Handle a shared contact card."""
    await process(message, controller, ContactShared(phone=message.contact.phone_number))


@router.message(F.text)
async def handle_text(message: Message, controller: DialogController):
    """Handle free text and reply-keyboard buttons."""
    if message.text.startswith("/"):
        # Unknown command
        return
    await process(message, controller, TextReceived(text=message.text))


# ========== Errors ==========


@router.errors()
async def handle_error(event: ErrorEvent, controller: DialogController):
    """Log any handler failure and bring the user back to the main menu."""
    logger.error(
        f"Error while handling update {event.update.update_id}: {event.exception}",
        exc_info=event.exception,
    )

    message = event.update.message
    if message is None:
        return True

    await controller.reset(message.chat.id)
    try:
        await message.answer(texts.GENERIC_ERROR, reply_markup=get_main_menu_keyboard())
    except TelegramAPIError as e:
        logger.error(f"Failed to send error message to chat {message.chat.id}: {e}")
    return True


def register_handlers(dp) -> None:
    """Register all handlers with dispatcher."""
    dp.include_router(router)
