"""
Reply keyboards for bot interactions.
"""

from typing import Optional, Union

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove
from aiogram.utils.keyboard import ReplyKeyboardBuilder

from bot import texts
from bot.dialog import KeyboardHint
from models.appointment import Weekday


def get_main_menu_keyboard() -> ReplyKeyboardMarkup:
    """Get main menu keyboard."""
    builder = ReplyKeyboardBuilder()

    builder.row(KeyboardButton(text=texts.BTN_NEW_APPOINTMENT))
    builder.row(KeyboardButton(text=texts.BTN_MY_APPOINTMENTS))
    builder.row(
        KeyboardButton(text=texts.BTN_CONTACT),
        KeyboardButton(text=texts.BTN_HELP),
    )

    return builder.as_markup(resize_keyboard=True)


def get_yes_no_keyboard() -> ReplyKeyboardMarkup:
    """Get name confirmation keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(KeyboardButton(text=texts.BTN_YES), KeyboardButton(text=texts.BTN_NO))
    return builder.as_markup(resize_keyboard=True)


def get_phone_request_keyboard() -> ReplyKeyboardMarkup:
    """Get keyboard with a contact-sharing button."""
    builder = ReplyKeyboardBuilder()
    builder.row(KeyboardButton(text=texts.BTN_SEND_PHONE, request_contact=True))
    return builder.as_markup(resize_keyboard=True)


def get_location_request_keyboard() -> ReplyKeyboardMarkup:
    """Get keyboard with a location-sharing button and cancel."""
    builder = ReplyKeyboardBuilder()
    builder.row(KeyboardButton(text=texts.BTN_SEND_LOCATION, request_location=True))
    builder.row(KeyboardButton(text=texts.BTN_CANCEL))
    return builder.as_markup(resize_keyboard=True)


def get_weekdays_keyboard() -> ReplyKeyboardMarkup:
    """Get weekday selection keyboard (2, 2, 3 layout)."""
    builder = ReplyKeyboardBuilder()

    for weekday in Weekday:
        builder.button(text=weekday.value)
    builder.adjust(2, 2, 3)

    return builder.as_markup(resize_keyboard=True)


def get_confirm_appointment_keyboard() -> ReplyKeyboardMarkup:
    """Get final booking confirmation keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(
        KeyboardButton(text=texts.BTN_YES), KeyboardButton(text=texts.BTN_CANCEL)
    )
    return builder.as_markup(resize_keyboard=True)


_KEYBOARDS = {
    KeyboardHint.MAIN_MENU: get_main_menu_keyboard,
    KeyboardHint.YES_NO: get_yes_no_keyboard,
    KeyboardHint.REQUEST_PHONE: get_phone_request_keyboard,
    KeyboardHint.REQUEST_LOCATION: get_location_request_keyboard,
    KeyboardHint.WEEKDAYS: get_weekdays_keyboard,
    KeyboardHint.CONFIRM_APPOINTMENT: get_confirm_appointment_keyboard,
}


def get_keyboard(
    hint: Optional[KeyboardHint],
) -> Optional[Union[ReplyKeyboardMarkup, ReplyKeyboardRemove]]:
    """Render the keyboard a reply asks for; None leaves the current one."""
    if hint is None:
        return None
    if hint is KeyboardHint.REMOVE:
        return ReplyKeyboardRemove()
    return _KEYBOARDS[hint]()
