"""
Main entry point for the Telegram Appointment Bot.
Supports both polling and webhook modes.
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web

from bot import get_bot_commands, register_handlers
from bot.dialog import DialogController
from bot.notifier import TelegramNotifier
from bot.session_store import SessionStore
from config import settings
from db import get_db_client
from utils.geocoding import NominatimGeocoder
from utils.logging_config import setup_logging

WEBHOOK_PATH = "/webhook/telegram"

# Root logger, so every module logger and aiogram share the handlers
setup_logging(log_level=settings.log_level, log_file="bot.log", log_dir=settings.log_dir)
logger = logging.getLogger(__name__)


def build_dispatcher(bot: Bot, geocoder: NominatimGeocoder) -> Dispatcher:
    """Wire the dialog controller and its collaborators into a dispatcher."""
    controller = DialogController(
        sessions=SessionStore(),
        repository=get_db_client(),
        geocoder=geocoder,
        notifier=TelegramNotifier(bot, settings.admin_chat_id),
        contact_phone=settings.contact_phone,
    )

    dp = Dispatcher()
    # Handlers receive it as the `controller` argument
    dp["controller"] = controller
    register_handlers(dp)
    return dp


async def on_startup(bot: Bot, dp: Dispatcher) -> None:
    """Register commands and configure the webhook if one is set."""
    await bot.set_my_commands(get_bot_commands())

    if settings.bot_webhook_url:
        webhook_url = f"{settings.bot_webhook_url.rstrip('/')}{WEBHOOK_PATH}"
        await bot.set_webhook(
            url=webhook_url,
            allowed_updates=dp.resolve_used_update_types(),
        )
        logger.info(f"Webhook configured: {webhook_url}")
    else:
        logger.info("Webhook URL not configured, using polling mode")


async def on_shutdown(bot: Bot) -> None:
    """Cleanup on shutdown."""
    if settings.bot_webhook_url:
        await bot.delete_webhook()
        logger.info("Webhook removed")


async def run_webhook(bot: Bot, dp: Dispatcher) -> None:
    app = web.Application()
    SimpleRequestHandler(dispatcher=dp, bot=bot).register(app, path=WEBHOOK_PATH)
    setup_application(app, dp, bot=bot)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=settings.host, port=settings.port)
    await site.start()
    logger.info(f"Bot webhook server listening on {settings.host}:{settings.port}")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


async def main() -> None:
    """Main async function to run the bot."""
    try:
        settings.validate_all_required()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    bot = Bot(token=settings.bot_token)
    geocoder = NominatimGeocoder()
    dp = build_dispatcher(bot, geocoder)

    try:
        logger.info("Starting Telegram Appointment Bot...")
        await on_startup(bot, dp)

        if settings.bot_webhook_url:
            await run_webhook(bot, dp)
        else:
            logger.info("Bot is running in polling mode. Press Ctrl+C to stop.")
            await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())

    except asyncio.CancelledError:
        logger.info("Bot cancelled")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shutting down...")
        await on_shutdown(bot)
        await geocoder.aclose()

        try:
            await bot.session.close()
            logger.info("Bot session closed")
        except Exception as e:
            logger.error(f"Error closing bot session: {e}", exc_info=True)

        logger.info("Bot shutdown complete")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
