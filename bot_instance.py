"""
Shared Telegram Bot used for staff notifications.

The storefront never receives updates; it only sends messages, so there is
no Dispatcher here. The Bot (and its HTTP session) is created on first use
and closed once at shutdown.
"""

import logging

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

import config

_notification_bot: Bot | None = None


def get_bot() -> Bot:
    """
    Get the notification Bot, creating it on first call.

    Messages default to HTML parse mode; link previews are off so the
    Google Maps link in delivery orders does not expand in staff chats.

    Raises:
        RuntimeError: If TOKEN is not configured
    """
    global _notification_bot
    if _notification_bot is None:
        if not config.TOKEN:
            raise RuntimeError("TOKEN is not configured; staff notifications cannot be sent")
        _notification_bot = Bot(
            token=config.TOKEN,
            default=DefaultBotProperties(
                parse_mode=ParseMode.HTML,
                link_preview_is_disabled=True,
            )
        )
        logging.debug("Notification bot created")
    return _notification_bot


async def close_bot() -> None:
    global _notification_bot
    if _notification_bot is not None:
        await _notification_bot.session.close()
        _notification_bot = None
