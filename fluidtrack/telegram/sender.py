"""
Telegram message sender.
Thin transport: one send primitive, no conversational commands.
"""

import logging
from typing import Optional

from telegram import Bot
from telegram.error import Forbidden, TelegramError

from fluidtrack.domain.errors import DeliveryFailed

logger = logging.getLogger(__name__)


class TelegramMessageSender:
    """Send plain-text reports through the Telegram Bot API."""

    def __init__(self, token: Optional[str] = None, bot: Optional[Bot] = None):
        if bot is None:
            if not token:
                raise ValueError("TELEGRAM_BOT_TOKEN not set in environment")
            bot = Bot(token)
        self.bot = bot

    async def start(self) -> None:
        await self.bot.initialize()
        logger.info("🤖 Telegram sender ready")

    async def stop(self) -> None:
        await self.bot.shutdown()

    async def send_message(self, recipient_id: int, text: str) -> None:
        """
        Raises:
            DeliveryFailed: Telegram rejected or could not deliver the message
        """
        try:
            await self.bot.send_message(chat_id=recipient_id, text=text)
        except Forbidden as exc:
            # Usually the recipient never pressed Start on the bot
            raise DeliveryFailed(
                recipient_id, f"forbidden, has the user started the bot? ({exc.message})"
            ) from exc
        except TelegramError as exc:
            raise DeliveryFailed(recipient_id, exc.message) from exc
