from unittest.mock import AsyncMock

import pytest
from telegram.error import Forbidden, NetworkError

from fluidtrack.domain.errors import DeliveryFailed
from fluidtrack.telegram.sender import TelegramMessageSender


@pytest.fixture
def bot():
    return AsyncMock()


@pytest.mark.unit
class TestTelegramMessageSender:

    async def test_sends_plain_text(self, bot):
        sender = TelegramMessageSender(bot=bot)

        await sender.send_message(101, "📋 Maya report")

        bot.send_message.assert_awaited_once_with(chat_id=101, text="📋 Maya report")

    async def test_forbidden_becomes_delivery_failed(self, bot):
        bot.send_message.side_effect = Forbidden("Forbidden: bot was blocked by the user")
        sender = TelegramMessageSender(bot=bot)

        with pytest.raises(DeliveryFailed) as exc_info:
            await sender.send_message(202, "hello")

        assert exc_info.value.recipient_id == 202
        assert "has the user started the bot" in exc_info.value.reason
        assert "bot was blocked by the user" in exc_info.value.reason

    async def test_network_error_becomes_delivery_failed(self, bot):
        bot.send_message.side_effect = NetworkError("Connection aborted")
        sender = TelegramMessageSender(bot=bot)

        with pytest.raises(DeliveryFailed) as exc_info:
            await sender.send_message(303, "hello")

        assert exc_info.value.reason == "Connection aborted"

    async def test_start_and_stop_manage_bot(self, bot):
        sender = TelegramMessageSender(bot=bot)

        await sender.start()
        await sender.stop()

        bot.initialize.assert_awaited_once()
        bot.shutdown.assert_awaited_once()

    def test_requires_token_or_bot(self):
        with pytest.raises(ValueError):
            TelegramMessageSender(token=None)
