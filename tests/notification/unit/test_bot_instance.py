from unittest.mock import AsyncMock, patch

import pytest

import bot_instance


@pytest.fixture(autouse=True)
def reset_bot():
    bot_instance._notification_bot = None
    yield
    bot_instance._notification_bot = None


def test_get_bot_is_shared():
    assert bot_instance.get_bot() is bot_instance.get_bot()


def test_get_bot_requires_token():
    with patch("bot_instance.config.TOKEN", ""):
        with pytest.raises(RuntimeError):
            bot_instance.get_bot()


@pytest.mark.asyncio
async def test_close_bot():
    bot = bot_instance.get_bot()
    with patch.object(bot.session, "close", new_callable=AsyncMock) as mock_close:
        await bot_instance.close_bot()

    mock_close.assert_awaited_once()
    assert bot_instance._notification_bot is None
