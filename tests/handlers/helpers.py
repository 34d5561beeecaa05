"""Reusable factories for fake aiogram types used in handler tests.

Real Message objects with a MockedBot injected via .as_(bot); outgoing API
calls are captured and can be inspected via bot.sent_texts() or
bot.get_request().
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from unittest.mock import patch

from aiogram.types import Chat as TgChat
from aiogram.types import Message
from aiogram.types import User as TgUser
from sqlalchemy.ext.asyncio import AsyncSession

from .mocked_bot import MockedBot


def make_bot() -> MockedBot:
    return MockedBot()


def make_message(
    bot: MockedBot,
    text: str | None = "hello",
    user_id: int = 12345,
    message_id: int = 1,
    *,
    username: str | None = "tester",
) -> Message:
    """Create a real private-chat Message with MockedBot injected."""
    msg = Message(
        message_id=message_id,
        date=datetime.now(),
        chat=TgChat(id=user_id, type="private"),
        from_user=TgUser(
            id=user_id, is_bot=False, first_name="Test", username=username
        ),
        text=text,
    )
    msg.as_(bot)
    return msg


@asynccontextmanager
async def patch_get_db(
    session: AsyncSession,
) -> AsyncGenerator[None, None]:
    """Context manager that makes the handlers use the test session."""

    async def fake_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield session

    with patch("devcensus.bot.handlers.get_db", fake_get_db):
        yield
