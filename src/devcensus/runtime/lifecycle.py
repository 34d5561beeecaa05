"""Startup/shutdown work shared by every runtime mode."""

import logging

from aiogram import Bot

from ..bot.commands import register_commands
from ..bot.handlers import step_engine
from ..db import normalize_stored_cities
from ..jobs import start_scheduler, stop_scheduler
from ..models import async_session_maker

logger = logging.getLogger(__name__)


async def on_startup(bot: Bot) -> None:
    await register_commands(bot)

    async with async_session_maker() as session:
        await normalize_stored_cities(session)
    logger.info("Normalized stored cities to lowercase")

    start_scheduler(step_engine)


async def on_shutdown() -> None:
    stop_scheduler()
