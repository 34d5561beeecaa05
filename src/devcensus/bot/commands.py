import logging

from aiogram import Bot
from aiogram.types import BotCommand

from ..i18n import L

logger = logging.getLogger(__name__)


def bot_commands() -> list[BotCommand]:
    descriptions = L.commands.descriptions
    return [
        BotCommand(command="start", description=descriptions.START),
        BotCommand(command="profile", description=descriptions.PROFILE),
        BotCommand(command="update", description=descriptions.UPDATE),
        BotCommand(command="search", description=descriptions.SEARCH),
        BotCommand(command="stats", description=descriptions.STATS),
        BotCommand(command="cancel", description=descriptions.CANCEL),
    ]


async def register_commands(bot: Bot) -> None:
    """Publish the command menu shown by Telegram clients"""
    commands = bot_commands()
    await bot.set_my_commands(commands)
    logger.info("Registered %d bot commands", len(commands))
