from aiogram import Bot, Dispatcher

from ..config import SETTINGS
from .handlers import router


def create_bot() -> Bot:
    """Create and configure Bot instance"""
    return Bot(token=SETTINGS.telegram_bot_token)


def create_dispatcher() -> Dispatcher:
    """Create and configure Dispatcher with all routers"""
    dp = Dispatcher()
    dp.include_router(router)
    return dp


def initialize_bot() -> tuple[Bot, Dispatcher]:
    return create_bot(), create_dispatcher()
