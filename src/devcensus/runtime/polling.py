import logging

from aiogram import Bot, Dispatcher

from .lifecycle import on_shutdown, on_startup

logger = logging.getLogger(__name__)


class PollingRuntime:
    """Long polling runtime for development"""

    async def startup(self, bot: Bot, dp: Dispatcher) -> None:
        logger.info("Starting polling mode")
        # A leftover webhook would make getUpdates fail
        await bot.delete_webhook()
        await on_startup(bot)

    async def run(self, bot: Bot, dp: Dispatcher) -> None:
        """Start long polling (blocking)"""
        await dp.start_polling(bot, handle_signals=True)

    async def shutdown(self, bot: Bot, dp: Dispatcher) -> None:
        await on_shutdown()
        await bot.session.close()
