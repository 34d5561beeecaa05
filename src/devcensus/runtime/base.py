from typing import Protocol

from aiogram import Bot, Dispatcher


class BotRuntime(Protocol):
    """How updates reach the dispatcher: long polling or a webhook app."""

    async def startup(self, bot: Bot, dp: Dispatcher) -> None:
        """Point Telegram at this process, then run the shared startup work"""
        ...

    async def run(self, bot: Bot, dp: Dispatcher) -> None:
        """Block while serving updates; webhook mode leaves this to uvicorn"""
        ...

    async def shutdown(self, bot: Bot, dp: Dispatcher) -> None: ...
