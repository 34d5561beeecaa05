import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from aiogram import Bot, Dispatcher
from aiogram.types import Update
from fastapi import FastAPI, Header, Request, Response

from ..config import SETTINGS
from .lifecycle import on_shutdown, on_startup

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"


class WebhookRuntime:
    """Telegram pushes updates to a FastAPI endpoint served by uvicorn.

    TELEGRAM_WEBHOOK_URL must point at WEBHOOK_PATH on this app. When
    TELEGRAM_WEBHOOK_SECRET is set, Telegram echoes it in the
    X-Telegram-Bot-Api-Secret-Token header and requests without it are refused.
    """

    async def startup(self, bot: Bot, dp: Dispatcher) -> None:
        assert SETTINGS.telegram_webhook_url is not None
        await bot.set_webhook(
            url=SETTINGS.telegram_webhook_url,
            secret_token=SETTINGS.telegram_webhook_secret,
            allowed_updates=dp.resolve_used_update_types(),
        )
        logger.info("Webhook set to %s", SETTINGS.telegram_webhook_url)
        await on_startup(bot)

    async def shutdown(self, bot: Bot, dp: Dispatcher) -> None:
        await on_shutdown()
        await bot.delete_webhook()
        await bot.session.close()

    async def run(self, bot: Bot, dp: Dispatcher) -> None:
        pass

    def create_app(self, bot: Bot, dp: Dispatcher) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            await self.startup(bot, dp)
            yield
            await self.shutdown(bot, dp)

        app = FastAPI(lifespan=lifespan)

        @app.post(WEBHOOK_PATH)
        async def receive_update(
            request: Request,
            secret_token: Annotated[
                str | None, Header(alias="X-Telegram-Bot-Api-Secret-Token")
            ] = None,
        ) -> Response:
            expected = SETTINGS.telegram_webhook_secret
            if expected and secret_token != expected:
                logger.warning("Rejected webhook call with a wrong secret token")
                return Response(status_code=403)

            update = Update.model_validate(
                await request.json(), context={"bot": bot}
            )
            await dp.feed_update(bot, update)
            return Response(status_code=200)

        @app.get("/health")
        async def health() -> dict[str, str]:
            return {"status": "ok", "runtime": "webhook"}

        _ = (receive_update, health)

        return app
