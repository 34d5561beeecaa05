import asyncio
import logging

import uvicorn
from fastapi import FastAPI

from .bot import initialize_bot
from .config import SETTINGS
from .runtime import BotRuntime, PollingRuntime, WebhookRuntime

logger = logging.getLogger(__name__)


async def run_polling() -> None:
    bot, dp = initialize_bot()
    runtime: BotRuntime = PollingRuntime()
    await runtime.startup(bot, dp)
    try:
        await runtime.run(bot, dp)
    finally:
        await runtime.shutdown(bot, dp)


def create_webhook_app() -> FastAPI:
    bot, dp = initialize_bot()
    return WebhookRuntime().create_app(bot, dp)


def main() -> None:
    logging.basicConfig(
        level=SETTINGS.log_level.upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Starting devcensus bot in %s mode", SETTINGS.bot_runtime)

    if SETTINGS.bot_runtime == "webhook":
        uvicorn.run(
            create_webhook_app(),
            host=SETTINGS.webhook_host,
            port=SETTINGS.webhook_port,
        )
    else:
        asyncio.run(run_polling())


if __name__ == "__main__":
    main()
