import logging

from aiogram import Router
from aiogram.types import ErrorEvent

from ..i18n import L

logger = logging.getLogger(__name__)


class BotError(Exception):
    """Raised when a bot invariant is violated with a specific user-visible message."""

    def __init__(self, user_message: str) -> None:
        self.user_message = user_message
        super().__init__(user_message)


def register_error_handler(router: Router) -> None:
    router.errors.register(handle_error)


async def handle_error(event: ErrorEvent) -> None:
    """Log the failure and answer with a generic message, never the raw error."""
    message = event.update.message
    chat_id = message.chat.id if message is not None else None

    if isinstance(event.exception, BotError):
        logger.warning(
            "Update %d (chat_id=%s) rejected: %s",
            event.update.update_id,
            chat_id,
            event.exception.user_message,
        )
        text = event.exception.user_message
    else:
        logger.error(
            "Unhandled error for update %d (chat_id=%s)",
            event.update.update_id,
            chat_id,
            exc_info=event.exception,
        )
        text = L.system.errors.SOMETHING_WENT_WRONG

    if message is not None:
        await message.answer(text)
