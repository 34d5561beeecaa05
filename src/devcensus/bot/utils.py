from aiogram.types import Message
from aiogram.types import User as TgUser

from ..i18n import L
from ..types import Reply
from .errors import BotError
from .keyboards import reply_markup


def require_sender(message: Message) -> TgUser:
    if message.from_user is None:
        raise BotError(L.system.errors.NO_SENDER)
    return message.from_user


async def send_reply(message: Message, reply: Reply) -> Message:
    return await message.answer(reply.text, reply_markup=reply_markup(reply))
