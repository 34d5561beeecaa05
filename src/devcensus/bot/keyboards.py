from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove

from ..types import Reply


def choice_keyboard(options: list[str]) -> ReplyKeyboardMarkup:
    """One option per row; hides itself after a choice is made."""
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=option)] for option in options],
        one_time_keyboard=True,
        resize_keyboard=True,
    )


def reply_markup(reply: Reply) -> ReplyKeyboardMarkup | ReplyKeyboardRemove | None:
    if reply.options:
        return choice_keyboard(reply.options)
    if reply.remove_keyboard:
        return ReplyKeyboardRemove()
    return None
