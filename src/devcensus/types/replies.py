"""Transport-neutral outgoing replies.

Flows and services describe what to send; the bot layer renders a Reply into
an aiogram call (see ``bot.keyboards.reply_markup``).
"""

from pydantic import BaseModel, model_validator


class Reply(BaseModel):
    """A plain-text reply with an optional choice keyboard."""

    text: str
    options: list[str] | None = None
    remove_keyboard: bool = False

    @model_validator(mode="after")
    def validate_keyboard(self) -> "Reply":
        """A reply either offers choices or removes the keyboard, not both"""
        if self.options and self.remove_keyboard:
            raise ValueError("Reply cannot both offer options and remove the keyboard")
        return self
