"""Building blocks for flow steps: field handlers, parsers and prompts."""

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from ..i18n import L
from ..services.cities import suggest_cities
from ..types import Reply
from ..utils import normalize_city, split_tags
from .engine import PromptFn, Step
from .errors import StepValidationError
from .results import Proceed, Retry, StepOutcome

SKIP_TOKEN = "/skip"

type FieldParser[T] = Callable[[str], T]


def field_step[DraftT](
    field: str,
    prompt: PromptFn,
    parse: FieldParser[object],
    *,
    skippable: bool = True,
) -> Step[DraftT]:
    """A step that parses one inbound text into ``draft.<field>``.

    The skip token leaves the draft untouched and moves on. Parser failures
    become a retry carrying the parser's message, again without touching the
    draft.
    """

    def handle(text: str | None, draft: DraftT) -> StepOutcome:
        if text is None:
            return Retry(L.system.errors.TEXT_REQUIRED)
        if skippable and text.strip() == SKIP_TOKEN:
            return Proceed()
        try:
            value = parse(text)
        except StepValidationError as e:
            return Retry(e.user_message)
        setattr(draft, field, value)
        return Proceed()

    return Step(field=field, prompt=prompt, handle=handle)


# Parsers


def parse_text(text: str) -> str:
    return text


def bounded_int(
    error: str, minimum: int = 0, maximum: int | None = None
) -> FieldParser[int]:
    def parse(text: str) -> int:
        try:
            value = int(text.strip())
        except ValueError:
            raise StepValidationError(error) from None
        if value < minimum or (maximum is not None and value > maximum):
            raise StepValidationError(error)
        return value

    return parse


def city_parser(error: str) -> FieldParser[str]:
    def parse(text: str) -> str:
        if not (city := normalize_city(text)):
            raise StepValidationError(error)
        return city

    return parse


def tags_parser(error: str) -> FieldParser[list[str]]:
    def parse(text: str) -> list[str]:
        if not (tags := split_tags(text)):
            raise StepValidationError(error)
        return tags

    return parse


# Prompts


def static_prompt(text: str, *, remove_keyboard: bool = False) -> PromptFn:
    async def prompt(session: AsyncSession) -> Reply:
        return Reply(text=text, remove_keyboard=remove_keyboard)

    return prompt


def city_prompt(choose_text: str, free_text: str) -> PromptFn:
    """Offer the top cities as a keyboard, or ask for free text if there are none."""

    async def prompt(session: AsyncSession) -> Reply:
        if cities := await suggest_cities(session):
            return Reply(text=choose_text, options=cities)
        return Reply(text=free_text)

    return prompt
