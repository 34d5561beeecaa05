"""Registration flow: one step per profile field, merged into the store at the end."""

import logging
from dataclasses import dataclass, fields
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import upsert_user
from ..i18n import L
from ..types import Reply
from .engine import Flow
from .steps import (
    bounded_int,
    city_parser,
    city_prompt,
    field_step,
    parse_text,
    static_prompt,
    tags_parser,
)

logger = logging.getLogger(__name__)

MAX_AGE = 150


@dataclass
class RegistrationDraft:
    """Profile fields collected so far; None means "not given in this run"."""

    telegram_id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = None
    city: str | None = None
    stack: list[str] | None = None
    experience_months: int | None = None
    salary: int | None = None
    company: str | None = None
    interests: list[str] | None = None

    def profile_fields(self) -> dict[str, Any]:
        return {
            f.name: value
            for f in fields(self)
            if f.name != "telegram_id"
            and (value := getattr(self, f.name)) is not None
        }


async def save_registration(
    session: AsyncSession, draft: RegistrationDraft
) -> Reply:
    values = draft.profile_fields() | {
        "last_experience_update": datetime.now(UTC)
    }
    try:
        await upsert_user(session, draft.telegram_id, values)
    except SQLAlchemyError:
        logger.exception(
            "Failed to save registration for telegram_id=%d", draft.telegram_id
        )
        await session.rollback()
        return Reply(text=L.system.errors.STORE_UNAVAILABLE, remove_keyboard=True)

    logger.info(
        "Saved registration for telegram_id=%d (%s)",
        draft.telegram_id,
        ", ".join(sorted(values)),
    )
    return Reply(text=L.registration.COMPLETED, remove_keyboard=True)


_errors = L.registration.errors

REGISTRATION_FLOW: Flow[RegistrationDraft] = Flow(
    name="registration",
    steps=(
        field_step(
            "first_name", static_prompt(L.registration.FIRST_NAME), parse_text
        ),
        field_step(
            "last_name", static_prompt(L.registration.LAST_NAME), parse_text
        ),
        field_step(
            "age",
            static_prompt(L.registration.AGE),
            bounded_int(_errors.AGE_INVALID, maximum=MAX_AGE),
        ),
        field_step(
            "city",
            city_prompt(L.registration.CITY_CHOOSE, L.registration.CITY_FREE),
            city_parser(_errors.CITY_EMPTY),
        ),
        field_step(
            "stack",
            static_prompt(L.registration.STACK, remove_keyboard=True),
            tags_parser(_errors.TAGS_EMPTY),
        ),
        field_step(
            "experience_months",
            static_prompt(L.registration.EXPERIENCE),
            bounded_int(_errors.EXPERIENCE_INVALID),
        ),
        field_step(
            "salary",
            static_prompt(L.registration.SALARY),
            bounded_int(_errors.SALARY_INVALID),
        ),
        field_step(
            "company", static_prompt(L.registration.COMPANY), parse_text
        ),
        field_step(
            "interests",
            static_prompt(L.registration.INTERESTS),
            tags_parser(_errors.TAGS_EMPTY),
        ),
    ),
    commit=save_registration,
)
