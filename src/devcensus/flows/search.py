"""Search flow: resolve a city, then list everyone registered there."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import find_users_by_city
from ..i18n import L
from ..services.profile_card import format_user_label
from ..types import Reply
from .engine import Flow
from .steps import city_parser, city_prompt, field_step

logger = logging.getLogger(__name__)


@dataclass
class SearchDraft:
    telegram_id: int
    city: str | None = None


async def run_search(session: AsyncSession, draft: SearchDraft) -> Reply:
    assert draft.city is not None

    try:
        users = await find_users_by_city(session, draft.city)
    except SQLAlchemyError:
        logger.exception(
            "City search for %r failed (telegram_id=%d)",
            draft.city,
            draft.telegram_id,
        )
        await session.rollback()
        return Reply(text=L.search.FAILED, remove_keyboard=True)

    if not users:
        return Reply(
            text=L.search.NOT_FOUND.format(city=draft.city),
            remove_keyboard=True,
        )

    return Reply(
        text="\n".join(
            L.search.RESULT_LINE.format(
                user=format_user_label(user), city=user.city
            )
            for user in users
        ),
        remove_keyboard=True,
    )


SEARCH_FLOW: Flow[SearchDraft] = Flow(
    name="search",
    steps=(
        field_step(
            "city",
            city_prompt(L.search.CITY_CHOOSE, L.search.CITY_FREE),
            city_parser(L.search.CITY_REQUIRED),
            skippable=False,
        ),
    ),
    commit=run_search,
)
