"""Top-cities suggestions shared by the registration and search flows."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import top_cities

logger = logging.getLogger(__name__)


async def suggest_cities(session: AsyncSession) -> list[str]:
    """Most popular cities, most common first; empty if the store fails."""
    try:
        return [city for city, _ in await top_cities(session)]
    except SQLAlchemyError:
        logger.exception("Failed to fetch top cities, continuing without suggestions")
        await session.rollback()
        return []
