"""Profile store queries: thin wrappers around SELECT/UPDATE statements on users."""

from datetime import datetime
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from .models import PROFILE_FIELDS, User
from .utils.normalization import normalize_city

TOP_CITIES_LIMIT = 10


async def get_user_or_none(
    session: AsyncSession, telegram_id: int
) -> User | None:
    return (
        await session.execute(
            select(User).where(col(User.telegram_id) == telegram_id)
        )
    ).scalar_one_or_none()


async def get_user_by_username_or_none(
    session: AsyncSession, username: str
) -> User | None:
    # Handles are not unique; the earliest registration wins.
    return (
        (
            await session.execute(
                select(User)
                .where(col(User.username) == username)
                .order_by(col(User.created_at), col(User.telegram_id))
                .limit(1)
            )
        )
        .scalars()
        .first()
    )


async def upsert_user(
    session: AsyncSession, telegram_id: int, fields: dict[str, Any]
) -> User:
    """Insert the user or merge ``fields`` into the stored record.

    Only the given keys are written; stored values of every other field are
    left as they are.
    """
    unknown = set(fields) - set(PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

    user = await get_user_or_none(session, telegram_id)
    if user is None:
        user = User(telegram_id=telegram_id, **fields)
        session.add(user)
    else:
        for key, value in fields.items():
            setattr(user, key, value)

    await session.commit()
    await session.refresh(user)
    return user


async def find_users_by_city(session: AsyncSession, city: str) -> list[User]:
    return list(
        (
            await session.execute(
                select(User)
                .where(func.lower(col(User.city)) == normalize_city(city))
                .order_by(col(User.username).nulls_last(), col(User.telegram_id))
            )
        )
        .scalars()
        .all()
    )


async def count_users(session: AsyncSession) -> int:
    return (
        await session.execute(select(func.count()).select_from(User))
    ).scalar_one()


async def average_salary(session: AsyncSession) -> float | None:
    """Mean salary over users that have one; None when nobody does."""
    value = (
        await session.execute(
            select(func.avg(col(User.salary))).where(
                col(User.salary).is_not(None)
            )
        )
    ).scalar_one()
    return None if value is None else float(value)


async def top_cities(
    session: AsyncSession, limit: int = TOP_CITIES_LIMIT
) -> list[tuple[str, int]]:
    city = func.lower(col(User.city))
    count = func.count().label("count")
    rows = await session.execute(
        select(city.label("city"), count)
        .where(col(User.city).is_not(None))
        .group_by(city)
        .order_by(count.desc(), city)
        .limit(limit)
    )
    return [(name, total) for name, total in rows]


async def get_experience_candidates(
    session: AsyncSession,
) -> list[tuple[int, int, datetime | None]]:
    """(telegram_id, experience_months, last_experience_update) of every user with experience."""
    rows = await session.execute(
        select(
            col(User.telegram_id),
            col(User.experience_months),
            col(User.last_experience_update),
        )
        .where(col(User.experience_months).is_not(None))
        .order_by(col(User.telegram_id))
    )
    return [
        (telegram_id, months, last_update)
        for telegram_id, months, last_update in rows
        if months is not None
    ]


async def increment_experience(
    session: AsyncSession,
    telegram_id: int,
    months: int,
    now: datetime,
    last_update: datetime,
) -> bool:
    """Single-statement increment, applied only if the record still carries
    ``last_update``.

    Returns False when the record changed since it was read (for instance a
    profile update committed in between), leaving it untouched.
    """
    result = await session.execute(
        update(User)
        .where(
            col(User.telegram_id) == telegram_id,
            col(User.last_experience_update) == last_update,
        )
        .values(
            experience_months=col(User.experience_months) + months,
            last_experience_update=now,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1  # type: ignore[attr-defined]


async def normalize_stored_cities(session: AsyncSession) -> None:
    await session.execute(
        update(User)
        .where(col(User.city).is_not(None))
        .values(city=func.lower(func.trim(col(User.city))))
    )
    await session.commit()
