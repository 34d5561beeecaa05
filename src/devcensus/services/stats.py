"""Aggregate statistics over registered users."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ..db import average_salary, count_users
from ..i18n import L


@dataclass(frozen=True)
class UserStats:
    total_users: int
    average_salary: float


async def collect_stats(session: AsyncSession) -> UserStats:
    average = await average_salary(session)
    return UserStats(
        total_users=await count_users(session),
        average_salary=average if average is not None else 0.0,
    )


def format_stats(stats: UserStats) -> str:
    return L.commands.stats.SUMMARY.format(
        count=stats.total_users, average=round(stats.average_salary)
    )
