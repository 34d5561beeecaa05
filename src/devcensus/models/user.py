from datetime import UTC, datetime
from typing import Any, ClassVar

from sqlalchemy import BigInteger, DateTime, Text, func
from sqlmodel import Column, Field, SQLModel

from .types import JSONBStringList

# Fields a registration run may write; telegram_id is the key, not a field.
PROFILE_FIELDS = (
    "username",
    "first_name",
    "last_name",
    "age",
    "city",
    "stack",
    "experience_months",
    "salary",
    "company",
    "interests",
    "last_experience_update",
)


class User(SQLModel, table=True):
    __tablename__: ClassVar[Any] = "users"

    telegram_id: int = Field(
        sa_column=Column(BigInteger(), primary_key=True, autoincrement=False)
    )
    username: str | None = Field(
        default=None,
        sa_column=Column(Text(), nullable=True, index=True),
        description="Telegram handle without the leading @; not unique",
    )
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = None
    city: str | None = Field(
        default=None,
        sa_column=Column(Text(), nullable=True, index=True),
        description="Trimmed and lowercased at write time",
    )
    stack: list[str] | None = Field(
        default=None,
        sa_column=Column(JSONBStringList(), nullable=True),
    )
    experience_months: int | None = None
    salary: int | None = None
    company: str | None = None
    interests: list[str] | None = Field(
        default=None,
        sa_column=Column(JSONBStringList(), nullable=True),
    )
    last_experience_update: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Set whenever experience_months is written or accrued",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(
            DateTime(timezone=True), nullable=False, server_default=func.now()
        ),
    )

    @property
    def experience_years(self) -> float | None:
        """Experience rounded to one decimal year"""
        if self.experience_months is None:
            return None
        return round(self.experience_months / 12, 1)
