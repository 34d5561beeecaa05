"""Alembic environment for the users store.

Runs against DATABASE_URL through the async engine; SQLite databases get
batch mode so ALTER-style migrations can be replayed there as well.
"""

import asyncio
from logging.config import fileConfig
from typing import Any

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from alembic import context
from devcensus.config import get_settings
from devcensus.models import User

_ = (User,)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Read at migration time, not when tooling imports this module.
database_url = get_settings().database_url


def _options(dialect_name: str) -> dict[str, Any]:
    return {
        "target_metadata": SQLModel.metadata,
        "compare_type": True,
        "render_as_batch": dialect_name == "sqlite",
        "user_module_prefix": "sqlmodel.sql.sqltypes.",
    }


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(database_url.split(":", 1)[0].split("+", 1)[0]),
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_options(connection.dialect.name))
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
