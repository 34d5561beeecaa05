"""Custom SQLAlchemy types for cross-database compatibility"""

import json
from typing import Any, cast

from sqlalchemy import Dialect, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB


class JSONBStringList(TypeDecorator[list[str]]):
    """JSONB list of strings that works with both PostgreSQL and SQLite.

    - PostgreSQL: native JSONB
    - SQLite: Text with JSON encoding/decoding

    NULL stays NULL so that an omitted field is distinguishable from an
    empty list.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> Any:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(
        self, value: list[str] | None, dialect: Dialect
    ) -> list[str] | str | None:
        if value is None:
            return None

        items = [str(item) for item in value]
        return items if dialect.name == "postgresql" else json.dumps(items)

    def process_result_value(
        self, value: Any, dialect: Dialect
    ) -> list[str] | None:
        if value is None:
            return None

        if isinstance(value, str):
            value = json.loads(value)

        return [str(item) for item in cast(list[Any], value)]
