"""Create users table"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_create_users"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# JSON array of strings; plain text on SQLite
STRING_LIST = sa.Text().with_variant(
    postgresql.JSONB(astext_type=sa.Text()), "postgresql"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "telegram_id", sa.BigInteger(), autoincrement=False, nullable=False
        ),
        sa.Column("username", sa.Text(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("city", sa.Text(), nullable=True),
        sa.Column("stack", STRING_LIST, nullable=True),
        sa.Column("experience_months", sa.Integer(), nullable=True),
        sa.Column("salary", sa.Integer(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("interests", STRING_LIST, nullable=True),
        sa.Column(
            "last_experience_update", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("telegram_id"),
    )
    op.create_index("ix_users_username", "users", ["username"])
    op.create_index("ix_users_city", "users", ["city"])


def downgrade() -> None:
    op.drop_index("ix_users_city", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
