"""token price cache

Revision ID: 0001_token_prices
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001_token_prices"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "token_prices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token_address", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.Integer(), nullable=False),
        sa.Column("price_usd", sa.Numeric(precision=38, scale=18), nullable=False),
        sa.Column("source", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_token_prices")),
        sa.UniqueConstraint("token_address", "timestamp", name="uq_token_prices_token_address_timestamp"),
    )
    op.create_index(op.f("ix_token_prices_token_address"), "token_prices", ["token_address"])
    op.create_index(op.f("ix_token_prices_timestamp"), "token_prices", ["timestamp"])


def downgrade() -> None:
    op.drop_index(op.f("ix_token_prices_timestamp"), table_name="token_prices")
    op.drop_index(op.f("ix_token_prices_token_address"), table_name="token_prices")
    op.drop_table("token_prices")
