"""Cache of USD token prices, shared across calculation runs."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from swaptax.db.session import Base, TimestampMixin


class TokenPrice(TimestampMixin, Base):
    """Cached USD price for a token mint. One row per (token_address, timestamp); first writer wins."""

    __tablename__ = "token_prices"
    __table_args__ = (UniqueConstraint("token_address", "timestamp", name="uq_token_prices_token_address_timestamp"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token_address: Mapped[str] = mapped_column(String(64), index=True)
    timestamp: Mapped[int] = mapped_column(Integer, index=True)  # Unix epoch seconds
    price_usd: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    source: Mapped[str] = mapped_column(String(20))  # birdeye / dexscreener
