"""Jurisdiction / tier configuration passed explicitly into the engine and its collaborators."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from swaptax.domain.tokens import DEFAULT_BASE_TOKENS, DEFAULT_MAJOR_TOKENS

if TYPE_CHECKING:
    from swaptax.config import Settings


class TaxConfig(BaseModel):
    """Tax rates, token sets and price-lookup tuning for one calculation setup.

    Defaults follow the Indonesian rules for swaps on unregistered (DEX) venues:
    0.22% PPN on purchases and 0.2% final PPh on sales, both charged on the
    transaction value in IDR.
    """

    model_config = ConfigDict(frozen=True)

    local_currency: str = "IDR"
    buy_tax_rate: Decimal = Decimal("0.0022")
    sell_tax_rate: Decimal = Decimal("0.002")
    base_tokens: frozenset[str] = DEFAULT_BASE_TOKENS
    major_tokens: frozenset[str] = DEFAULT_MAJOR_TOKENS
    cache_window: timedelta = timedelta(hours=3)
    fallback_fx_rate: Decimal = Decimal("15500")
    price_batch_size: int = Field(default=5, ge=1)
    price_batch_pause_seconds: float = Field(default=0.2, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> TaxConfig:
        return cls(
            local_currency=settings.local_currency.upper(),
            buy_tax_rate=settings.buy_tax_rate,
            sell_tax_rate=settings.sell_tax_rate,
            cache_window=timedelta(hours=settings.price_cache_window_hours),
            fallback_fx_rate=settings.fx_fallback_rate,
            price_batch_size=settings.price_batch_size,
            price_batch_pause_seconds=settings.price_batch_pause_seconds,
        )

    def is_base(self, token: str) -> bool:
        return token in self.base_tokens

    def is_major(self, token: str) -> bool:
        return token in self.major_tokens
