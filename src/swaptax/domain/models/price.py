from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from swaptax.domain.enums.price import PriceSource


class PriceQuote(BaseModel):
    """Best available USD price for a token. ``price_usd`` is None when no source could price it."""

    model_config = ConfigDict(frozen=True)

    token: str
    price_usd: Decimal | None
    source: PriceSource
    is_from_cache: bool = False


class CachedPrice(BaseModel):
    """A row read back from the price cache."""

    token: str
    timestamp: datetime
    price_usd: Decimal
    source: str
