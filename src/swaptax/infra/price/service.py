"""PriceService — price waterfall: cache → primary → secondary → unknown."""

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Protocol

from swaptax.domain.enums.price import PriceSource
from swaptax.domain.models.price import CachedPrice, PriceQuote
from swaptax.domain.models.tax_config import TaxConfig
from swaptax.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class PriceCacheStore(Protocol):
    async def find_near(self, token: str, timestamp: datetime, window: timedelta) -> CachedPrice | None: ...

    async def insert_if_absent(self, token: str, timestamp: datetime, price_usd: Decimal, source: str) -> bool: ...


class PriceProvider(Protocol):
    name: str

    async def get_price(self, token: str) -> Decimal | None: ...


class PriceService:
    """Resolve USD prices with graceful degradation.

    Only major tokens touch the cache. Provider errors are logged and treated
    as "no price from this tier"; each provider gets a single attempt.
    """

    def __init__(
        self,
        primary: PriceProvider | None = None,
        secondary: PriceProvider | None = None,
        cache: PriceCacheStore | None = None,
        config: TaxConfig | None = None,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._cache = cache
        self._config = config or TaxConfig()

    async def resolve_price(self, token: str, timestamp: datetime | None = None) -> PriceQuote:
        ts = timestamp or datetime.now(UTC)
        cacheable = self._cache is not None and self._config.is_major(token)

        # 1. Cache (major tokens only)
        if cacheable:
            cached = await self._cache.find_near(token, ts, self._config.cache_window)
            if cached is not None:
                return PriceQuote(token=token, price_usd=cached.price_usd, source=PriceSource.CACHE, is_from_cache=True)

        # 2. Providers in order, first usable price wins
        for source, provider in ((PriceSource.PRIMARY, self._primary), (PriceSource.SECONDARY, self._secondary)):
            price = await self._fetch(provider, token)
            if price is None:
                continue
            if cacheable:
                await self._cache.insert_if_absent(token, ts, price, provider.name)
            return PriceQuote(token=token, price_usd=price, source=source)

        logger.info("No price found for %s", token)
        return PriceQuote(token=token, price_usd=None, source=PriceSource.NONE)

    async def resolve_prices(self, tokens: Iterable[str], timestamp: datetime | None = None) -> dict[str, PriceQuote]:
        """Resolve many tokens in fixed-size concurrent batches with a pause between batches."""
        ts = timestamp or datetime.now(UTC)
        unique = list(dict.fromkeys(t for t in tokens if t))
        size = self._config.price_batch_size

        quotes: dict[str, PriceQuote] = {}
        for start in range(0, len(unique), size):
            if start:
                await asyncio.sleep(self._config.price_batch_pause_seconds)
            batch = unique[start:start + size]
            results = await asyncio.gather(*(self.resolve_price(token, ts) for token in batch))
            quotes.update(zip(batch, results))
        return quotes

    async def _fetch(self, provider: PriceProvider | None, token: str) -> Decimal | None:
        if provider is None:
            return None
        try:
            return await provider.get_price(token)
        except ExternalServiceError:
            logger.warning("%s could not price %s, trying next source", provider.name, token)
            return None
