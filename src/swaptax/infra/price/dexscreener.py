"""DexScreener price provider — free fallback that also covers micro-caps."""

import logging
from decimal import Decimal
from urllib.parse import quote

import httpx

from swaptax.exceptions import ExternalServiceError
from swaptax.infra.http.rate_limited_client import RateLimitedClient
from swaptax.infra.price.parsing import to_decimal_or_zero, to_price

logger = logging.getLogger(__name__)

BASE_URL = "https://api.dexscreener.com"


def _liquidity_usd(pair: dict) -> Decimal:
    liquidity = pair.get("liquidity") or {}
    if not isinstance(liquidity, dict):
        return Decimal(0)
    return to_decimal_or_zero(liquidity.get("usd"))


def pick_most_liquid_pair(pairs: list[dict]) -> dict | None:
    """Pair with the greatest USD liquidity (missing = 0). Ties keep the first pair."""
    candidates = [p for p in pairs if isinstance(p, dict)]
    if not candidates:
        return None
    return max(candidates, key=_liquidity_usd)


class DexScreenerProvider:
    """Current USD price from the highest-liquidity trading pair of a token."""

    name = "dexscreener"

    def __init__(self, http_client: RateLimitedClient) -> None:
        self._http = http_client

    async def get_price(self, token: str) -> Decimal | None:
        try:
            response = await self._http.get(f"{BASE_URL}/latest/dex/tokens/{quote(token, safe='')}")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception("DexScreener request failed for %s", token)
            raise ExternalServiceError(f"DexScreener request failed for {token}") from exc

        if response.status_code != 200:
            logger.warning("DexScreener returned %d for %s", response.status_code, token)
            return None

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError(f"DexScreener returned malformed JSON for {token}") from exc

        if not isinstance(data, dict):
            raise ExternalServiceError(f"DexScreener returned unexpected payload for {token}")

        pairs = data.get("pairs") or []
        if not isinstance(pairs, list):
            return None

        best = pick_most_liquid_pair(pairs)
        if best is None:
            return None
        return to_price(best.get("priceUsd"))
