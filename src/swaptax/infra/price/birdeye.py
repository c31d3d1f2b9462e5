"""Birdeye price provider — primary source for Solana token prices in USD."""

import logging
from decimal import Decimal

import httpx

from swaptax.exceptions import ExternalServiceError
from swaptax.infra.http.rate_limited_client import RateLimitedClient
from swaptax.infra.price.parsing import to_price

logger = logging.getLogger(__name__)

BASE_URL = "https://public-api.birdeye.so"

# Placeholder from .env templates counts as no key
PLACEHOLDER_API_KEYS = {"", "your_birdeye_api_key_here"}


class BirdeyeProvider:
    """Current USD price by token mint. Needs an API key; without one it never prices."""

    name = "birdeye"

    def __init__(self, http_client: RateLimitedClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def enabled(self) -> bool:
        return self._api_key not in PLACEHOLDER_API_KEYS

    async def get_price(self, token: str) -> Decimal | None:
        """Single attempt. Raises ExternalServiceError on transport errors or a malformed body."""
        if not self.enabled:
            return None

        try:
            response = await self._http.get(
                f"{BASE_URL}/defi/price",
                params={"address": token},
                headers={"X-API-KEY": self._api_key},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception("Birdeye request failed for %s", token)
            raise ExternalServiceError(f"Birdeye request failed for {token}") from exc

        if response.status_code != 200:
            logger.warning("Birdeye returned %d for %s", response.status_code, token)
            return None

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError(f"Birdeye returned malformed JSON for {token}") from exc

        if not isinstance(data, dict):
            raise ExternalServiceError(f"Birdeye returned unexpected payload for {token}")

        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            return None
        return to_price(payload.get("value"))
