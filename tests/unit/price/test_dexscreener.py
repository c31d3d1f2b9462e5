"""Tests for DexScreenerProvider — pair selection by liquidity."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from swaptax.exceptions import ExternalServiceError
from swaptax.infra.http.rate_limited_client import RateLimitedClient
from swaptax.infra.price.dexscreener import DexScreenerProvider, pick_most_liquid_pair

TOKEN = "MicroCap11111111111111111111111111111111111"


def _http(status: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    http = MagicMock()
    http.get = AsyncMock(return_value=response)
    return http


class TestPickMostLiquidPair:
    def test_highest_liquidity_wins(self):
        pairs = [
            {"priceUsd": "0.5", "liquidity": {"usd": 1200}},
            {"priceUsd": "0.42", "liquidity": {"usd": 250000.5}},
            {"priceUsd": "0.9", "liquidity": {"usd": 80}},
        ]
        assert pick_most_liquid_pair(pairs)["priceUsd"] == "0.42"

    def test_missing_liquidity_counts_as_zero(self):
        pairs = [
            {"priceUsd": "1.5"},
            {"priceUsd": "1.1", "liquidity": {"usd": 10}},
            {"priceUsd": "2.0", "liquidity": None},
        ]
        assert pick_most_liquid_pair(pairs)["priceUsd"] == "1.1"

    def test_tie_keeps_first(self):
        pairs = [
            {"priceUsd": "1", "liquidity": {"usd": 5}},
            {"priceUsd": "2", "liquidity": {"usd": 5}},
        ]
        assert pick_most_liquid_pair(pairs)["priceUsd"] == "1"

    def test_empty(self):
        assert pick_most_liquid_pair([]) is None


class TestDexScreenerProvider:
    async def test_price_from_deepest_pair(self):
        http = _http(payload={"pairs": [
            {"priceUsd": "0.0000050", "liquidity": {"usd": 900}},
            {"priceUsd": "0.0000042", "liquidity": {"usd": 48000}},
        ]})
        provider = DexScreenerProvider(http)

        price = await provider.get_price(TOKEN)

        assert price == Decimal("0.0000042")
        assert http.get.await_args.args[0] == f"https://api.dexscreener.com/latest/dex/tokens/{TOKEN}"

    async def test_no_pairs_returns_none(self):
        provider = DexScreenerProvider(_http(payload={"schemaVersion": "1.0.0", "pairs": None}))
        assert await provider.get_price(TOKEN) is None

    async def test_non_200_returns_none(self):
        provider = DexScreenerProvider(_http(status=503))
        assert await provider.get_price(TOKEN) is None

    async def test_deepest_pair_without_price_returns_none(self):
        provider = DexScreenerProvider(_http(payload={"pairs": [
            {"priceUsd": None, "liquidity": {"usd": 1000}},
            {"priceUsd": "3", "liquidity": {"usd": 1}},
        ]}))
        assert await provider.get_price(TOKEN) is None

    async def test_transport_error_raises(self):
        http = MagicMock()
        http.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        provider = DexScreenerProvider(http)

        with pytest.raises(ExternalServiceError):
            await provider.get_price(TOKEN)

    async def test_unexpected_payload_raises(self):
        provider = DexScreenerProvider(_http(payload=["not", "a", "dict"]))

        with pytest.raises(ExternalServiceError):
            await provider.get_price(TOKEN)

    async def test_invalid_url_raises_service_error(self):
        http = MagicMock()
        http.get = AsyncMock(side_effect=httpx.InvalidURL("Invalid non-printable ASCII character in URL"))
        provider = DexScreenerProvider(http)

        with pytest.raises(ExternalServiceError):
            await provider.get_price(TOKEN)

    async def test_token_is_percent_encoded_in_path(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"pairs": [{"priceUsd": "0.25", "liquidity": {"usd": 10}}]})

        async with RateLimitedClient(rate_per_second=1000.0) as client:
            await client._client.aclose()
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            price = await DexScreenerProvider(client).get_price("Weird\nMint")

        assert price == Decimal("0.25")
        assert seen[0].url.raw_path == b"/latest/dex/tokens/Weird%0AMint"

    async def test_absurd_price_returns_none(self):
        provider = DexScreenerProvider(_http(payload={"pairs": [{"priceUsd": "1E+1000000", "liquidity": {"usd": 5}}]}))
        assert await provider.get_price(TOKEN) is None
