"""USD → local currency rate, one best-effort lookup per calculation run."""

import logging
from decimal import Decimal

import httpx

from swaptax.domain.models.tax_config import TaxConfig
from swaptax.exceptions import ExternalServiceError
from swaptax.infra.http.rate_limited_client import RateLimitedClient
from swaptax.infra.price.parsing import to_price

logger = logging.getLogger(__name__)

DEFAULT_FX_URL = "https://api.exchangerate-api.com/v4/latest/USD"


class FxConverter:
    """Fetch the current USD rate for ``config.local_currency``; fall back to a fixed rate."""

    def __init__(
        self,
        http_client: RateLimitedClient,
        config: TaxConfig | None = None,
        url: str = DEFAULT_FX_URL,
    ) -> None:
        self._http = http_client
        self._config = config or TaxConfig()
        self._url = url

    async def get_usd_rate(self) -> Decimal:
        """Never raises: any failure yields ``config.fallback_fx_rate``."""
        currency = self._config.local_currency
        try:
            rate = await self._fetch_rate(currency)
        except ExternalServiceError:
            logger.warning("FX lookup failed, using fallback USD/%s %s", currency, self._config.fallback_fx_rate)
            return self._config.fallback_fx_rate

        if rate is None:
            logger.warning("No USD/%s rate available, using fallback %s", currency, self._config.fallback_fx_rate)
            return self._config.fallback_fx_rate
        return rate

    async def _fetch_rate(self, currency: str) -> Decimal | None:
        try:
            response = await self._http.get(self._url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception("FX request failed")
            raise ExternalServiceError("FX request failed") from exc

        if response.status_code != 200:
            logger.warning("FX service returned %d", response.status_code)
            return None

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError("FX service returned malformed JSON") from exc

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            return None
        return to_price(rates.get(currency))
