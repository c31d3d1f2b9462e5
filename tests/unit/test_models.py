from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from swaptax.config import Settings
from swaptax.domain.models.swap import SwapRecord
from swaptax.domain.models.tax import TaxSummary
from swaptax.domain.models.tax_config import TaxConfig
from swaptax.domain.tokens import BONK_MINT, SOL_MINT, USDC_MINT, short_symbol
from swaptax.exceptions import InvalidSwapRecordError, SwapTaxError


class TestSwapRecord:
    def test_parses_strings(self):
        record = SwapRecord.model_validate({
            "signature": "5xYz",
            "timestamp": "2025-03-01T12:00:00Z",
            "from_token": SOL_MINT,
            "from_amount": "1.5",
            "to_token": BONK_MINT,
            "to_amount": "1000000",
        })
        assert record.timestamp == datetime(2025, 3, 1, 12, tzinfo=UTC)
        assert record.from_amount == Decimal("1.5")
        assert record.venue == "unknown"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            SwapRecord(
                signature="neg",
                timestamp=datetime(2025, 1, 1, tzinfo=UTC),
                from_token=SOL_MINT,
                from_amount=Decimal("-1"),
                to_token=BONK_MINT,
                to_amount=Decimal("1"),
            )

    def test_frozen(self):
        record = SwapRecord(
            signature="s",
            timestamp=datetime(2025, 1, 1, tzinfo=UTC),
            from_token=SOL_MINT,
            from_amount=Decimal("1"),
            to_token=BONK_MINT,
            to_amount=Decimal("1"),
        )
        with pytest.raises(ValidationError):
            record.from_amount = Decimal("2")


class TestTaxConfig:
    def test_defaults(self):
        config = TaxConfig()
        assert config.buy_tax_rate == Decimal("0.0022")
        assert config.sell_tax_rate == Decimal("0.002")
        assert config.is_base(SOL_MINT)
        assert config.is_base(USDC_MINT)
        assert not config.is_base(BONK_MINT)
        assert config.is_major(BONK_MINT)
        assert config.cache_window == timedelta(hours=3)

    def test_from_settings(self):
        settings = Settings(local_currency="idr", sell_tax_rate=Decimal("0.005"), price_cache_window_hours=1)
        config = TaxConfig.from_settings(settings)
        assert config.local_currency == "IDR"
        assert config.sell_tax_rate == Decimal("0.005")
        assert config.cache_window == timedelta(hours=1)

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            TaxConfig(price_batch_size=0)


class TestTaxSummary:
    def test_empty_summary_is_zero(self):
        summary = TaxSummary(local_currency="IDR")
        assert summary.total_tax == Decimal(0)
        assert summary.transactions == []
        assert summary.open_lots == []


class TestTokens:
    def test_known_symbol(self):
        assert short_symbol(SOL_MINT) == "SOL"

    def test_unknown_mint_abbreviated(self):
        assert short_symbol("ABCDEFGHIJKLMNOP") == "ABCD...MNOP"


class TestExceptions:
    def test_invalid_record_carries_signature(self):
        err = InvalidSwapRecordError("sig1", "negative amount")
        assert isinstance(err, SwapTaxError)
        assert err.signature == "sig1"
        assert "negative amount" in str(err)
