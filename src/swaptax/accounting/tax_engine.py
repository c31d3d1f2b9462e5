"""TaxEngine — FIFO capital gains + Indonesian DEX transaction tax for swap records."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, localcontext

from swaptax.accounting.fifo import DECIMAL_PRECISION, LotLedger
from swaptax.domain.enums.price import PriceSource
from swaptax.domain.enums.tax import SwapClassification
from swaptax.domain.models.price import PriceQuote
from swaptax.domain.models.swap import SwapRecord
from swaptax.domain.models.tax import TaxSummary, TransactionTaxResult
from swaptax.domain.models.tax_config import TaxConfig
from swaptax.domain.tokens import short_symbol
from swaptax.exceptions import InvalidSwapRecordError
from swaptax.infra.fx.exchange_rate import FxConverter
from swaptax.infra.price.service import PriceService

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC so mixed inputs still sort."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@dataclass
class _RunningTotals:
    transactions: int = 0
    acquisitions: int = 0
    disposals: int = 0
    acquisition_value: Decimal = Decimal(0)
    disposal_value: Decimal = Decimal(0)
    gain: Decimal = Decimal(0)
    loss: Decimal = Decimal(0)
    disposal_tax: Decimal = Decimal(0)
    acquisition_tax: Decimal = Decimal(0)

    def add(self, result: TransactionTaxResult) -> None:
        self.transactions += 1
        if result.classification == SwapClassification.ACQUISITION:
            self.acquisitions += 1
            self.acquisition_value += result.transaction_value_local
        else:
            self.disposals += 1
            self.disposal_value += result.transaction_value_local

        if result.gain_loss_local > 0:
            self.gain += result.gain_loss_local
        elif result.gain_loss_local < 0:
            self.loss += -result.gain_loss_local

        self.disposal_tax += result.disposal_tax
        self.acquisition_tax += result.acquisition_tax


class TaxEngine:
    """Classify swaps, run them through a fresh FIFO ledger, and total the tax.

    Stateless between runs: every call to ``calculate`` builds its own ledger,
    so the same input always yields the same summary for a stable price cache.
    """

    def __init__(
        self,
        price_service: PriceService,
        fx_converter: FxConverter,
        config: TaxConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._prices = price_service
        self._fx = fx_converter
        self._config = config or TaxConfig()
        self._clock = clock or _utc_now

    async def calculate(self, records: Sequence[SwapRecord]) -> TaxSummary:
        """Compute per-swap results and run totals for one wallet and period."""
        self._validate(records)

        if not records:
            return TaxSummary(local_currency=self._config.local_currency)

        # 1. One FX rate and one price snapshot for the whole run
        fx_rate = await self._fx.get_usd_rate()
        tokens = [t for r in records for t in (r.from_token, r.to_token)]
        quotes = await self._prices.resolve_prices(tokens, self._clock())

        # 2. FIFO is order-dependent: process oldest first (stable for equal timestamps)
        ordered = sorted(records, key=lambda r: _as_utc(r.timestamp))

        ledger = LotLedger()
        totals = _RunningTotals()
        results: list[TransactionTaxResult] = []
        # Values, taxes and totals share the ledger's precision
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            for record in ordered:
                result = self._process(record, ledger, quotes, fx_rate)
                totals.add(result)
                results.append(result)

            # 3. Aggregate
            total_tax = totals.disposal_tax + totals.acquisition_tax
            net_gain_loss = totals.gain - totals.loss

        summary = TaxSummary(
            local_currency=self._config.local_currency,
            fx_rate=fx_rate,
            total_transactions=totals.transactions,
            total_acquisitions=totals.acquisitions,
            total_disposals=totals.disposals,
            total_acquisition_value=totals.acquisition_value,
            total_disposal_value=totals.disposal_value,
            total_gain=totals.gain,
            total_loss=totals.loss,
            net_gain_loss=net_gain_loss,
            total_disposal_tax=totals.disposal_tax,
            total_acquisition_tax=totals.acquisition_tax,
            total_tax=total_tax,
            transactions=results,
            open_lots=ledger.open_lots(),
        )

        logger.info(
            "Tax run: %d records (%d acquisitions, %d disposals), fx=%s, total tax %s %s",
            summary.total_transactions,
            summary.total_acquisitions,
            summary.total_disposals,
            fx_rate,
            total_tax,
            self._config.local_currency,
        )
        return summary

    def _validate(self, records: Sequence[SwapRecord]) -> None:
        """Fail the whole run before any external call if a record is unusable."""
        seen: set[str] = set()
        for record in records:
            if not isinstance(record.timestamp, datetime):
                raise InvalidSwapRecordError(record.signature, "missing timestamp")
            if record.from_amount < 0 or record.to_amount < 0:
                raise InvalidSwapRecordError(record.signature, "negative amount")
            if record.signature in seen:
                raise InvalidSwapRecordError(record.signature, "duplicate signature")
            seen.add(record.signature)

    def _process(
        self,
        record: SwapRecord,
        ledger: LotLedger,
        quotes: dict[str, PriceQuote],
        fx_rate: Decimal,
    ) -> TransactionTaxResult:
        from_quote = quotes.get(record.from_token) or PriceQuote(token=record.from_token, price_usd=None, source=PriceSource.NONE)
        to_quote = quotes.get(record.to_token) or PriceQuote(token=record.to_token, price_usd=None, source=PriceSource.NONE)

        # Unpriced legs are valued at zero
        from_price = from_quote.price_usd if from_quote.price_usd is not None else Decimal(0)
        to_price = to_quote.price_usd if to_quote.price_usd is not None else Decimal(0)

        value_usd = record.to_amount * to_price
        value_local = value_usd * fx_rate

        from_base = self._config.is_base(record.from_token)
        to_base = self._config.is_base(record.to_token)

        common = dict(
            signature=record.signature,
            timestamp=record.timestamp,
            from_token=record.from_token,
            from_symbol=record.from_symbol or short_symbol(record.from_token),
            from_amount=record.from_amount,
            to_token=record.to_token,
            to_symbol=record.to_symbol or short_symbol(record.to_token),
            to_amount=record.to_amount,
            venue=record.venue,
            from_price_usd=from_quote.price_usd,
            to_price_usd=to_quote.price_usd,
            from_price_source=from_quote.source,
            to_price_source=to_quote.source,
            fx_rate=fx_rate,
            transaction_value_usd=value_usd,
            transaction_value_local=value_local,
        )

        if from_base and not to_base:
            # Buy: open a lot for the received token, PPN on the value
            cost_usd = record.from_amount * from_price
            ledger.record_acquisition(
                record.to_token,
                record.to_amount,
                cost_usd,
                cost_usd * fx_rate,
                _as_utc(record.timestamp),
            )
            tax = value_local * self._config.buy_tax_rate
            return TransactionTaxResult(
                **common,
                classification=SwapClassification.ACQUISITION,
                acquisition_tax=tax,
                total_tax=tax,
            )

        # Everything else disposes of the from leg. Token-to-token swaps realize
        # gain at the received value; base-to-base swaps fall through here too.
        token_to_token = not from_base and not to_base
        proceeds_usd = value_usd if token_to_token else record.from_amount * from_price

        consumed = ledger.consume(record.from_token, record.from_amount)
        gain_usd = proceeds_usd - consumed.cost_basis_usd

        if token_to_token:
            # Proceeds become the basis of the received token, no PPN on this leg
            ledger.record_acquisition(
                record.to_token,
                record.to_amount,
                value_usd,
                value_local,
                _as_utc(record.timestamp),
            )

        tax = value_local * self._config.sell_tax_rate
        return TransactionTaxResult(
            **common,
            classification=SwapClassification.DISPOSAL,
            cost_basis_usd=consumed.cost_basis_usd,
            cost_basis_local=consumed.cost_basis_local,
            gain_loss_usd=gain_usd,
            gain_loss_local=gain_usd * fx_rate,
            amount_unmatched=consumed.amount_unmatched,
            disposal_tax=tax,
            total_tax=tax,
        )
