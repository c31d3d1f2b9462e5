"""Domain types for FIFO lot accounting and DEX transaction tax."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from swaptax.domain.enums.price import PriceSource
from swaptax.domain.enums.tax import SwapClassification, TaxCategory


class Lot(BaseModel):
    """An acquired quantity of a token that has not been disposed of yet.

    Mutated in place by the ledger on partial consumption; amount and both
    cost bases always shrink by the same fraction.
    """

    token: str
    amount: Decimal
    cost_basis_usd: Decimal
    cost_basis_local: Decimal
    acquired_at: datetime


class ConsumeResult(BaseModel):
    """Cost basis drawn from a token's lots for one disposal."""

    model_config = ConfigDict(frozen=True)

    cost_basis_usd: Decimal
    cost_basis_local: Decimal
    amount_matched: Decimal
    amount_unmatched: Decimal  # Disposed quantity with no tracked lot (zero cost basis)


class OpenLotSnapshot(BaseModel):
    """A lot still held at the end of a run."""

    model_config = ConfigDict(frozen=True)

    token: str
    amount: Decimal
    cost_basis_usd: Decimal
    cost_basis_local: Decimal
    acquired_at: datetime


class TransactionTaxResult(BaseModel):
    """Tax outcome of a single swap record."""

    model_config = ConfigDict(frozen=True)

    signature: str
    timestamp: datetime
    classification: SwapClassification
    from_token: str
    from_symbol: str
    from_amount: Decimal
    to_token: str
    to_symbol: str
    to_amount: Decimal
    venue: str

    # Prices (None = unpriced, valued at zero)
    from_price_usd: Decimal | None
    to_price_usd: Decimal | None
    from_price_source: PriceSource
    to_price_source: PriceSource
    fx_rate: Decimal

    # Values
    transaction_value_usd: Decimal
    transaction_value_local: Decimal

    # FIFO (disposals only)
    cost_basis_usd: Decimal = Decimal(0)
    cost_basis_local: Decimal = Decimal(0)
    gain_loss_usd: Decimal = Decimal(0)
    gain_loss_local: Decimal = Decimal(0)
    amount_unmatched: Decimal = Decimal(0)

    # Taxes, in local currency
    disposal_tax: Decimal = Decimal(0)  # PPh
    acquisition_tax: Decimal = Decimal(0)  # PPN
    total_tax: Decimal = Decimal(0)

    @property
    def tax_by_category(self) -> dict[TaxCategory, Decimal]:
        return {TaxCategory.PPH: self.disposal_tax, TaxCategory.PPN: self.acquisition_tax}


class TaxSummary(BaseModel):
    """Totals for one calculation run. Monetary totals are in ``local_currency``."""

    model_config = ConfigDict(frozen=True)

    local_currency: str
    fx_rate: Decimal = Decimal(0)

    total_transactions: int = 0
    total_acquisitions: int = 0
    total_disposals: int = 0

    total_acquisition_value: Decimal = Decimal(0)
    total_disposal_value: Decimal = Decimal(0)

    total_gain: Decimal = Decimal(0)
    total_loss: Decimal = Decimal(0)  # Positive magnitude
    net_gain_loss: Decimal = Decimal(0)

    total_disposal_tax: Decimal = Decimal(0)  # PPh
    total_acquisition_tax: Decimal = Decimal(0)  # PPN
    total_tax: Decimal = Decimal(0)

    transactions: list[TransactionTaxResult] = []
    open_lots: list[OpenLotSnapshot] = []

    @property
    def tax_by_category(self) -> dict[TaxCategory, Decimal]:
        return {TaxCategory.PPH: self.total_disposal_tax, TaxCategory.PPN: self.total_acquisition_tax}
