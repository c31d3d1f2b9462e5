"""Input record: one parsed on-chain swap, as supplied by the ingestion layer."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SwapRecord(BaseModel):
    """A single token swap. Never mutated by the tax engine."""

    model_config = ConfigDict(frozen=True)

    signature: str
    timestamp: datetime
    from_token: str
    from_amount: Decimal = Field(ge=0)
    from_symbol: str = ""
    to_token: str
    to_amount: Decimal = Field(ge=0)
    to_symbol: str = ""
    venue: str = "unknown"  # jupiter / raydium / orca / ...
