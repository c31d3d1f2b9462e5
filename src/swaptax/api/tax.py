"""Tax API — FIFO gains and Indonesian DEX tax for a list of swap records."""

from typing import Annotated

from fastapi import APIRouter, Depends

from swaptax.accounting.tax_engine import TaxEngine
from swaptax.api.deps import get_tax_engine
from swaptax.api.schemas.tax import TaxCalculateRequest
from swaptax.domain.models.tax import TaxSummary

router = APIRouter(prefix="/api/tax", tags=["tax"])

EngineDep = Annotated[TaxEngine, Depends(get_tax_engine)]


@router.post("/calculate", response_model=TaxSummary)
async def calculate_tax(body: TaxCalculateRequest, engine: EngineDep) -> TaxSummary:
    """Classify swaps, match disposals FIFO, and total PPN/PPh in local currency."""
    return await engine.calculate(body.records)
