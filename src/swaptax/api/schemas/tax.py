"""Pydantic schemas for tax API."""

from pydantic import BaseModel, Field

from swaptax.domain.models.swap import SwapRecord


class TaxCalculateRequest(BaseModel):
    records: list[SwapRecord] = Field(default_factory=list)
