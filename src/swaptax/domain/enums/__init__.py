from swaptax.domain.enums.price import PriceSource
from swaptax.domain.enums.tax import SwapClassification, TaxCategory

__all__ = [
    "PriceSource",
    "SwapClassification",
    "TaxCategory",
]
