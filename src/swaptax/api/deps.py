from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from swaptax.accounting.tax_engine import TaxEngine
from swaptax.container import Container


@inject
def get_tax_engine(
    engine: TaxEngine = Depends(Provide[Container.tax_engine]),
) -> TaxEngine:
    """A fresh engine per request; the HTTP client and price cache are shared singletons."""
    return engine
