from swaptax.db.models.price_cache import TokenPrice

__all__ = [
    "TokenPrice",
]
