from enum import Enum


class PriceSource(str, Enum):
    """Tier of the price waterfall that produced a quote."""

    CACHE = "cache"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    NONE = "none"
