from enum import Enum


class SwapClassification(str, Enum):
    """How a swap is treated for lot accounting and tax."""

    ACQUISITION = "ACQUISITION"
    DISPOSAL = "DISPOSAL"


class TaxCategory(str, Enum):
    """Indonesian DEX tax categories: PPN on acquisitions, PPh on disposals."""

    PPN = "PPN"
    PPH = "PPH"
