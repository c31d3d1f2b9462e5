class SwapTaxError(Exception):
    """Base class for all swaptax errors."""


class ExternalServiceError(SwapTaxError):
    """A price or FX provider could not be reached or returned a malformed payload."""


class InvalidSwapRecordError(SwapTaxError):
    """A swap record violates an input invariant (e.g. negative amount)."""

    def __init__(self, signature: str, reason: str) -> None:
        super().__init__(f"Invalid swap record {signature}: {reason}")
        self.signature = signature
        self.reason = reason
