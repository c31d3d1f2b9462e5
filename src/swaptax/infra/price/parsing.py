from decimal import Decimal, InvalidOperation

# No real token trades above 10^15 USD; larger exponents overflow downstream products
MAX_PRICE_EXPONENT = 15


def to_price(value: object) -> Decimal | None:
    """Parse a provider price. Missing, unparseable, non-positive or absurdly large values mean no price."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite() or price <= 0 or price.adjusted() > MAX_PRICE_EXPONENT:
        return None
    return price


def to_decimal_or_zero(value: object) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return parsed if parsed.is_finite() else Decimal(0)
