# assetflow/utils/decimal_utils.py
from decimal import Decimal, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")

def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def percentage_of(part, whole) -> Decimal:
    """Share of ``part`` in ``whole`` as a percentage; 0 when ``whole`` is 0."""
    whole = to_decimal(whole)
    if whole == 0:
        return Decimal("0.00")
    return (to_decimal(part) / whole * Decimal("100")).quantize(
        TWOPLACES, rounding=ROUND_HALF_UP
    )
