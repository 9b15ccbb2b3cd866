from decimal import Decimal
from typing import Iterable, List, Mapping, Tuple

from assetflow.utils.decimal_utils import to_decimal


def compute_item_total(quantity, price_per_item) -> Decimal:
    return to_decimal(Decimal(str(quantity or 0)) * Decimal(str(price_per_item or 0)))


def compute_totals(items: Iterable[Mapping]) -> Tuple[List[dict], Decimal]:
    """
    Return a copy of ``items`` with ``total_amount`` recomputed from
    ``quantity`` and ``price_per_item``, plus the grand total.

    Any ``total_amount`` already present on an item is overwritten.
    """
    computed = []
    grand_total = Decimal("0.00")

    for item in items:
        total = compute_item_total(item.get("quantity"), item.get("price_per_item"))
        computed.append({**item, "total_amount": total})
        grand_total += total

    return computed, grand_total
