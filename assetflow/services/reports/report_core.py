"""
Grouping of asset line items for reports.

Everything here is pure: callers load assets and department names, these
functions only reshape them. Rows are plain dicts so the same output feeds
the JSON endpoint and both document renderers.
"""
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from assetflow.utils.decimal_utils import to_decimal

GROUP_BY_CHOICES = ("department", "item", "vendor")

UNKNOWN_LABEL = "Unknown"


def expand_assets(assets: Iterable) -> List[dict]:
    """Flatten assets into one row per item, carrying the parent context."""
    rows = []
    for asset in assets:
        for item in asset.items:
            rows.append({
                "asset_id": asset.id,
                "item_index": item.position,
                "type": asset.type,
                "department_id": asset.department_id,
                "academic_year": asset.academic_year,
                "item_name": item.item_name,
                "vendor_name": item.vendor_name,
                "quantity": item.quantity,
                "price_per_item": Decimal(str(item.price_per_item)),
                "total_amount": to_decimal(item.total_amount),
                "bill_no": item.bill_no,
                "bill_date": item.bill_date,
            })
    return rows


def group_key(row: Mapping, group_by: str):
    if group_by == "department":
        key = row.get("department_id")
    elif group_by == "item":
        key = row.get("item_name")
    elif group_by == "vendor":
        key = row.get("vendor_name")
    else:
        raise ValueError(f"Unsupported grouping: {group_by}")

    if isinstance(key, str):
        key = key.strip()
    # blank and missing keys share one group
    return key if key not in (None, "") else None


def group_label(key, group_by: str, department_names: Mapping) -> str:
    if key is None:
        return UNKNOWN_LABEL
    if group_by == "department":
        return department_names.get(key) or UNKNOWN_LABEL
    return str(key)


def aggregate_rows(
    rows: Iterable[Mapping],
    group_by: str,
    department_names: Optional[Mapping] = None,
) -> dict:
    """
    Partition ``rows`` by ``group_by`` and total each partition.

    Returns ``{"data": [...], "grand_total": Decimal}`` where each group is
    ``{"group", "group_key", "count", "subtotal", "rows"}``. Groups are ordered
    by subtotal (largest first), then label, so repeated runs over the same
    data produce the same sequence.
    """
    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"Unsupported grouping: {group_by}")

    department_names = department_names or {}
    partitions: Dict[object, List[Mapping]] = {}

    for row in rows:
        partitions.setdefault(group_key(row, group_by), []).append(row)

    groups = []
    for key, members in partitions.items():
        subtotal = sum(
            (to_decimal(r.get("total_amount")) for r in members),
            Decimal("0.00"),
        )
        groups.append({
            "group": group_label(key, group_by, department_names),
            "group_key": key,
            "count": len(members),
            "subtotal": subtotal,
            "rows": list(members),
        })

    groups.sort(key=lambda g: (-g["subtotal"], g["group"], str(g["group_key"])))

    grand_total = sum((g["subtotal"] for g in groups), Decimal("0.00"))

    return {"data": groups, "grand_total": grand_total}
