"""Group a shopping list into per-store walking routes."""

import re
import sys

from pantryscan.models import ShoppingItem, StoreRoute

# Sort keys for aisles without a number; missing aisles go after unnumbered ones
UNPARSED_AISLE = sys.maxsize - 1
MISSING_AISLE = sys.maxsize

_DIGITS_RE = re.compile(r"\d+")


def aisle_number(aisle: str | None) -> int:
    """First integer in an aisle label, e.g. 'A12-3' -> 12."""
    if not aisle:
        return MISSING_AISLE
    match = _DIGITS_RE.search(aisle)
    return int(match.group(0)) if match else UNPARSED_AISLE


def optimize_path(items: list[ShoppingItem]) -> list[ShoppingItem]:
    """Order *items* aisle by aisle, keeping items of one aisle label together."""
    groups: dict[str | None, list[ShoppingItem]] = {}
    for item in items:
        groups.setdefault(item.aisle or None, []).append(item)

    ordered = sorted(groups, key=aisle_number)
    return [item for aisle in ordered for item in groups[aisle]]


def line_total(item: ShoppingItem) -> float:
    if not item.prices:
        return 0.0
    return item.prices[0].price * item.quantity


def optimize(items: list[ShoppingItem]) -> list[StoreRoute]:
    """Build one route per store, busiest store first.

    Items are assigned to the store of their first price observation;
    unpriced items and items with non-positive quantity are left out.
    """
    by_store: dict[str, list[ShoppingItem]] = {}
    for item in items:
        if not item.prices:
            continue
        store_items = by_store.setdefault(item.prices[0].store, [])
        if item.quantity > 0:
            store_items.append(item)

    routes = [
        StoreRoute(
            store=store,
            items=store_items,
            optimized_path=optimize_path(store_items),
            total_items=sum(i.quantity for i in store_items),
            estimated_total=round(sum(line_total(i) for i in store_items), 2),
        )
        for store, store_items in by_store.items()
        if store_items
    ]
    routes.sort(key=lambda r: r.total_items, reverse=True)
    return routes
