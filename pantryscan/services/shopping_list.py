"""Helpers around the collaborator-owned shopping list.

The list itself is persisted by the UI as a JSON blob; here it is only
read, and resolved products are turned into the price/aisle data the
list stores.
"""

from datetime import datetime, timedelta

from pydantic import TypeAdapter

from pantryscan.config import STALE_PRICE_AGE
from pantryscan.models import (
    Chain,
    PriceObservation,
    ProductInfo,
    ShoppingItem,
    StoreInventory,
)
from pantryscan.services.route import line_total

_CHAIN_NAMES = {
    Chain.WALMART: "Walmart",
    Chain.TARGET: "Target",
}

_shopping_list_adapter = TypeAdapter(list[ShoppingItem])


def chain_name(chain: Chain) -> str:
    return _CHAIN_NAMES.get(chain, chain.value.title())


def load_shopping_list(raw: str | bytes | None) -> list[ShoppingItem]:
    """Parse the persisted list; ISO date strings come back as datetimes."""
    if not raw or not raw.strip():
        return []
    return _shopping_list_adapter.validate_json(raw)


def _observation(inventory: StoreInventory) -> PriceObservation:
    return PriceObservation(
        store=chain_name(inventory.chain),
        price=inventory.price,
        address=inventory.store_id,
        timestamp=inventory.last_updated,
        aisle=inventory.aisle,
    )


def price_observations(info: ProductInfo) -> list[PriceObservation]:
    """Priced observations from a resolution, primary store first."""
    observations = []
    if info.inventory.price is not None:
        observations.append(_observation(info.inventory))
    for alt in info.alternative_stores or []:
        if alt.price is not None:
            observations.append(_observation(alt))
    return observations


def aisle_summary(info: ProductInfo) -> str:
    """One-line availability text shown next to a scanned product."""
    if info.inventory.in_stock:
        return f"{chain_name(info.inventory.chain)}: {info.inventory.aisle}"
    if info.alternative_stores:
        return f"Out of stock here. Available at {chain_name(info.alternative_stores[0].chain)}"
    return "Out of stock at all nearby stores"


def is_price_stale(
    observation: PriceObservation,
    now: datetime | None = None,
    max_age: timedelta = STALE_PRICE_AGE,
) -> bool:
    now = now or datetime.now(observation.timestamp.tzinfo)
    return now - observation.timestamp > max_age


def estimate_total(items: list[ShoppingItem]) -> float:
    return round(sum(line_total(item) for item in items), 2)
