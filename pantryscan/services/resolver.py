import asyncio
import logging

from pantryscan.config import (
    ALTERNATIVE_STORE_LIMIT,
    PLACEHOLDER_AISLE,
    PLACEHOLDER_STORE_ID,
)
from pantryscan.database import get_cached_product, set_cached_product
from pantryscan.models import (
    Chain,
    ProductInfo,
    ProductMeta,
    StoreInventory,
    StoreLocation,
)
from pantryscan.retailers.base import BaseRetailer
from pantryscan.retailers.target import TargetRetailer
from pantryscan.retailers.walmart import WalmartRetailer

logger = logging.getLogger(__name__)

# Registry of supported chains, in identity-lookup priority order
RETAILERS: list[BaseRetailer] = [
    WalmartRetailer(),
    TargetRetailer(),
]


def sort_candidates(stores: list[StoreLocation]) -> list[StoreLocation]:
    """Nearest first; stores with unknown distance go last, input order breaks ties."""
    return sorted(stores, key=lambda s: (s.distance is None, s.distance or 0))


class ProductResolver:
    """Merge identity, nearest-store stock and in-stock alternatives for a barcode."""

    def __init__(
        self,
        retailers: list[BaseRetailer] | None = None,
        use_cache: bool = False,
    ):
        self.retailers = retailers if retailers is not None else RETAILERS
        self.use_cache = use_cache
        self._by_chain = {r.chain: r for r in self.retailers}

    async def _guarded(self, retailer: BaseRetailer, call, default, what: str):
        """Await one adapter call; any error counts as no result from that chain."""
        try:
            return await call
        except Exception as e:
            logger.error("%s: %s failed: %s", retailer.display_name, what, e)
            return default

    async def _lookup_identity(self, barcode: str) -> tuple[ProductMeta, Chain] | None:
        if self.use_cache:
            cached = await get_cached_product(barcode)
            if cached is not None:
                logger.info("Cache hit for product %s", barcode)
                return cached

        for retailer in self.retailers:
            meta = await self._guarded(
                retailer, retailer.get_product_meta(barcode), None, "product lookup"
            )
            if meta is not None:
                if self.use_cache:
                    await set_cached_product(barcode, meta, retailer.chain)
                return meta, retailer.chain
        return None

    async def _find_candidates(self, location_query: str) -> list[StoreLocation]:
        outcomes = await asyncio.gather(
            *(
                self._guarded(r, r.find_stores(location_query), [], "store search")
                for r in self.retailers
            )
        )
        stores: list[StoreLocation] = []
        for found in outcomes:
            stores.extend(found)
        return sort_candidates(stores)

    async def _inventory_at(
        self, store: StoreLocation, barcode: str
    ) -> StoreInventory | None:
        retailer = self._by_chain.get(store.chain)
        if retailer is None:
            return None
        return await self._guarded(
            retailer, retailer.get_inventory(store.store_id, barcode), None, "inventory lookup"
        )

    async def resolve(
        self, barcode: str, location_query: str | None = None
    ) -> ProductInfo | None:
        """Resolve *barcode*, optionally checking stock near *location_query*.

        Returns None only when no chain knows the product.
        """
        identity = await self._lookup_identity(barcode)
        if identity is None:
            logger.info("No product information for %s", barcode)
            return None
        meta, source_chain = identity

        info = ProductInfo(
            name=meta.name,
            image=meta.image,
            barcode=barcode,
            brand=meta.brand,
            inventory=StoreInventory(
                store_id=PLACEHOLDER_STORE_ID,
                chain=source_chain,
                in_stock=False,
                aisle=PLACEHOLDER_AISLE,
            ),
        )
        if not location_query:
            return info

        candidates = await self._find_candidates(location_query)
        if not candidates:
            logger.info("No stores found near '%s'", location_query)
            return info

        primary = await self._inventory_at(candidates[0], barcode)
        if primary is not None:
            info.inventory = primary

        if primary is None or not primary.in_stock:
            # Sequential: at most one inventory request in flight
            alternatives: list[StoreInventory] = []
            for store in candidates[1:1 + ALTERNATIVE_STORE_LIMIT]:
                if primary is not None and store.store_id == primary.store_id:
                    continue
                inventory = await self._inventory_at(store, barcode)
                if inventory is not None and inventory.in_stock:
                    alternatives.append(inventory)
            if alternatives:
                info.alternative_stores = alternatives

        return info


_default_resolver = ProductResolver(use_cache=True)


async def resolve(barcode: str, location_query: str | None = None) -> ProductInfo | None:
    return await _default_resolver.resolve(barcode, location_query)
