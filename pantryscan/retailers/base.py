import logging
from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import ValidationError

from pantryscan.config import DEFAULT_AISLE, INVENTORY_ACCEPT
from pantryscan.extraction import (
    SelectorTable,
    extract_field,
    extract_fields,
    parse_distance,
    parse_document,
    parse_price,
    parse_quantity,
    select_nodes,
)
from pantryscan.fetcher import FetchError, HttpFetcher
from pantryscan.models import Chain, ProductMeta, StoreInventory, StoreLocation

logger = logging.getLogger(__name__)

IN_STOCK_PHRASE = "in stock"


class BaseRetailer(ABC):
    """One retail chain's web surface.

    Subclasses only describe the chain: its URLs and selector tables.
    Every operation here absorbs retrieval and extraction failures and
    reports them as ``None`` or ``[]``.

    Selector tables use these field names:

    * ``store_fields``: ``store_id``, ``name``, ``address``, ``distance``
      (evaluated against each node matched by ``store_list_selector``)
    * ``inventory_fields``: ``stock_status``, ``price``, ``aisle``,
      optionally ``quantity``
    * ``product_fields``: ``name``, ``image``, ``brand``
    """

    chain: Chain
    display_name: str
    store_list_selector: str
    store_fields: SelectorTable
    inventory_fields: SelectorTable
    product_fields: SelectorTable

    def __init__(self, fetcher: HttpFetcher | None = None):
        self.fetcher = fetcher or HttpFetcher()

    @abstractmethod
    def store_finder_url(self, location_query: str) -> str:
        """URL of the chain's store locator for a zip code or address."""

    @abstractmethod
    def product_url(self, barcode: str, store_id: str | None = None) -> str:
        """URL of the product page, scoped to *store_id* when given."""

    async def find_stores(self, location_query: str) -> list[StoreLocation]:
        url = self.store_finder_url(location_query)
        try:
            resp = await self.fetcher.fetch(url)
        except FetchError as e:
            logger.error("%s: store search failed for '%s': %s",
                         self.display_name, location_query, e)
            return []

        stores: list[StoreLocation] = []
        for node in select_nodes(parse_document(resp.text), self.store_list_selector):
            fields = extract_fields(node, self.store_fields)
            try:
                stores.append(StoreLocation(
                    store_id=fields.get("store_id") or "",
                    name=fields.get("name") or "",
                    address=fields.get("address") or "",
                    distance=parse_distance(fields.get("distance")),
                    chain=self.chain,
                ))
            except ValidationError as e:
                logger.debug("%s: store row parse error: %s", self.display_name, e)

        logger.info("%s: %d stores near '%s'", self.display_name, len(stores), location_query)
        return stores

    async def get_inventory(self, store_id: str, barcode: str) -> StoreInventory | None:
        url = self.product_url(barcode, store_id)
        try:
            resp = await self.fetcher.fetch(url, headers={"Accept": INVENTORY_ACCEPT})
        except FetchError as e:
            logger.error("%s: inventory lookup failed for %s at store %s: %s",
                         self.display_name, barcode, store_id, e)
            return None

        fields = extract_fields(parse_document(resp.text), self.inventory_fields)
        stock_text = fields.get("stock_status")
        if stock_text is None:
            logger.warning("%s: no stock status for %s at store %s",
                           self.display_name, barcode, store_id)
            return None

        try:
            return StoreInventory(
                store_id=store_id,
                chain=self.chain,
                in_stock=IN_STOCK_PHRASE in stock_text.lower(),
                quantity=parse_quantity(fields.get("quantity")),
                aisle=fields.get("aisle") or DEFAULT_AISLE,
                price=parse_price(fields.get("price")),
                last_updated=datetime.now(),
            )
        except ValidationError as e:
            logger.warning("%s: bad inventory data for %s: %s", self.display_name, barcode, e)
            return None

    async def get_product_meta(self, barcode: str) -> ProductMeta | None:
        url = self.product_url(barcode)
        try:
            resp = await self.fetcher.fetch(url)
        except FetchError as e:
            logger.error("%s: product lookup failed for %s: %s", self.display_name, barcode, e)
            return None

        doc = parse_document(resp.text)
        name = extract_field(doc, self.product_fields["name"])
        if not name:
            logger.info("%s: product %s not found", self.display_name, barcode)
            return None

        fields = extract_fields(doc, self.product_fields)
        return ProductMeta(
            name=name,
            image=fields.get("image") or "",
            brand=fields.get("brand"),
        )
