from urllib.parse import quote

from pantryscan.extraction import FieldRule
from pantryscan.models import Chain
from pantryscan.retailers.base import BaseRetailer

BASE_URL = "https://www.walmart.com"
STORE_FINDER_URL = BASE_URL + "/store/finder?location={location}"
PRODUCT_URL = BASE_URL + "/ip/{barcode}"


class WalmartRetailer(BaseRetailer):
    chain = Chain.WALMART
    display_name = "Walmart"

    store_list_selector = ".store-list-item"
    store_fields = {
        "store_id": FieldRule(attribute="data-store-id"),
        "name": FieldRule(".store-name"),
        "address": FieldRule(".store-address"),
        "distance": FieldRule(".distance"),
    }
    inventory_fields = {
        "stock_status": FieldRule(".fulfillment-status"),
        "price": FieldRule(".price-main"),
        "aisle": FieldRule(".aisle-location"),
    }
    product_fields = {
        "name": FieldRule(".prod-title"),
        "image": FieldRule(".prod-image img", attribute="src"),
        "brand": FieldRule(".prod-brand"),
    }

    def store_finder_url(self, location_query: str) -> str:
        return STORE_FINDER_URL.format(location=quote(location_query))

    def product_url(self, barcode: str, store_id: str | None = None) -> str:
        url = PRODUCT_URL.format(barcode=quote(barcode))
        if store_id:
            url += f"?storeId={quote(store_id)}"
        return url
