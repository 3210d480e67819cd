from urllib.parse import quote

from pantryscan.extraction import FieldRule
from pantryscan.models import Chain
from pantryscan.retailers.base import BaseRetailer

BASE_URL = "https://www.target.com"
STORE_FINDER_URL = BASE_URL + "/store-locator/find-stores?address={location}"
PRODUCT_URL = BASE_URL + "/p/a/{barcode}"


class TargetRetailer(BaseRetailer):
    chain = Chain.TARGET
    display_name = "Target"

    store_list_selector = ".store-list-item"
    store_fields = {
        "store_id": FieldRule(attribute="data-store-id"),
        "name": FieldRule(".store-name"),
        "address": FieldRule(".store-address"),
        "distance": FieldRule(".distance"),
    }
    inventory_fields = {
        "stock_status": FieldRule(".fulfillment-status"),
        "price": FieldRule(".price"),
        "aisle": FieldRule(".aisle-location"),
    }
    product_fields = {
        "name": FieldRule(".product-name"),
        "image": FieldRule(".product-image img", attribute="src"),
        "brand": FieldRule(".product-brand"),
    }

    def store_finder_url(self, location_query: str) -> str:
        return STORE_FINDER_URL.format(location=quote(location_query))

    def product_url(self, barcode: str, store_id: str | None = None) -> str:
        url = PRODUCT_URL.format(barcode=quote(barcode))
        if store_id:
            url += f"?storeId={quote(store_id)}"
        return url
