from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Chain(str, Enum):
    WALMART = "walmart"
    TARGET = "target"


class StoreLocation(CamelModel):
    store_id: str
    name: str
    address: str = ""
    distance: float | None = Field(default=None, ge=0)
    chain: Chain


class StoreInventory(CamelModel):
    store_id: str
    chain: Chain
    in_stock: bool
    quantity: int | None = None
    aisle: str
    price: float | None = Field(default=None, ge=0)
    last_updated: datetime = Field(default_factory=datetime.now)


class ProductMeta(CamelModel):
    name: str
    image: str = ""
    brand: str | None = None


class ProductInfo(CamelModel):
    name: str
    image: str = ""
    barcode: str
    brand: str | None = None
    inventory: StoreInventory
    alternative_stores: list[StoreInventory] | None = None


class PriceObservation(CamelModel):
    store: str
    price: float = Field(ge=0)
    distance: float = 0
    address: str = ""
    timestamp: datetime
    aisle: str | None = None


class ShoppingItem(CamelModel):
    id: str
    barcode: str
    name: str
    quantity: int = 1
    image: str = ""
    prices: list[PriceObservation] = []
    aisle: str | None = None
    date_added: datetime | None = None


class StoreRoute(CamelModel):
    store: str
    items: list[ShoppingItem]
    optimized_path: list[ShoppingItem]
    total_items: int
    estimated_total: float = 0.0


class LocationConfig(CamelModel):
    postal_code: str


class AppConfig(CamelModel):
    postal_code: str | None = None
