import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Query

from pantryscan.database import close_db
from pantryscan.models import (
    AppConfig,
    LocationConfig,
    ProductInfo,
    ShoppingItem,
    StoreRoute,
)
from pantryscan.services.location import (
    get_app_config,
    get_default_location,
    set_postal_code,
)
from pantryscan.services.resolver import resolve
from pantryscan.services.route import optimize

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

NOT_FOUND_DETAIL = "No product information available"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_db()


app = FastAPI(title="PantryScan", version="1.0.0", lifespan=lifespan)


@app.get("/api/products/{barcode}", response_model=ProductInfo)
async def api_product(
    barcode: str,
    location: str | None = Query(None, description="Zip code or address for store search"),
):
    location = location or await get_default_location()
    info = await resolve(barcode, location)
    if info is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return info


@app.post("/api/routes", response_model=list[StoreRoute])
async def api_routes(items: list[ShoppingItem]):
    return optimize(items)


@app.post("/api/config/location", response_model=AppConfig)
async def api_set_location(body: LocationConfig):
    return await set_postal_code(body.postal_code)


@app.get("/api/config", response_model=AppConfig)
async def api_get_config():
    return await get_app_config()


if __name__ == "__main__":
    uvicorn.run("pantryscan.main:app", host="0.0.0.0", port=8000, reload=True)
