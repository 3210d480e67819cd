import time

import aiosqlite

from pantryscan.config import CACHE_TTL_SECONDS, DB_PATH
from pantryscan.models import Chain, ProductMeta

_db: aiosqlite.Connection | None = None


async def get_db() -> aiosqlite.Connection:
    global _db
    if _db is None:
        _db = await aiosqlite.connect(DB_PATH)
        _db.row_factory = aiosqlite.Row
        await _init_tables(_db)
    return _db


async def close_db() -> None:
    global _db
    if _db is not None:
        await _db.close()
        _db = None


async def _init_tables(db: aiosqlite.Connection) -> None:
    await db.execute("""
        CREATE TABLE IF NOT EXISTS product_cache (
            barcode TEXT PRIMARY KEY,
            meta_json TEXT NOT NULL,
            chain TEXT NOT NULL,
            created_at REAL NOT NULL
        )
    """)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS app_config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)
    await db.commit()


async def get_cached_product(barcode: str) -> tuple[ProductMeta, Chain] | None:
    """Return the cached identity for *barcode* and the chain that supplied it."""
    db = await get_db()
    cursor = await db.execute(
        "SELECT meta_json, chain, created_at FROM product_cache WHERE barcode = ?",
        (barcode.strip(),),
    )
    row = await cursor.fetchone()
    if row is None:
        return None
    if time.time() - row["created_at"] > CACHE_TTL_SECONDS:
        await db.execute("DELETE FROM product_cache WHERE barcode = ?", (barcode.strip(),))
        await db.commit()
        return None
    return ProductMeta.model_validate_json(row["meta_json"]), Chain(row["chain"])


async def set_cached_product(barcode: str, meta: ProductMeta, chain: Chain) -> None:
    db = await get_db()
    await db.execute(
        """INSERT OR REPLACE INTO product_cache (barcode, meta_json, chain, created_at)
           VALUES (?, ?, ?, ?)""",
        (barcode.strip(), meta.model_dump_json(), chain.value, time.time()),
    )
    await db.commit()


async def get_config(key: str) -> str | None:
    db = await get_db()
    cursor = await db.execute("SELECT value FROM app_config WHERE key = ?", (key,))
    row = await cursor.fetchone()
    return row["value"] if row else None


async def set_config(key: str, value: str) -> None:
    db = await get_db()
    await db.execute(
        "INSERT OR REPLACE INTO app_config (key, value) VALUES (?, ?)",
        (key, value),
    )
    await db.commit()
