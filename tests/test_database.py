"""Tests for the identity cache and stored app config."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pantryscan import database
from pantryscan.models import AppConfig, Chain, ProductMeta
from pantryscan.services.location import (
    CONFIG_KEY,
    get_app_config,
    get_default_location,
    set_postal_code,
)


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._path_patch = patch.object(database, "DB_PATH", Path(self._tmp.name) / "test.db")
        self._path_patch.start()

    async def asyncTearDown(self):
        await database.close_db()
        self._path_patch.stop()
        self._tmp.cleanup()


class TestProductCache(DatabaseTestCase):
    async def test_round_trip(self):
        meta = ProductMeta(name="Widget", image="https://img", brand="Acme")
        await database.set_cached_product("012345", meta, Chain.TARGET)

        cached = await database.get_cached_product("012345")
        self.assertEqual(cached, (meta, Chain.TARGET))

    async def test_miss(self):
        self.assertIsNone(await database.get_cached_product("nothing"))

    async def test_expired_entry_is_dropped(self):
        await database.set_cached_product("012345", ProductMeta(name="Widget"), Chain.WALMART)
        with patch.object(database, "CACHE_TTL_SECONDS", -1):
            self.assertIsNone(await database.get_cached_product("012345"))
        self.assertIsNone(await database.get_cached_product("012345"))


class TestLocationConfig(DatabaseTestCase):
    async def test_defaults(self):
        self.assertEqual(await get_app_config(), AppConfig())
        self.assertIsNone(await get_default_location())

    async def test_set_postal_code(self):
        config = await set_postal_code(" 90210 ")
        self.assertEqual(config.postal_code, "90210")
        self.assertEqual(await get_default_location(), "90210")

    async def test_blank_postal_code_clears_default(self):
        await set_postal_code("90210")
        config = await set_postal_code("   ")
        self.assertIsNone(config.postal_code)
        self.assertIsNone(await get_default_location())

    async def test_invalid_stored_config_resets(self):
        await database.set_config(CONFIG_KEY, '{"postal_code": 5}')
        self.assertEqual(await get_app_config(), AppConfig())


if __name__ == "__main__":
    unittest.main()
