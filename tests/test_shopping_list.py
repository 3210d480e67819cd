"""Tests for shopping-list loading and scan-result conversion."""

import json
import unittest
from datetime import datetime, timedelta, timezone

from pantryscan.models import (
    Chain,
    PriceObservation,
    ProductInfo,
    ShoppingItem,
    StoreInventory,
)
from pantryscan.services.shopping_list import (
    aisle_summary,
    estimate_total,
    is_price_stale,
    load_shopping_list,
    price_observations,
)

STORED_LIST = json.dumps([
    {
        "id": "k3j9x",
        "barcode": "012345",
        "name": "Widget",
        "quantity": 2,
        "dateAdded": "2024-05-01T10:30:00.000Z",
        "image": "",
        "prices": [
            {
                "store": "Walmart",
                "price": 4.99,
                "distance": 0,
                "address": "5932",
                "timestamp": "2024-05-01T10:30:00.000Z",
            }
        ],
        "aisle": "Walmart: Aisle A12",
    }
])


def _inv(chain, in_stock, price=None, store_id="1", aisle="Aisle 3"):
    return StoreInventory(store_id=store_id, chain=chain, in_stock=in_stock,
                          aisle=aisle, price=price)


def _info(inventory, alternatives=None) -> ProductInfo:
    return ProductInfo(name="Widget", barcode="012345", inventory=inventory,
                       alternative_stores=alternatives)


class TestLoadShoppingList(unittest.TestCase):
    def test_rehydrates_dates(self):
        items = load_shopping_list(STORED_LIST)
        self.assertEqual(len(items), 1)
        item = items[0]
        self.assertEqual(item.quantity, 2)
        self.assertIsInstance(item.date_added, datetime)
        self.assertEqual(item.prices[0].timestamp,
                         datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc))

    def test_empty_blob(self):
        self.assertEqual(load_shopping_list(None), [])
        self.assertEqual(load_shopping_list("  "), [])


class TestPriceObservations(unittest.TestCase):
    def test_primary_then_alternatives(self):
        info = _info(
            _inv(Chain.WALMART, False, price=6.0, store_id="w1"),
            [_inv(Chain.TARGET, True, price=4.99, store_id="t1"),
             _inv(Chain.WALMART, True, store_id="w2")],
        )
        obs = price_observations(info)
        self.assertEqual([(o.store, o.price, o.address) for o in obs],
                         [("Walmart", 6.0, "w1"), ("Target", 4.99, "t1")])

    def test_no_prices(self):
        self.assertEqual(price_observations(_info(_inv(Chain.TARGET, False))), [])


class TestAisleSummary(unittest.TestCase):
    def test_in_stock(self):
        info = _info(_inv(Chain.TARGET, True, aisle="Aisle 7"))
        self.assertEqual(aisle_summary(info), "Target: Aisle 7")

    def test_available_elsewhere(self):
        info = _info(_inv(Chain.WALMART, False), [_inv(Chain.TARGET, True)])
        self.assertEqual(aisle_summary(info), "Out of stock here. Available at Target")

    def test_unavailable(self):
        info = _info(_inv(Chain.WALMART, False))
        self.assertEqual(aisle_summary(info), "Out of stock at all nearby stores")


class TestStaleness(unittest.TestCase):
    def test_fresh_and_stale(self):
        now = datetime(2024, 5, 2, 12, 0)
        fresh = PriceObservation(store="X", price=1, timestamp=now - timedelta(hours=3))
        stale = PriceObservation(store="X", price=1, timestamp=now - timedelta(hours=25))
        self.assertFalse(is_price_stale(fresh, now=now))
        self.assertTrue(is_price_stale(stale, now=now))

    def test_aware_timestamp_without_now(self):
        obs = PriceObservation(store="X", price=1,
                               timestamp=datetime(2000, 1, 1, tzinfo=timezone.utc))
        self.assertTrue(is_price_stale(obs))


class TestEstimateTotal(unittest.TestCase):
    def test_sums_first_price_times_quantity(self):
        items = load_shopping_list(STORED_LIST)
        items.append(ShoppingItem(id="n", barcode="1", name="No price", quantity=3))
        self.assertEqual(estimate_total(items), 9.98)


if __name__ == "__main__":
    unittest.main()
