import os
import tempfile
import unittest

from pos_core.catalog import CatalogStore
from pos_core.constants import MAX_QUANTITY
from pos_core.errors import InvalidInput, PersistenceFailure
from pos_core.models import Product
from pos_core.storage import InMemoryCatalogBackend, SqliteCatalogBackend


def widget(qty=10, price=2.5, product_id="P1", name="Widget"):
    return Product(id=product_id, name=name, quantity=qty, price=price)


class TestCatalogStore(unittest.TestCase):
    """Store logic against the in-memory backend."""

    def setUp(self):
        self.backend = InMemoryCatalogBackend()
        self.store = CatalogStore(self.backend)

    def test_starts_empty_when_nothing_saved(self):
        self.assertEqual(self.store.get_all(), [])
        self.assertEqual(self.backend.save_count, 0)

    def test_add_appends_and_saves(self):
        self.store.add(widget())
        self.store.add(widget(product_id="P2", name="Gadget"))
        self.assertEqual([p.id for p in self.store.get_all()], ["P1", "P2"])
        self.assertEqual(self.backend.save_count, 2)

    def test_add_keeps_duplicate_ids_and_find_returns_first(self):
        self.store.add(widget(name="First"))
        self.store.add(widget(name="Second"))
        self.assertEqual(len(self.store.get_all()), 2)
        self.assertEqual(self.store.find("P1").name, "First")

    def test_add_rejects_negative_quantity_or_price(self):
        with self.assertRaises(InvalidInput):
            self.store.add(widget(qty=-1))
        with self.assertRaises(InvalidInput):
            self.store.add(widget(price=-0.5))
        self.assertEqual(self.store.get_all(), [])
        self.assertEqual(self.backend.save_count, 0)

    def test_delete_removes_every_match(self):
        self.store.add(widget(name="First"))
        self.store.add(widget(product_id="P2"))
        self.store.add(widget(name="Second"))
        self.assertEqual(self.store.delete("P1"), 2)
        self.assertEqual([p.id for p in self.store.get_all()], ["P2"])

    def test_delete_unknown_id_still_saves(self):
        self.store.add(widget())
        saves = self.backend.save_count
        self.assertEqual(self.store.delete("nope"), 0)
        self.assertEqual(self.backend.save_count, saves + 1)
        self.assertEqual(len(self.store.get_all()), 1)

    def test_update_quantity_sets_absolute_value_on_first_match(self):
        self.store.add(widget(name="First"))
        self.store.add(widget(name="Second", qty=3))
        self.assertTrue(self.store.update_quantity("P1", 2))
        self.assertEqual([p.quantity for p in self.store.get_all()], [2, 3])

    def test_update_quantity_unknown_id_saves_and_reports_miss(self):
        saves = self.backend.save_count
        self.assertFalse(self.store.update_quantity("nope", 4))
        self.assertEqual(self.backend.save_count, saves + 1)

    def test_update_quantity_rejects_negative(self):
        self.store.add(widget())
        saves = self.backend.save_count
        with self.assertRaises(InvalidInput):
            self.store.update_quantity("P1", -3)
        self.assertEqual(self.store.find("P1").quantity, 10)
        self.assertEqual(self.backend.save_count, saves)

    def test_quantity_above_limit_is_rejected(self):
        self.store.add(widget())
        saves = self.backend.save_count
        with self.assertRaises(InvalidInput):
            self.store.update_quantity("P1", MAX_QUANTITY + 1)
        with self.assertRaises(InvalidInput):
            self.store.add(widget(qty=10**20, product_id="P2"))
        self.assertEqual(self.store.find("P1").quantity, 10)
        self.assertIsNone(self.store.find("P2"))
        self.assertEqual(self.backend.save_count, saves)
        self.store.update_quantity("P1", MAX_QUANTITY)
        self.assertEqual(self.store.find("P1").quantity, MAX_QUANTITY)

    def test_reduce_stock_succeeds_exactly_when_enough(self):
        self.store.add(widget(qty=5))
        self.assertTrue(self.store.reduce_stock("P1", 5))
        self.assertEqual(self.store.find("P1").quantity, 0)

    def test_reduce_stock_insufficient_changes_nothing(self):
        self.store.add(widget(qty=4))
        saves = self.backend.save_count
        self.assertFalse(self.store.reduce_stock("P1", 5))
        self.assertEqual(self.store.find("P1").quantity, 4)
        self.assertEqual(self.backend.save_count, saves)

    def test_reduce_stock_unknown_id(self):
        self.assertFalse(self.store.reduce_stock("nope", 1))
        self.assertEqual(self.backend.save_count, 0)

    def test_reduce_stock_sequence_never_goes_negative(self):
        self.store.add(widget(qty=7))
        results = [self.store.reduce_stock("P1", q) for q in (3, 3, 3, 1)]
        self.assertEqual(results, [True, True, False, True])
        self.assertEqual(self.store.find("P1").quantity, 0)

    def test_get_all_is_live(self):
        self.store.add(widget())
        products = self.store.get_all()
        self.store.reduce_stock("P1", 4)
        self.assertEqual(products[0].quantity, 6)
        self.store.delete("P1")
        self.assertEqual(products, [])

    def test_low_stock(self):
        self.store.add(widget(qty=4))
        self.store.add(widget(product_id="P2", qty=5))
        self.store.add(widget(product_id="P3", qty=0))
        self.assertEqual([p.id for p in self.store.low_stock()], ["P1", "P3"])
        self.assertEqual([p.id for p in self.store.low_stock(1)], ["P3"])


class TestCatalogPersistenceFailures(unittest.TestCase):
    def test_load_failure_gives_empty_catalog(self):
        backend = InMemoryCatalogBackend([widget()])
        backend.fail_loads = True
        store = CatalogStore(backend)
        self.assertEqual(store.get_all(), [])

    def test_save_failure_keeps_mutation_and_records_error(self):
        backend = InMemoryCatalogBackend()
        store = CatalogStore(backend)
        backend.fail_saves = True
        with self.assertLogs("pos_core.catalog", level="ERROR"):
            store.add(widget())
        self.assertEqual(len(store.get_all()), 1)
        self.assertIsNotNone(store.last_error)

        backend.fail_saves = False
        store.update_quantity("P1", 8)
        self.assertIsNone(store.last_error)
        self.assertEqual(backend.load()[0].quantity, 8)


class TestCatalogRoundTrip(unittest.TestCase):
    """Reloading from the SQLite file gives back the same catalog."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "inventory.db")

    def tearDown(self):
        self.tmpdir.cleanup()

    def reload(self):
        return CatalogStore(SqliteCatalogBackend(self.path)).get_all()

    def test_round_trip_after_mixed_mutations(self):
        store = CatalogStore(SqliteCatalogBackend(self.path))
        store.add(widget())
        store.add(Product(id="P2", name="Gadget, large", quantity=0, price=0.1))
        store.add(Product(id="P1", name="Widget copy", quantity=1, price=1e-7))
        store.add(Product(id="P3", name="Ünïcode", quantity=99, price=12345678.9))
        store.update_quantity("P1", 3)
        store.delete("P3")
        store.add(Product(id="P4", name="Last", quantity=2, price=0.3))
        self.assertEqual(self.reload(), store.get_all())

    def test_first_run_without_file(self):
        self.assertEqual(self.reload(), [])

    def test_corrupt_file_falls_back_to_empty(self):
        with open(self.path, "wb") as f:
            f.write(b"this is not a database" * 100)
        self.assertEqual(self.reload(), [])

    def test_oversized_quantity_fails_as_persistence_failure(self):
        backend = SqliteCatalogBackend(self.path)
        backend.save([widget()])
        with self.assertRaises(PersistenceFailure):
            backend.save([widget(), widget(qty=99999999999999999999, product_id="P2")])
        # previous snapshot is untouched
        self.assertEqual(backend.load(), [widget()])

    def test_store_survives_unsavable_catalog(self):
        store = CatalogStore(SqliteCatalogBackend(self.path))
        store.add(widget())
        store.get_all().append(widget(qty=99999999999999999999, product_id="P2"))
        with self.assertLogs("pos_core.catalog", level="ERROR"):
            self.assertTrue(store.update_quantity("P1", 4))
        self.assertIsNotNone(store.last_error)
        self.assertEqual(store.find("P1").quantity, 4)
        self.assertEqual(self.reload(), [widget()])


if __name__ == "__main__":
    unittest.main(verbosity=2)
