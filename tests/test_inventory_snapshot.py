import unittest

from app.models.warehouse import Warehouse
from app.services.inventory_snapshot import InventorySnapshotProvider
from tests.factories import add_company, add_inventory, add_product, make_sessionmaker


class InventorySnapshotProviderTest(unittest.TestCase):
    def setUp(self):
        self.engine, Session = make_sessionmaker()
        self.db = Session()
        self.company = add_company(self.db)
        self.warehouses = {}
        for warehouse_id in (30, 10, 20):
            warehouse = Warehouse(id=warehouse_id, company_id=self.company.id, name="W{}".format(warehouse_id))
            self.db.add(warehouse)
            self.warehouses[warehouse_id] = warehouse
        self.db.flush()
        self.product = add_product(self.db, "WID-001")
        self.provider = InventorySnapshotProvider(self.db)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_entries_ordered_by_warehouse_id(self):
        add_inventory(self.db, self.product, self.warehouses[30], 3)
        add_inventory(self.db, self.product, self.warehouses[10], 7)
        add_inventory(self.db, self.product, self.warehouses[20], -2)

        snapshot = self.provider.snapshot(self.product.id)

        self.assertEqual([entry.warehouse_id for entry in snapshot], [10, 20, 30])
        self.assertEqual([entry.quantity for entry in snapshot], [7, -2, 3])
        self.assertEqual(snapshot[0].warehouse_name, "W10")

    def test_product_without_inventory_returns_empty(self):
        self.assertEqual(self.provider.snapshot(self.product.id), [])

    def test_company_and_warehouse_filters(self):
        other = add_company(self.db, "Other")
        foreign = Warehouse(id=99, company_id=other.id, name="Foreign")
        self.db.add(foreign)
        self.db.flush()
        add_inventory(self.db, self.product, foreign, 1)
        add_inventory(self.db, self.product, self.warehouses[10], 2)
        add_inventory(self.db, self.product, self.warehouses[20], 4)

        scoped = self.provider.snapshot(self.product.id, company_id=self.company.id)
        single = self.provider.snapshot(
            self.product.id, company_id=self.company.id, warehouse_id=20
        )

        self.assertEqual([entry.warehouse_id for entry in scoped], [10, 20])
        self.assertEqual([entry.warehouse_id for entry in single], [20])


if __name__ == "__main__":
    unittest.main()
