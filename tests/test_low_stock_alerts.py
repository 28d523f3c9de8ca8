import unittest
from fractions import Fraction
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.config import Settings
from app.core.constants import UNBOUNDED_STOCKOUT_DAYS
from app.core.errors import InternalError, NotFoundError
from app.services.inventory_snapshot import InventorySnapshotProvider
from app.services.low_stock import (
    LowStockAlertEngine,
    StockoutProjection,
    calculate_reorder_quantity,
    calculate_urgency,
)
from app.services.sales_activity import SalesActivityAnalyzer
from app.services.suppliers import SupplierResolver
from app.services.thresholds import ThresholdResolver
from tests.factories import (
    add_change,
    add_company,
    add_inventory,
    add_product,
    add_supplier,
    add_warehouse,
    fixed_clock,
    make_sessionmaker,
)


class LowStockAlertEngineTest(unittest.TestCase):
    def setUp(self):
        self.engine, Session = make_sessionmaker()
        self.db = Session()
        self.company = add_company(self.db)
        self.main = add_warehouse(self.db, self.company, "Main Warehouse")
        self.east = add_warehouse(self.db, self.company, "East Depot")
        self.alerts = LowStockAlertEngine(
            self.db,
            snapshots=InventorySnapshotProvider(self.db),
            activity=SalesActivityAnalyzer(self.db, 30, clock=fixed_clock),
            thresholds=ThresholdResolver(self.db, fallback=10),
            suppliers=SupplierResolver(self.db),
        )

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_projection_from_velocity(self):
        product = add_product(self.db, "WID-001", low_stock_threshold=20)
        stock = add_inventory(self.db, product, self.main, 5)
        add_change(self.db, stock, "OUT", 15, days_ago=3)
        add_supplier(self.db, product, "Supplier Corp", "7.00", contact_email="orders@supplier.com")

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(report.total_alerts, 1)
        alert = report.alerts[0]
        self.assertEqual(alert.daily_velocity, Fraction(1, 2))
        self.assertEqual(alert.days_until_stockout, 10)
        payload = alert.to_dict()
        self.assertEqual(payload["product_id"], product.id)
        self.assertEqual(payload["sku"], "WID-001")
        self.assertEqual(payload["warehouse_name"], "Main Warehouse")
        self.assertEqual(payload["current_stock"], 5)
        self.assertEqual(payload["threshold"], 20)
        self.assertEqual(payload["days_until_stockout"], 10)
        self.assertFalse(payload["stockout_unbounded"])
        self.assertEqual(payload["daily_velocity"], 0.5)
        self.assertEqual(payload["supplier"]["name"], "Supplier Corp")
        self.assertEqual(payload["supplier"]["contact_email"], "orders@supplier.com")

    def test_projection_rounds_up(self):
        product = add_product(self.db, "WID-001")
        stock = add_inventory(self.db, product, self.main, 7)
        add_change(self.db, stock, "OUT", 60, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(report.alerts[0].days_until_stockout, 4)

    def test_inactive_product_excluded_even_when_out_of_stock(self):
        product = add_product(self.db, "OLD-001")
        stock = add_inventory(self.db, product, self.main, 0)
        add_change(self.db, stock, "OUT", 8, days_ago=45)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(report.alerts, [])
        self.assertEqual(report.total_alerts, 0)

    def test_inbound_only_activity_yields_unbounded_projection(self):
        product = add_product(self.db, "GAD-002")
        stock = add_inventory(self.db, product, self.main, 4)
        add_change(self.db, stock, "IN", 4, days_ago=2, reason="restock")

        report = self.alerts.compute_alerts(self.company.id)

        alert = report.alerts[0]
        self.assertTrue(alert.projection.unbounded)
        self.assertIsNone(alert.days_until_stockout)
        self.assertEqual(alert.to_dict()["days_until_stockout"], UNBOUNDED_STOCKOUT_DAYS)
        self.assertTrue(alert.to_dict()["stockout_unbounded"])
        self.assertEqual(alert.urgency, "low")

    def test_only_low_warehouses_alert(self):
        product = add_product(self.db, "WID-001")
        low = add_inventory(self.db, product, self.main, 3)
        add_inventory(self.db, product, self.east, 50)
        add_change(self.db, low, "OUT", 3, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual([alert.warehouse_id for alert in report.alerts], [self.main.id])

    def test_activity_in_one_warehouse_keeps_other_alertable(self):
        product = add_product(self.db, "WID-001")
        add_inventory(self.db, product, self.main, 2)
        busy = add_inventory(self.db, product, self.east, 80)
        add_change(self.db, busy, "OUT", 30, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(len(report.alerts), 1)
        self.assertEqual(report.alerts[0].warehouse_id, self.main.id)
        self.assertEqual(report.alerts[0].days_until_stockout, 2)

    def test_threshold_is_inclusive(self):
        product = add_product(self.db, "WID-001")
        stock = add_inventory(self.db, product, self.main, 10)
        add_change(self.db, stock, "IN", 10, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(report.total_alerts, 1)

    def test_missing_supplier_is_null(self):
        product = add_product(self.db, "WID-001")
        stock = add_inventory(self.db, product, self.main, 1)
        add_change(self.db, stock, "OUT", 1, days_ago=1)

        alert = self.alerts.compute_alerts(self.company.id).alerts[0]

        self.assertIsNone(alert.supplier)
        self.assertIsNone(alert.to_dict()["supplier"])

    def test_negative_stock_clamps_to_zero_days(self):
        product = add_product(self.db, "WID-001")
        stock = add_inventory(self.db, product, self.main, -4)
        add_change(self.db, stock, "OUT", 9, days_ago=1)

        alert = self.alerts.compute_alerts(self.company.id).alerts[0]

        self.assertEqual(alert.current_stock, -4)
        self.assertEqual(alert.days_until_stockout, 0)
        self.assertEqual(alert.urgency, "critical")

    def test_company_without_products_returns_empty_report(self):
        report = self.alerts.compute_alerts(self.company.id)
        self.assertEqual(report.alerts, [])
        self.assertEqual(report.to_dict()["total_alerts"], 0)
        self.assertEqual(report.to_dict()["window_days"], 30)

    def test_unknown_company_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.alerts.compute_alerts(424242)

    def test_alerts_ordered_by_product_then_warehouse(self):
        first = add_product(self.db, "AAA-1")
        second = add_product(self.db, "BBB-2")
        for product in (second, first):
            for warehouse in (self.east, self.main):
                stock = add_inventory(self.db, product, warehouse, 1)
                add_change(self.db, stock, "OUT", 1, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id)

        self.assertEqual(
            [(alert.product_id, alert.warehouse_id) for alert in report.alerts],
            [
                (first.id, self.main.id),
                (first.id, self.east.id),
                (second.id, self.main.id),
                (second.id, self.east.id),
            ],
        )

    def test_other_company_products_not_reported(self):
        other = add_company(self.db, "Other")
        foreign = add_warehouse(self.db, other, "Foreign")
        product = add_product(self.db, "FOR-1")
        stock = add_inventory(self.db, product, foreign, 0)
        add_change(self.db, stock, "OUT", 5, days_ago=1)

        self.assertEqual(self.alerts.compute_alerts(self.company.id).alerts, [])
        self.assertEqual(self.alerts.compute_alerts(other.id).total_alerts, 1)

    def test_warehouse_filter(self):
        product = add_product(self.db, "WID-001")
        for warehouse in (self.main, self.east):
            stock = add_inventory(self.db, product, warehouse, 1)
            add_change(self.db, stock, "OUT", 1, days_ago=1)

        report = self.alerts.compute_alerts(self.company.id, warehouse_id=self.east.id)

        self.assertEqual([alert.warehouse_id for alert in report.alerts], [self.east.id])

    def test_foreign_warehouse_filter_raises_not_found(self):
        other = add_company(self.db, "Other")
        foreign = add_warehouse(self.db, other, "Foreign")
        with self.assertRaises(NotFoundError):
            self.alerts.compute_alerts(self.company.id, warehouse_id=foreign.id)

    def test_data_access_failure_aborts_whole_computation(self):
        for sku in ("AAA-1", "BBB-2"):
            product = add_product(self.db, sku)
            stock = add_inventory(self.db, product, self.main, 1)
            add_change(self.db, stock, "OUT", 1, days_ago=1)

        failure = OperationalError("SELECT ...", {}, Exception("connection lost"))
        with patch.object(self.alerts.suppliers, "primary_supplier", side_effect=[None, failure]):
            with self.assertRaises(InternalError):
                self.alerts.compute_alerts(self.company.id)

    def test_from_settings_uses_configured_window(self):
        settings = Settings(ALERT_WINDOW_DAYS=7, DEFAULT_LOW_STOCK_THRESHOLD=3)
        engine = LowStockAlertEngine.from_settings(self.db, settings, clock=fixed_clock)
        product = add_product(self.db, "WID-001")
        stock = add_inventory(self.db, product, self.main, 3)
        add_change(self.db, stock, "OUT", 14, days_ago=6)

        alert = engine.compute_alerts(self.company.id).alerts[0]

        self.assertEqual(alert.threshold, 3)
        self.assertEqual(alert.daily_velocity, Fraction(2))
        self.assertEqual(alert.days_until_stockout, 2)


class AlertHelpersTest(unittest.TestCase):
    def test_projection_cases(self):
        self.assertTrue(StockoutProjection.project(5, Fraction(0)).unbounded)
        self.assertTrue(StockoutProjection.project(0, Fraction(0)).unbounded)
        self.assertEqual(StockoutProjection.project(0, Fraction(1, 3)).days, 0)
        self.assertEqual(StockoutProjection.project(1, Fraction(1, 3)).days, 3)
        self.assertEqual(StockoutProjection.project(9, Fraction(3)).days, 3)

    def test_urgency_levels(self):
        cases = [
            (StockoutProjection(days=2), 5, "critical"),
            (StockoutProjection(days=3), 5, "critical"),
            (StockoutProjection(days=7), 5, "high"),
            (StockoutProjection(days=14), 5, "medium"),
            (StockoutProjection(days=15), 5, "low"),
            (StockoutProjection(days=None), 5, "low"),
            (StockoutProjection(days=None), 0, "critical"),
        ]
        for projection, stock, expected in cases:
            with self.subTest(days=projection.days, stock=stock):
                self.assertEqual(calculate_urgency(projection, stock), expected)

    def test_reorder_quantity(self):
        self.assertEqual(calculate_reorder_quantity(20, 5), 40)
        self.assertEqual(calculate_reorder_quantity(10, 3), 20)
        self.assertEqual(calculate_reorder_quantity(10, 19), 10)
        self.assertEqual(calculate_reorder_quantity(10, -6), 30)
        self.assertEqual(calculate_reorder_quantity(7, 2, target_multiplier=3, round_to=5), 20)


if __name__ == "__main__":
    unittest.main()
