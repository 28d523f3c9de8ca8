from app.services.inventory_service import record_inventory_change
from app.services.inventory_snapshot import InventorySnapshotProvider, WarehouseStock
from app.services.low_stock import (
    AlertReport,
    LowStockAlert,
    LowStockAlertEngine,
    StockoutProjection,
)
from app.services.product_service import create_product
from app.services.sales_activity import SalesActivityAnalyzer
from app.services.suppliers import SupplierResolver, SupplierSnapshot
from app.services.thresholds import ThresholdResolver

__all__ = [
    "AlertReport",
    "InventorySnapshotProvider",
    "LowStockAlert",
    "LowStockAlertEngine",
    "SalesActivityAnalyzer",
    "StockoutProjection",
    "SupplierResolver",
    "SupplierSnapshot",
    "ThresholdResolver",
    "WarehouseStock",
    "create_product",
    "record_inventory_change",
]
