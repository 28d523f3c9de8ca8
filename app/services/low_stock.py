import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from fractions import Fraction
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.core.constants import UNBOUNDED_STOCKOUT_DAYS
from app.core.dates import utc_now
from app.core.errors import InternalError, NotFoundError
from app.models.company import Company
from app.models.inventory import Inventory
from app.models.product import Product
from app.models.warehouse import Warehouse
from app.services.inventory_snapshot import InventorySnapshotProvider, WarehouseStock
from app.services.sales_activity import SalesActivityAnalyzer
from app.services.suppliers import SupplierResolver, SupplierSnapshot
from app.services.thresholds import ThresholdResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockoutProjection:
    """Days until stock runs out; ``days is None`` means no foreseeable stockout."""

    days: Optional[int]

    @property
    def unbounded(self) -> bool:
        return self.days is None

    @classmethod
    def project(cls, quantity: int, velocity: Fraction) -> "StockoutProjection":
        if velocity == 0:
            return UNBOUNDED
        if quantity <= 0:
            return cls(days=0)
        return cls(days=math.ceil(Fraction(quantity) / velocity))

    def wire_days(self) -> int:
        return UNBOUNDED_STOCKOUT_DAYS if self.unbounded else self.days


UNBOUNDED = StockoutProjection(days=None)


def calculate_urgency(projection: StockoutProjection, current_stock: int) -> str:
    if current_stock <= 0:
        return "critical"
    if projection.unbounded:
        return "low"
    if projection.days <= 3:
        return "critical"
    if projection.days <= 7:
        return "high"
    if projection.days <= 14:
        return "medium"
    return "low"


def calculate_reorder_quantity(
    threshold: int,
    current_stock: int,
    *,
    target_multiplier: int = 2,
    round_to: int = 10,
) -> int:
    """Quantity that brings stock back to ``threshold * target_multiplier``."""
    needed = threshold * target_multiplier - current_stock
    rounded = math.ceil(needed / round_to) * round_to
    return max(round_to, rounded)


@dataclass(frozen=True)
class LowStockAlert:
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: str
    current_stock: int
    threshold: int
    projection: StockoutProjection
    daily_velocity: Fraction
    supplier: Optional[SupplierSnapshot]
    urgency: str
    recommended_reorder_quantity: int

    @property
    def days_until_stockout(self) -> Optional[int]:
        return self.projection.days

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "sku": self.sku,
            "warehouse_id": self.warehouse_id,
            "warehouse_name": self.warehouse_name,
            "current_stock": self.current_stock,
            "threshold": self.threshold,
            "days_until_stockout": self.projection.wire_days(),
            "stockout_unbounded": self.projection.unbounded,
            "daily_velocity": round(float(self.daily_velocity), 2),
            "urgency": self.urgency,
            "recommended_reorder_quantity": self.recommended_reorder_quantity,
            "supplier": self.supplier.to_dict() if self.supplier else None,
        }


@dataclass
class AlertReport:
    company_id: int
    window_days: int
    generated_at: datetime
    alerts: list[LowStockAlert] = field(default_factory=list)

    @property
    def total_alerts(self) -> int:
        return len(self.alerts)

    def to_dict(self) -> dict:
        return {
            "alerts": [alert.to_dict() for alert in self.alerts],
            "total_alerts": self.total_alerts,
            "generated_at": self.generated_at.isoformat(),
            "window_days": self.window_days,
        }


class LowStockAlertEngine:
    def __init__(
        self,
        db: Session,
        *,
        snapshots: InventorySnapshotProvider,
        activity: SalesActivityAnalyzer,
        thresholds: ThresholdResolver,
        suppliers: SupplierResolver,
        reorder_multiplier: int = 2,
        reorder_round_to: int = 10,
    ):
        self.db = db
        self.snapshots = snapshots
        self.activity = activity
        self.thresholds = thresholds
        self.suppliers = suppliers
        self.reorder_multiplier = reorder_multiplier
        self.reorder_round_to = reorder_round_to

    @classmethod
    def from_settings(cls, db: Session, settings: Optional[Settings] = None, **kwargs):
        settings = settings or get_settings()
        return cls(
            db,
            snapshots=InventorySnapshotProvider(db),
            activity=SalesActivityAnalyzer(db, settings.ALERT_WINDOW_DAYS, **kwargs),
            thresholds=ThresholdResolver(
                db,
                fallback=settings.DEFAULT_LOW_STOCK_THRESHOLD,
                type_thresholds=settings.PRODUCT_TYPE_THRESHOLDS,
            ),
            suppliers=SupplierResolver(db),
            reorder_multiplier=settings.REORDER_TARGET_MULTIPLIER,
            reorder_round_to=settings.REORDER_ROUND_TO,
        )

    def compute_alerts(self, company_id: int, *, warehouse_id: Optional[int] = None) -> AlertReport:
        """Low-stock alerts for every (product, warehouse) of the company.

        Any data-access failure aborts the whole computation; there are no
        partial results.
        """
        try:
            self._ensure_scope(company_id, warehouse_id)
            products = self._company_products(company_id)
            alerts: list[LowStockAlert] = []
            for product in products:
                alerts.extend(self._evaluate_product(product, company_id, warehouse_id))
        except SQLAlchemyError as exc:
            logger.exception("Low-stock computation failed for company %s", company_id)
            raise InternalError("An error occurred while generating alerts") from exc

        alerts.sort(key=lambda alert: (alert.product_id, alert.warehouse_id))
        logger.info(
            "Computed %d low-stock alerts for company %s across %d products",
            len(alerts),
            company_id,
            len(products),
        )
        return AlertReport(
            company_id=company_id,
            window_days=self.activity.window_days,
            generated_at=utc_now(),
            alerts=alerts,
        )

    def _ensure_scope(self, company_id: int, warehouse_id: Optional[int]) -> None:
        if self.db.get(Company, company_id) is None:
            raise NotFoundError("Company {} not found".format(company_id))
        if warehouse_id is None:
            return
        warehouse = self.db.get(Warehouse, warehouse_id)
        if warehouse is None or warehouse.company_id != company_id:
            raise NotFoundError(
                "Warehouse {} not found for company {}".format(warehouse_id, company_id)
            )

    def _company_products(self, company_id: int) -> list[Product]:
        stmt = (
            select(Product)
            .join(Inventory, Inventory.product_id == Product.id)
            .join(Warehouse, Warehouse.id == Inventory.warehouse_id)
            .where(Warehouse.company_id == company_id)
            .distinct()
            .order_by(Product.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def _evaluate_product(
        self,
        product: Product,
        company_id: int,
        warehouse_id: Optional[int],
    ) -> list[LowStockAlert]:
        if not self.activity.has_recent_activity(product.id, company_id=company_id):
            logger.debug("Skipping product %s - no recent activity", product.id)
            return []

        stock = self.snapshots.snapshot(
            product.id, company_id=company_id, warehouse_id=warehouse_id
        )
        threshold = self.thresholds.threshold_for(product)
        low_entries = [entry for entry in stock if entry.quantity <= threshold]
        if not low_entries:
            return []

        velocity = self.activity.daily_velocity(product.id, company_id=company_id)
        supplier = self.suppliers.primary_supplier(product.id)
        return [
            self._build_alert(product, entry, threshold, velocity, supplier)
            for entry in low_entries
        ]

    def _build_alert(
        self,
        product: Product,
        entry: WarehouseStock,
        threshold: int,
        velocity: Fraction,
        supplier: Optional[SupplierSnapshot],
    ) -> LowStockAlert:
        projection = StockoutProjection.project(entry.quantity, velocity)
        return LowStockAlert(
            product_id=product.id,
            product_name=product.name,
            sku=product.sku,
            warehouse_id=entry.warehouse_id,
            warehouse_name=entry.warehouse_name,
            current_stock=entry.quantity,
            threshold=threshold,
            projection=projection,
            daily_velocity=velocity,
            supplier=supplier,
            urgency=calculate_urgency(projection, entry.quantity),
            recommended_reorder_quantity=calculate_reorder_quantity(
                threshold,
                entry.quantity,
                target_multiplier=self.reorder_multiplier,
                round_to=self.reorder_round_to,
            ),
        )


__all__ = [
    "UNBOUNDED",
    "AlertReport",
    "LowStockAlert",
    "LowStockAlertEngine",
    "StockoutProjection",
    "calculate_reorder_quantity",
    "calculate_urgency",
]
