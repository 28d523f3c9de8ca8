from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.inventory import Inventory
from app.models.warehouse import Warehouse


@dataclass(frozen=True)
class WarehouseStock:
    inventory_id: int
    warehouse_id: int
    warehouse_name: str
    quantity: int


class InventorySnapshotProvider:
    """Read-only view of a product's stock, one entry per warehouse."""

    def __init__(self, db: Session):
        self.db = db

    def snapshot(
        self,
        product_id: int,
        *,
        company_id: Optional[int] = None,
        warehouse_id: Optional[int] = None,
    ) -> list[WarehouseStock]:
        stmt = (
            select(
                Inventory.id,
                Inventory.warehouse_id,
                Warehouse.name,
                Inventory.quantity,
            )
            .select_from(Inventory)
            .join(Warehouse, Warehouse.id == Inventory.warehouse_id)
            .where(Inventory.product_id == product_id)
        )
        if company_id is not None:
            stmt = stmt.where(Warehouse.company_id == company_id)
        if warehouse_id is not None:
            stmt = stmt.where(Inventory.warehouse_id == warehouse_id)
        stmt = stmt.order_by(Inventory.warehouse_id.asc())

        return [
            WarehouseStock(
                inventory_id=row[0],
                warehouse_id=row[1],
                warehouse_name=row[2],
                quantity=int(row[3] or 0),
            )
            for row in self.db.execute(stmt).all()
        ]


__all__ = ["InventorySnapshotProvider", "WarehouseStock"]
