from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)

from app.database.base import Base


class Inventory(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True)

    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    warehouse_id = Column(
        Integer,
        ForeignKey("warehouses.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Not constrained to >= 0: faulty adjustments may drive it negative.
    quantity = Column(Integer, nullable=False, default=0)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id", name="uq_inventory_product_warehouse"),
        Index("idx_inventory_warehouse", "warehouse_id"),
    )


class InventoryChange(Base):
    """Append-only stock ledger entry. Rows are never updated."""

    __tablename__ = "inventory_changes"

    id = Column(Integer, primary_key=True)
    inventory_id = Column(
        Integer,
        ForeignKey("inventory.id", ondelete="CASCADE"),
        nullable=False,
    )

    change_type = Column(String(3), nullable=False)
    change_quantity = Column(Integer, nullable=False)
    change_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    reason = Column(String)

    __table_args__ = (
        CheckConstraint("change_type IN ('IN', 'OUT')", name="ck_inventory_changes_type"),
        CheckConstraint("change_quantity > 0", name="ck_inventory_changes_quantity_positive"),
        Index("idx_inventory_changes_inventory_date", "inventory_id", "change_date"),
    )


__all__ = ["Inventory", "InventoryChange"]
