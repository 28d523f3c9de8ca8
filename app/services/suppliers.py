from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.supplier import ProductSupplier, Supplier


@dataclass(frozen=True)
class SupplierSnapshot:
    id: int
    name: str
    contact_email: Optional[str]
    supply_price: Decimal

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "contact_email": self.contact_email}


class SupplierResolver:
    def __init__(self, db: Session):
        self.db = db

    def primary_supplier(self, product_id: int) -> Optional[SupplierSnapshot]:
        """Cheapest supplier for the product; lowest supplier id breaks ties."""
        row = self.db.execute(
            select(
                Supplier.id,
                Supplier.name,
                Supplier.contact_email,
                ProductSupplier.supply_price,
            )
            .join(ProductSupplier, ProductSupplier.supplier_id == Supplier.id)
            .where(ProductSupplier.product_id == product_id)
            .order_by(ProductSupplier.supply_price.asc(), Supplier.id.asc())
            .limit(1)
        ).first()
        if row is None:
            return None
        return SupplierSnapshot(
            id=row[0],
            name=row[1],
            contact_email=row[2],
            supply_price=Decimal(row[3]),
        )


__all__ = ["SupplierResolver", "SupplierSnapshot"]
