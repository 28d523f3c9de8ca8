from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String

from app.database.base import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    contact_email = Column(String)
    contact_phone = Column(String)


class ProductSupplier(Base):
    __tablename__ = "product_suppliers"

    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        primary_key=True,
    )
    supply_price = Column(Numeric(12, 2, asdecimal=True), nullable=False)

    __table_args__ = (
        CheckConstraint("supply_price >= 0", name="ck_product_suppliers_price_non_negative"),
    )


__all__ = ["ProductSupplier", "Supplier"]
