from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String

from app.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)

    name = Column(String, nullable=False)
    sku = Column(String, nullable=False, unique=True)
    price = Column(Numeric(12, 2, asdecimal=True), nullable=False)

    # Optional classification; drives the type-level threshold default.
    product_type = Column(String)
    # Per-product override; NULL falls back to type/global defaults.
    low_stock_threshold = Column(Integer)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(
            "low_stock_threshold IS NULL OR low_stock_threshold >= 0",
            name="ck_products_threshold_non_negative",
        ),
    )


__all__ = ["Product"]
