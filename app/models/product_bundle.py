from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer

from app.database.base import Base


class ProductBundle(Base):
    __tablename__ = "product_bundles"

    parent_product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    child_product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    quantity = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_product_bundles_quantity_positive"),
        CheckConstraint(
            "parent_product_id <> child_product_id",
            name="ck_product_bundles_not_self",
        ),
    )


__all__ = ["ProductBundle"]
