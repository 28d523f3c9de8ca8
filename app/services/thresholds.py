from typing import Callable, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.product import Product

ThresholdRule = Callable[[Product], Optional[int]]


def product_override(product: Product) -> Optional[int]:
    return product.low_stock_threshold


def product_type_default(type_thresholds: Mapping[str, int]) -> ThresholdRule:
    normalized = {key.strip().lower(): value for key, value in type_thresholds.items()}

    def rule(product: Product) -> Optional[int]:
        product_type = (product.product_type or "").strip().lower()
        if not product_type:
            return None
        return normalized.get(product_type)

    return rule


class ThresholdResolver:
    """First non-null answer of the rule chain wins; the fallback closes it."""

    def __init__(
        self,
        db: Session,
        *,
        fallback: int,
        type_thresholds: Optional[Mapping[str, int]] = None,
        rules: Optional[Sequence[ThresholdRule]] = None,
    ):
        if fallback < 0:
            raise ValueError("fallback threshold must be non-negative")
        self.db = db
        self.fallback = fallback
        if rules is None:
            rules = (product_override, product_type_default(type_thresholds or {}))
        self.rules = tuple(rules)

    def threshold(self, product_id: int) -> int:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product {} not found".format(product_id))
        return self.threshold_for(product)

    def threshold_for(self, product: Product) -> int:
        for rule in self.rules:
            value = rule(product)
            if value is not None and value >= 0:
                return int(value)
        return self.fallback


__all__ = [
    "ThresholdResolver",
    "ThresholdRule",
    "product_override",
    "product_type_default",
]
