import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import CHANGE_TYPE_IN, INITIAL_STOCK_REASON
from app.core.errors import InternalError, NotFoundError, ValidationError
from app.models.inventory import Inventory, InventoryChange
from app.models.product import Product
from app.models.warehouse import Warehouse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "sku", "price", "warehouse_id")

# Matches products.price Numeric(12, 2).
PRICE_QUANTUM = Decimal("0.01")
PRICE_LIMIT = Decimal(10) ** 10


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_sku(value: Any) -> str:
    return str(value).strip().upper()


def parse_price(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("Invalid price format", field="price")
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid price format", field="price") from None
    if not price.is_finite():
        raise ValidationError("Invalid price format", field="price")
    if price < 0:
        raise ValidationError("Price cannot be negative", field="price")
    if price >= PRICE_LIMIT or price != price.quantize(PRICE_QUANTUM):
        raise ValidationError("Invalid price format", field="price")
    return price


def _parse_int(value: Any, field: str, *, minimum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ValidationError("Invalid {} format".format(field), field=field)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError("Invalid {} format".format(field), field=field)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid {} format".format(field), field=field) from None
    if minimum is not None and number < minimum:
        raise ValidationError("{} cannot be negative".format(field), field=field)
    return number


def validate_product_fields(fields: Mapping[str, Any]) -> dict:
    """Check and coerce the creation payload. Nothing is written here."""
    missing = [name for name in REQUIRED_FIELDS if _is_missing(fields.get(name))]
    if missing:
        raise ValidationError(
            "Missing required fields: {}".format(", ".join(missing)),
            field=missing[0],
        )

    initial_quantity = fields.get("initial_quantity")
    threshold = fields.get("low_stock_threshold")
    product_type = fields.get("product_type")
    return {
        "name": str(fields["name"]).strip(),
        "sku": normalize_sku(fields["sku"]),
        "price": parse_price(fields["price"]),
        "warehouse_id": _parse_int(fields["warehouse_id"], "warehouse_id"),
        "initial_quantity": (
            0 if initial_quantity is None
            else _parse_int(initial_quantity, "initial_quantity", minimum=0)
        ),
        "low_stock_threshold": (
            None if threshold is None
            else _parse_int(threshold, "low_stock_threshold", minimum=0)
        ),
        "product_type": (str(product_type).strip() or None) if product_type is not None else None,
    }


def sku_exists(db: Session, sku: str) -> bool:
    return db.execute(select(Product.id).where(Product.sku == sku).limit(1)).first() is not None


def create_product(db: Session, fields: Mapping[str, Any]) -> int:
    """Create a product and its first inventory row as one unit of work."""
    data = validate_product_fields(fields)

    if db.get(Warehouse, data["warehouse_id"]) is None:
        raise NotFoundError("Warehouse {} not found".format(data["warehouse_id"]))
    if sku_exists(db, data["sku"]):
        raise ValidationError("SKU already exists", field="sku")

    try:
        product = Product(
            name=data["name"],
            sku=data["sku"],
            price=data["price"],
            product_type=data["product_type"],
            low_stock_threshold=data["low_stock_threshold"],
        )
        db.add(product)
        db.flush()

        inventory = Inventory(
            product_id=product.id,
            warehouse_id=data["warehouse_id"],
            quantity=data["initial_quantity"],
        )
        db.add(inventory)
        db.flush()

        if data["initial_quantity"] > 0:
            db.add(
                InventoryChange(
                    inventory_id=inventory.id,
                    change_type=CHANGE_TYPE_IN,
                    change_quantity=data["initial_quantity"],
                    reason=INITIAL_STOCK_REASON,
                )
            )

        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # A concurrent writer may have taken the SKU after the pre-check.
        if sku_exists(db, data["sku"]):
            raise ValidationError("SKU already exists", field="sku") from exc
        logger.error("Constraint violation creating product %s: %s", data["sku"], exc.orig)
        raise InternalError("An unexpected error occurred") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error creating product %s", data["sku"])
        raise InternalError("An unexpected error occurred") from exc

    logger.info(
        "Created product %s (sku=%s) in warehouse %s with quantity %s",
        product.id,
        product.sku,
        data["warehouse_id"],
        data["initial_quantity"],
    )
    return product.id


__all__ = [
    "REQUIRED_FIELDS",
    "create_product",
    "normalize_sku",
    "parse_price",
    "sku_exists",
    "validate_product_fields",
]
