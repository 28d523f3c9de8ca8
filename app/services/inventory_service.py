import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import CHANGE_TYPE_OUT, CHANGE_TYPES
from app.core.errors import InternalError, NotFoundError, ValidationError
from app.models.inventory import Inventory, InventoryChange

logger = logging.getLogger(__name__)


def record_inventory_change(
    db: Session,
    inventory_id: int,
    change_type: Any,
    quantity: Any,
    reason: Optional[str] = None,
) -> InventoryChange:
    """Append a ledger entry and apply its signed delta to the stock row.

    Existing ledger rows are never touched; corrections are new entries.
    """
    direction = str(change_type or "").strip().upper()
    if direction not in CHANGE_TYPES:
        raise ValidationError(
            "change_type must be one of {}".format(", ".join(CHANGE_TYPES)),
            field="change_type",
        )
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("quantity must be a positive integer", field="quantity")

    inventory = db.get(Inventory, inventory_id)
    if inventory is None:
        raise NotFoundError("Inventory {} not found".format(inventory_id))

    delta = -quantity if direction == CHANGE_TYPE_OUT else quantity
    try:
        change = InventoryChange(
            inventory_id=inventory.id,
            change_type=direction,
            change_quantity=quantity,
            reason=reason,
        )
        db.add(change)
        inventory.quantity = (inventory.quantity or 0) + delta
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error recording change for inventory %s", inventory_id)
        raise InternalError("An unexpected error occurred") from exc

    if inventory.quantity < 0:
        logger.warning(
            "Inventory %s went negative (%s) after %s of %s",
            inventory_id,
            inventory.quantity,
            direction,
            quantity,
        )
    return change


__all__ = ["record_inventory_change"]
