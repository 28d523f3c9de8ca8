from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.dependencies import get_db, require_auth
from app.models.inventory import Inventory
from app.schemas.inventory import (
    InventoryChangeCreate,
    InventoryChangeRead,
    InventoryChangeRecorded,
)
from app.services.inventory_service import record_inventory_change

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])


@router.post(
    "/{inventory_id}/changes",
    response_model=InventoryChangeRecorded,
    status_code=status.HTTP_201_CREATED,
)
def record_change(
    inventory_id: int,
    payload: InventoryChangeCreate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    change = record_inventory_change(
        db,
        inventory_id,
        payload.change_type,
        payload.quantity,
        payload.reason,
    )
    inventory = db.get(Inventory, inventory_id)
    return InventoryChangeRecorded(
        message="Inventory change recorded",
        change=InventoryChangeRead.model_validate(change),
        quantity=inventory.quantity,
    )


__all__ = ["router"]
