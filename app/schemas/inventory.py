from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class InventoryChangeCreate(BaseModel):
    change_type: str
    quantity: int
    reason: Optional[str] = None


class InventoryChangeRead(BaseModel):
    id: int
    inventory_id: int
    change_type: str
    change_quantity: int
    change_date: datetime
    reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class InventoryChangeRecorded(BaseModel):
    message: str
    change: InventoryChangeRead
    quantity: int
