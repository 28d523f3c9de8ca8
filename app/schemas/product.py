from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class ProductCreate(BaseModel):
    """Creation payload.

    Fields are optional at the schema level so the service can report
    missing values and malformed prices with its own messages.
    """

    name: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[Union[str, int, float, Decimal]] = None
    warehouse_id: Optional[int] = None
    initial_quantity: Optional[int] = None
    product_type: Optional[str] = None
    low_stock_threshold: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class ProductCreated(BaseModel):
    message: str
    product_id: int
