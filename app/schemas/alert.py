from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.core.constants import UNBOUNDED_STOCKOUT_DAYS


class SupplierRead(BaseModel):
    id: int
    name: str
    contact_email: Optional[str] = None


class LowStockAlertRead(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: str
    current_stock: int
    threshold: int
    days_until_stockout: int = Field(
        description=(
            "Projected days until stock reaches zero. "
            "{} means no foreseeable stockout (no outbound movement in the window).".format(
                UNBOUNDED_STOCKOUT_DAYS
            )
        ),
    )
    stockout_unbounded: bool
    daily_velocity: float
    urgency: str
    recommended_reorder_quantity: int
    supplier: Optional[SupplierRead] = None


class LowStockAlertsResponse(BaseModel):
    alerts: List[LowStockAlertRead] = Field(default_factory=list)
    total_alerts: int
    generated_at: datetime
    window_days: int
