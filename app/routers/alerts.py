from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.dependencies import get_db
from app.schemas.alert import LowStockAlertsResponse
from app.services.low_stock import LowStockAlertEngine

router = APIRouter(prefix="/api/companies", tags=["Alerts"])


@router.get("/{company_id}/alerts/low-stock", response_model=LowStockAlertsResponse)
def low_stock_alerts(
    company_id: int,
    warehouse_id: Optional[int] = Query(None, description="Restrict to one warehouse"),
    db: Session = Depends(get_db),
):
    engine = LowStockAlertEngine.from_settings(db, get_settings())
    report = engine.compute_alerts(company_id, warehouse_id=warehouse_id)
    return report.to_dict()


__all__ = ["router"]
