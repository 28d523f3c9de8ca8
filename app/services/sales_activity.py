from datetime import datetime, timedelta
from fractions import Fraction
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.constants import CHANGE_TYPE_OUT
from app.core.dates import as_utc, utc_now
from app.models.inventory import Inventory, InventoryChange
from app.models.warehouse import Warehouse

DEFAULT_WINDOW_DAYS = 30


class SalesActivityAnalyzer:
    """Read-side projections over the inventory change ledger.

    Activity and velocity are aggregated per product across all of its
    warehouses (optionally restricted to one company's warehouses). The
    window is fixed at construction; ``window_days`` on the query methods
    exists for callers that want to probe a different horizon and is
    validated the same way.
    """

    def __init__(
        self,
        db: Session,
        window_days: int = DEFAULT_WINDOW_DAYS,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.window_days = _validate_window(window_days)
        self._clock = clock or utc_now

    def window_start(self, window_days: Optional[int] = None) -> datetime:
        days = self._resolve_window(window_days)
        return as_utc(self._clock()) - timedelta(days=days)

    def has_recent_activity(
        self,
        product_id: int,
        window_days: Optional[int] = None,
        *,
        company_id: Optional[int] = None,
    ) -> bool:
        cutoff = self.window_start(window_days)
        stmt = (
            self._ledger_query(select(InventoryChange.id), product_id, company_id)
            .where(InventoryChange.change_date > cutoff)
            .limit(1)
        )
        return self.db.execute(stmt).first() is not None

    def daily_velocity(
        self,
        product_id: int,
        window_days: Optional[int] = None,
        *,
        company_id: Optional[int] = None,
    ) -> Fraction:
        days = self._resolve_window(window_days)
        cutoff = self.window_start(days)
        stmt = self._ledger_query(
            select(func.coalesce(func.sum(InventoryChange.change_quantity), 0)),
            product_id,
            company_id,
        ).where(
            InventoryChange.change_date > cutoff,
            InventoryChange.change_type == CHANGE_TYPE_OUT,
        )
        total_out = int(self.db.execute(stmt).scalar_one() or 0)
        if total_out <= 0:
            return Fraction(0)
        return Fraction(total_out, days)

    def _resolve_window(self, window_days: Optional[int]) -> int:
        if window_days is None:
            return self.window_days
        return _validate_window(window_days)

    @staticmethod
    def _ledger_query(stmt, product_id: int, company_id: Optional[int]):
        stmt = (
            stmt.select_from(InventoryChange)
            .join(Inventory, Inventory.id == InventoryChange.inventory_id)
            .where(Inventory.product_id == product_id)
        )
        if company_id is not None:
            stmt = stmt.join(Warehouse, Warehouse.id == Inventory.warehouse_id).where(
                Warehouse.company_id == company_id
            )
        return stmt


def _validate_window(window_days) -> int:
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days <= 0:
        raise ValueError("window_days must be a positive integer, got {!r}".format(window_days))
    return window_days


__all__ = ["DEFAULT_WINDOW_DAYS", "SalesActivityAnalyzer"]
