import argparse
import json
import logging

from app.config import get_settings
from app.core.errors import ServiceError
from app.core.logging import setup_logging
from app.database import SessionLocal
from app.models import import_all_models
from app.services.low_stock import AlertReport, LowStockAlertEngine

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Print low-stock alerts for a company.")
    parser.add_argument("company_id", type=int)
    parser.add_argument("--warehouse-id", type=int, default=None)
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the API response body instead of a table.",
    )
    return parser.parse_args()


def format_report(report: AlertReport) -> str:
    if not report.alerts:
        return "No low-stock alerts for company {}.".format(report.company_id)

    lines = [
        "{:<10} {:<24} {:<20} {:>7} {:>9} {:>10}  {}".format(
            "SKU", "Product", "Warehouse", "Stock", "Threshold", "Stockout", "Supplier"
        )
    ]
    for alert in report.alerts:
        stockout = "never" if alert.projection.unbounded else "{}d".format(alert.days_until_stockout)
        lines.append(
            "{:<10} {:<24} {:<20} {:>7} {:>9} {:>10}  {}".format(
                alert.sku,
                alert.product_name[:24],
                alert.warehouse_name[:20],
                alert.current_stock,
                alert.threshold,
                stockout,
                alert.supplier.name if alert.supplier else "-",
            )
        )
    lines.append("{} alert(s)".format(report.total_alerts))
    return "\n".join(lines)


def main():
    setup_logging()
    args = parse_args()
    import_all_models()

    db = SessionLocal()
    try:
        engine = LowStockAlertEngine.from_settings(db, get_settings())
        report = engine.compute_alerts(args.company_id, warehouse_id=args.warehouse_id)
    except ServiceError as exc:
        logger.error("Report failed: %s", exc.message)
        raise SystemExit(1) from exc
    finally:
        db.close()

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_report(report))


if __name__ == "__main__":
    main()
