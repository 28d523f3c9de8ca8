import argparse
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import delete, select

from app.core.constants import CHANGE_TYPE_IN, CHANGE_TYPE_OUT
from app.core.logging import setup_logging
from app.database import Base, SessionLocal, engine
from app.models import import_all_models
from app.models.company import Company
from app.models.inventory import Inventory, InventoryChange
from app.models.product import Product
from app.models.supplier import ProductSupplier, Supplier
from app.models.warehouse import Warehouse


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample inventory data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def seed(db, *, now=None):
    """Insert a small demo tenant. Returns the company id."""
    now = now or datetime.now(timezone.utc)

    company = Company(name="Acme Retail")
    db.add(company)
    db.flush()

    main = Warehouse(company_id=company.id, name="Main Warehouse", address="1 Dock Road")
    east = Warehouse(company_id=company.id, name="East Depot", address="9 Rail Street")
    db.add_all([main, east])
    db.flush()

    widget = Product(name="Widget A", sku="WID-001", price=Decimal("12.50"), product_type="standard")
    gadget = Product(
        name="Gadget B",
        sku="GAD-002",
        price=Decimal("49.00"),
        product_type="electronics",
        low_stock_threshold=15,
    )
    legacy = Product(name="Legacy C", sku="LEG-003", price=Decimal("3.10"))
    db.add_all([widget, gadget, legacy])
    db.flush()

    stock = [
        Inventory(product_id=widget.id, warehouse_id=main.id, quantity=5),
        Inventory(product_id=widget.id, warehouse_id=east.id, quantity=60),
        Inventory(product_id=gadget.id, warehouse_id=main.id, quantity=8),
        Inventory(product_id=legacy.id, warehouse_id=east.id, quantity=0),
    ]
    db.add_all(stock)
    db.flush()

    opening = now - timedelta(days=180)
    db.add_all(
        [
            InventoryChange(
                inventory_id=stock[0].id,
                change_type=CHANGE_TYPE_IN,
                change_quantity=20,
                change_date=opening,
                reason="opening stock",
            ),
            InventoryChange(
                inventory_id=stock[1].id,
                change_type=CHANGE_TYPE_IN,
                change_quantity=60,
                change_date=opening,
                reason="opening stock",
            ),
            InventoryChange(
                inventory_id=stock[3].id,
                change_type=CHANGE_TYPE_IN,
                change_quantity=4,
                change_date=opening,
                reason="opening stock",
            ),
            InventoryChange(
                inventory_id=stock[0].id,
                change_type=CHANGE_TYPE_OUT,
                change_quantity=15,
                change_date=now - timedelta(days=3),
                reason="sale",
            ),
            InventoryChange(
                inventory_id=stock[2].id,
                change_type=CHANGE_TYPE_IN,
                change_quantity=8,
                change_date=now - timedelta(days=10),
                reason="restock",
            ),
            InventoryChange(
                inventory_id=stock[3].id,
                change_type=CHANGE_TYPE_OUT,
                change_quantity=4,
                change_date=now - timedelta(days=120),
                reason="sale",
            ),
        ]
    )

    supplier_a = Supplier(name="Supplier Corp", contact_email="orders@supplier.com")
    supplier_b = Supplier(name="Budget Parts", contact_email="sales@budgetparts.com")
    db.add_all([supplier_a, supplier_b])
    db.flush()
    db.add_all(
        [
            ProductSupplier(product_id=widget.id, supplier_id=supplier_a.id, supply_price=Decimal("7.00")),
            ProductSupplier(product_id=widget.id, supplier_id=supplier_b.id, supply_price=Decimal("6.25")),
        ]
    )
    db.commit()
    return company.id


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            for model in (InventoryChange, ProductSupplier, Inventory, Supplier, Product, Warehouse, Company):
                db.execute(delete(model))
            db.commit()

        has_company = db.execute(select(Company.id).limit(1)).first()
        if has_company:
            print("Seed skipped: companies already exist.")
            return

        company_id = seed(db)
        print("Seeded company {}.".format(company_id))
    finally:
        db.close()


if __name__ == "__main__":
    main()
