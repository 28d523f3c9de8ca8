import importlib

from app.models.company import Company
from app.models.inventory import Inventory, InventoryChange
from app.models.product import Product
from app.models.product_bundle import ProductBundle
from app.models.supplier import ProductSupplier, Supplier
from app.models.warehouse import Warehouse


def import_all_models() -> None:
    for module_name in (
        "app.models.company",
        "app.models.inventory",
        "app.models.product",
        "app.models.product_bundle",
        "app.models.supplier",
        "app.models.warehouse",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Company",
    "Inventory",
    "InventoryChange",
    "Product",
    "ProductBundle",
    "ProductSupplier",
    "Supplier",
    "Warehouse",
    "import_all_models",
]
