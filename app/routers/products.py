from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.dependencies import get_db, require_auth
from app.schemas.product import ProductCreate, ProductCreated
from app.services.product_service import create_product

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.post("", response_model=ProductCreated, status_code=status.HTTP_201_CREATED)
def create_product_endpoint(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    _auth=Depends(require_auth),
):
    product_id = create_product(db, payload.model_dump())
    return ProductCreated(message="Product created successfully", product_id=product_id)


__all__ = ["router"]
