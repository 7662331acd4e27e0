# app/routers/products.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.storage_utils import UploadGateway, get_upload_gateway
from app.database import get_session
from app.models.product import Product
from app.repositories.resource_repo import ResourceRepository
from app.routers.common import (
    get_actor,
    record_activity,
    require_object_id,
    store_failure,
    unwrap_update,
)
from app.schemas.common import StatusResponse
from app.schemas.product import (
    PRODUCT_CATEGORIES,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductRead,
    ProductUpdate,
)
from app.services.product_service import ProductService
from app.services.resource_service import StoreError

router = APIRouter(prefix="/products", tags=["Products"])

repo = ResourceRepository(Product)
service = ProductService(repo)


@router.get(
    "",
    response_model=ProductListEnvelope,
    response_model_exclude_none=True,
)
def list_products(session: Session = Depends(get_session)):
    """
    List every product (in stock or not).

    Filtering for the public catalog is left to the consumer.
    """
    try:
        products = service.list(session)
    except SQLAlchemyError:
        raise store_failure("fetch", "products")
    return ProductListEnvelope(
        products=[ProductRead.model_validate(p) for p in products]
    )


@router.get("/categories")
def list_categories() -> dict:
    """
    Category slugs with their labels and allowed subcategories.
    """
    return {"success": True, "categories": PRODUCT_CATEGORIES}


@router.post(
    "",
    response_model=ProductEnvelope,
    response_model_exclude_none=True,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
):
    """
    Create a product.

    - 400 on missing/invalid fields, unknown category or a subcategory the
      category does not allow.
    """
    try:
        product = service.create(session, payload.model_dump())
    except (StoreError, SQLAlchemyError):
        raise store_failure("create", "product")

    body = ProductEnvelope(product=ProductRead.model_validate(product))
    record_activity(session, "created", "Products", f"Created product: {product.name}", actor)
    return body


@router.put(
    "",
    response_model=ProductEnvelope,
    response_model_exclude_none=True,
)
def update_product(
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Replace a product's fields.

    - 400 on malformed id, 404 if the product no longer exists,
      409 if `version` is sent and stale.
    """
    require_object_id(payload.id, "Product")
    fields = payload.model_dump(exclude={"id", "version"})

    try:
        outcome = service.update(session, payload.id, fields, payload.version, gateway)
    except (StoreError, SQLAlchemyError):
        raise store_failure("update", "product")

    product = unwrap_update(outcome, "Product")
    body = ProductEnvelope(product=ProductRead.model_validate(product))
    record_activity(session, "updated", "Products", f"Updated product: {product.name}", actor)
    return body


@router.delete("", response_model=StatusResponse)
def delete_product(
    id: str | None = Query(default=None),
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Delete a product by `?id=`; its hosted image is removed best-effort.
    """
    product_id = require_object_id(id, "Product")

    try:
        deleted = service.delete(session, product_id, gateway)
    except SQLAlchemyError:
        raise store_failure("delete", "product")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    record_activity(session, "deleted", "Products", f"Deleted product: {product_id}", actor)
    return StatusResponse()
