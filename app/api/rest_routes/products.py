from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel

from app.api.dependencies import get_product_service
from app.core.security import verify_jwt
from app.models.product import Product, ProductCreate
from app.models.session import SessionClaims
from app.services.products import ProductService

router = APIRouter(prefix="/farmer/products", tags=["Farmer Products"])


class DeleteResponse(BaseModel):
    message: str


@router.get(
    "",
    response_model=List[Product],
    summary="List the caller's products, newest first",
    response_model_exclude_none=True,
)
async def list_products(
    claims: SessionClaims = Depends(verify_jwt),
    product_service: ProductService = Depends(get_product_service),
):
    return await product_service.list(claims)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product owned by the caller",
    response_model_exclude_none=True,
)
async def create_product(
    product: ProductCreate,
    claims: SessionClaims = Depends(verify_jwt),
    product_service: ProductService = Depends(get_product_service),
):
    """
    Creates a product. The owning farmer is always the caller, whatever the
    payload says.
    """
    return await product_service.create(claims, product)


@router.get(
    "/{product_id}",
    response_model=Product,
    response_model_exclude_none=True,
)
async def get_product(
    product_id: str,
    claims: SessionClaims = Depends(verify_jwt),
    product_service: ProductService = Depends(get_product_service),
):
    return await product_service.get(claims, product_id)


@router.put(
    "/{product_id}",
    response_model=Product,
    response_model_exclude_none=True,
)
async def update_product(
    product_id: str,
    changes: Dict[str, Any] = Body(...),
    claims: SessionClaims = Depends(verify_jwt),
    product_service: ProductService = Depends(get_product_service),
):
    """
    Applies a partial update. Only the owning farmer may do this;
    the body is validated once ownership is established.
    """
    return await product_service.update(claims, product_id, changes)


@router.delete("/{product_id}", response_model=DeleteResponse)
async def delete_product(
    product_id: str,
    claims: SessionClaims = Depends(verify_jwt),
    product_service: ProductService = Depends(get_product_service),
):
    await product_service.delete(claims, product_id)
    return DeleteResponse(message="Product deleted successfully")
