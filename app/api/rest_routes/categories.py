from typing import List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_category_service
from app.core.security import verify_jwt
from app.models.category import Category, CategoryCreate
from app.models.session import SessionClaims
from app.services.categories import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[Category], response_model_exclude_none=True)
async def list_categories(
    category_service: CategoryService = Depends(get_category_service),
):
    return await category_service.list()


@router.post(
    "",
    response_model=Category,
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
)
async def create_category(
    category: CategoryCreate,
    claims: SessionClaims = Depends(verify_jwt),
    category_service: CategoryService = Depends(get_category_service),
):
    """
    Creates a category (admin only). The slug is derived from the name.
    """
    return await category_service.create(claims, category)
