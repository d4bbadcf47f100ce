from fastapi import Depends, Request

from app.core.mongodb import MongoStore
from app.services.auth import AuthService
from app.services.categories import CategoryService
from app.services.farmer_profile import FarmerProfileService
from app.services.files import BlobUploader
from app.services.products import ProductService


def get_store(request: Request) -> MongoStore:
    return request.app.state.store


def get_uploader(request: Request) -> BlobUploader:
    return request.app.state.uploader


def get_auth_service(store: MongoStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


def get_product_service(store: MongoStore = Depends(get_store)) -> ProductService:
    return ProductService(store)


def get_farmer_profile_service(
    store: MongoStore = Depends(get_store),
) -> FarmerProfileService:
    return FarmerProfileService(store)


def get_category_service(store: MongoStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)
