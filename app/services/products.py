import logging

from pydantic import ValidationError as PydanticValidationError

from app.collections import product as product_collection
from app.core.exceptions import NotFound, Unauthorized, ValidationError
from app.core.mongodb import MongoStore
from app.models.product import Product, ProductCreate, ProductUpdate
from app.models.session import SessionClaims
from app.models.user import User, UserRole
from app.services.authorization import resolve_caller, resolve_caller_with_role

logger = logging.getLogger(__name__)


class ProductService:
    """
    Farmer-facing product operations. Each call re-resolves the caller and
    checks role and ownership against the stored records.
    """

    def __init__(self, store: MongoStore):
        self.store = store

    async def list(self, claims: SessionClaims) -> list[Product]:
        user = await resolve_caller_with_role(self.store, claims, UserRole.FARMER)
        return await product_collection.get_products_from_farmer_id(self.store, user.id)

    async def get(self, claims: SessionClaims, product_id: str) -> Product:
        user = await resolve_caller(self.store, claims)
        product = await self._load(product_id)
        if user.role == UserRole.ADMIN:
            return product
        if user.role != UserRole.FARMER or product.farmer_id != user.id:
            raise Unauthorized()
        return product

    async def create(self, claims: SessionClaims, data: ProductCreate) -> Product:
        user = await resolve_caller_with_role(self.store, claims, UserRole.FARMER)
        product = Product(farmer_id=user.id, **data.model_dump())
        await product_collection.insert_product(self.store, product)
        logger.info("Farmer %s created product %s", user.id, product.id)
        return product

    async def update(
        self, claims: SessionClaims, product_id: str, payload: dict
    ) -> Product:
        """
        Authorization runs before the payload is looked at, so a non-owner
        gets Unauthorized whether or not the body is valid.
        """
        user = await resolve_caller_with_role(self.store, claims, UserRole.FARMER)
        product = await self._load(product_id)
        self._check_owner(user, product)

        try:
            data = ProductUpdate.model_validate(payload)
            changes = data.model_dump(exclude_unset=True)
            Product.model_validate({**product.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e)) from e

        if not changes:
            return product
        fields = data.model_dump(mode="json", exclude_unset=True)
        updated = await product_collection.update_product_fields(
            self.store, product_id, user.id, fields
        )
        if updated is None:
            raise NotFound("Product not found")
        logger.info("Farmer %s updated product %s", user.id, product_id)
        return updated

    async def delete(self, claims: SessionClaims, product_id: str) -> None:
        user = await resolve_caller_with_role(self.store, claims, UserRole.FARMER)
        product = await self._load(product_id)
        self._check_owner(user, product)
        if not await product_collection.delete_product(self.store, product_id, user.id):
            raise NotFound("Product not found")
        logger.info("Farmer %s deleted product %s", user.id, product_id)

    async def _load(self, product_id: str) -> Product:
        product = await product_collection.get_product_from_id(self.store, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    @staticmethod
    def _check_owner(user: User, product: Product) -> None:
        if product.farmer_id != user.id:
            raise Unauthorized()


def _first_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first["msg"]
