import logging

from app.collections import category as category_collection
from app.core.exceptions import Conflict, ValidationError
from app.core.mongodb import MongoStore
from app.models.category import Category, CategoryCreate, slugify
from app.models.session import SessionClaims
from app.models.user import UserRole
from app.services.authorization import resolve_caller_with_role

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Vegetables", "Fresh vegetables directly from farms."),
    ("Fruits", "Fresh fruits of all varieties."),
    ("Dairy", "Fresh dairy products including milk, cheese and yogurt."),
    ("Eggs", "Farm fresh eggs from free-range chickens."),
    ("Meat", "Farm raised meats, including beef, chicken, pork and more."),
    ("Herbs", "Fresh culinary and medicinal herbs."),
    ("Honey", "Local honey and bee products."),
    ("Bakery", "Fresh baked goods made with farm ingredients."),
    ("Processed", "Jams, preserves, pickles and other processed farm goods."),
    ("Other", "Other farm products that don't fit in the above categories."),
]


class CategoryService:
    def __init__(self, store: MongoStore):
        self.store = store

    async def list(self) -> list[Category]:
        return await category_collection.get_categories(self.store)

    async def create(self, claims: SessionClaims, data: CategoryCreate) -> Category:
        user = await resolve_caller_with_role(self.store, claims, UserRole.ADMIN)
        name = data.name.strip()
        slug = slugify(name)
        if not slug:
            raise ValidationError("Category name must contain letters or digits")

        if await category_collection.get_category_from_slug(self.store, slug):
            raise Conflict("Category with this name already exists")

        category = Category(
            name=name,
            slug=slug,
            description=data.description,
            image_url=data.image_url,
        )
        await category_collection.insert_category(self.store, category)
        logger.info("Admin %s created category '%s'", user.id, slug)
        return category

    async def seed_defaults(self) -> int:
        categories = [
            Category(name=name, slug=slugify(name), description=description)
            for name, description in DEFAULT_CATEGORIES
        ]
        return await category_collection.replace_categories(self.store, categories)
