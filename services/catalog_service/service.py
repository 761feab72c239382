from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from .models import Category, Product
from .repository import CategoryRepository, ProductRepository
from .schemas import CategoryCreate, ProductCreate, ProductUpdate


class CategoryNotFoundError(Exception):
    pass


class CategoryInUseError(Exception):
    pass


class DuplicateSlugError(Exception):
    pass


class CategoryService:

    @staticmethod
    async def create_category(db: AsyncSession, data: CategoryCreate):
        if await CategoryRepository.get_category_by_slug(db, data.slug):
            raise DuplicateSlugError(f"Category slug '{data.slug}' already exists")
        category = Category(
            name=data.name,
            slug=data.slug,
            description=data.description
        )
        return await CategoryRepository.create_category(db, category)

    @staticmethod
    async def list_categories(db: AsyncSession):
        return await CategoryRepository.get_all_categories(db)

    @staticmethod
    async def get_category_by_slug(db: AsyncSession, slug: str):
        return await CategoryRepository.get_category_by_slug(db, slug)

    @staticmethod
    async def delete_category(db: AsyncSession, category_id: int):
        category = await CategoryRepository.get_category_by_id(db, category_id)
        if not category:
            return None
        # Categories are never removed out from under their products
        if await CategoryRepository.count_products(db, category_id):
            raise CategoryInUseError(f"Category '{category.slug}' still has products")
        return await CategoryRepository.delete_category(db, category)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        if not await CategoryRepository.get_category_by_id(db, data.category_id):
            raise CategoryNotFoundError(f"Category {data.category_id} not found")
        product = Product(**data.model_dump())
        return await ProductRepository.create_product(db, product)

    @staticmethod
    async def list_products(
        db: AsyncSession,
        query: Optional[str] = None,
        category_slug: Optional[str] = None,
    ):
        return await ProductRepository.get_products(db, query, category_slug)

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        return await ProductRepository.get_product_by_id(db, product_id)

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return None
        if not await CategoryRepository.get_category_by_id(db, data.category_id):
            raise CategoryNotFoundError(f"Category {data.category_id} not found")

        for field, value in data.model_dump().items():
            setattr(product, field, value)
        return await ProductRepository.update_product(db, product)

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return None
        return await ProductRepository.delete_product(db, product)

    @staticmethod
    async def count_products(db: AsyncSession) -> int:
        return await ProductRepository.count_products(db)
