from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func
from .models import Category, Product

class CategoryRepository:

    @staticmethod
    async def create_category(db: AsyncSession, category: Category):
        db.add(category)
        await db.commit()
        await db.refresh(category)
        return category

    @staticmethod
    async def get_all_categories(db: AsyncSession):
        result = await db.execute(select(Category).order_by(Category.name.asc()))
        return result.scalars().all()

    @staticmethod
    async def get_category_by_id(db: AsyncSession, category_id: int):
        result = await db.execute(select(Category).where(Category.id == category_id))
        return result.scalars().first()

    @staticmethod
    async def get_category_by_slug(db: AsyncSession, slug: str):
        result = await db.execute(select(Category).where(Category.slug == slug))
        return result.scalars().first()

    @staticmethod
    async def count_products(db: AsyncSession, category_id: int) -> int:
        result = await db.execute(
            select(func.count(Product.id)).where(Product.category_id == category_id)
        )
        return result.scalar_one()

    @staticmethod
    async def delete_category(db: AsyncSession, category: Category):
        await db.delete(category)
        await db.commit()
        return category


class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_products(
        db: AsyncSession,
        query: Optional[str] = None,
        category_slug: Optional[str] = None,
    ):
        stmt = select(Product)
        if query:
            pattern = f"%{query.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Product.name).like(pattern),
                    func.lower(Product.description).like(pattern),
                )
            )
        if category_slug:
            stmt = stmt.join(Product.category).where(Category.slug == category_slug)
        # id breaks ties between rows created in the same instant
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())
        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def count_products(db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Product.id)))
        return result.scalar_one()

    @staticmethod
    async def update_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product: Product):
        await db.delete(product)
        await db.commit()
        return product
