"""
Demo catalog seed.

Run directly with ``python -m services.catalog_service.seed`` or through
``POST /api/demo-control/run-seed``. Categories are matched by slug and
products by name, so re-running only adds what is missing.
"""
import asyncio
from decimal import Decimal

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Category, Product

logger = structlog.get_logger(__name__)

CATEGORIES = [
    {"name": "Electronics", "slug": "electronics", "description": "Electronic devices and accessories"},
    {"name": "Clothing", "slug": "clothing", "description": "Fashion and apparel items"},
    {"name": "Books", "slug": "books", "description": "Physical and digital books"},
    {"name": "Home & Garden", "slug": "home-garden", "description": "Home improvement and gardening products"},
]

PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "Premium noise-cancelling wireless headphones with 30-hour battery life",
        "price": Decimal("199.99"),
        "stock": 45,
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=800&q=80",
    },
    {
        "name": "Smart Watch",
        "description": "Fitness tracking smartwatch with heart rate monitor and GPS",
        "price": Decimal("299.99"),
        "stock": 23,
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=800&q=80",
    },
    {
        "name": "Cotton T-Shirt",
        "description": "Comfortable 100% organic cotton t-shirt in multiple colors",
        "price": Decimal("29.99"),
        "stock": 150,
        "category": "clothing",
        "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800&q=80",
    },
    {
        "name": "Programming Guide",
        "description": "Comprehensive guide to modern web development and best practices",
        "price": Decimal("49.99"),
        "stock": 67,
        "category": "books",
        "image_url": "https://images.unsplash.com/photo-1532012197267-da84d127e765?w=800&q=80",
    },
    {
        "name": "Garden Tool Set",
        "description": "Professional 10-piece garden tool set with ergonomic handles",
        "price": Decimal("89.99"),
        "stock": 34,
        "category": "home-garden",
        "image_url": "https://images.unsplash.com/photo-1416879595882-3373a0480b5b?w=800&q=80",
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand for better ergonomics",
        "price": Decimal("59.99"),
        "stock": 0,
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=800&q=80",
    },
]


async def seed_catalog(db: AsyncSession) -> dict:
    """Inserts the demo categories and products. Returns how many of each were added."""
    result = await db.execute(select(Category))
    category_map = {c.slug: c for c in result.scalars().all()}

    new_categories = 0
    for data in CATEGORIES:
        if data["slug"] in category_map:
            continue
        category = Category(**data)
        db.add(category)
        category_map[data["slug"]] = category
        new_categories += 1
    await db.flush()
    logger.info("categories_seeded", added=new_categories)

    result = await db.execute(select(Product.name))
    existing_names = set(result.scalars().all())

    new_products = 0
    for data in PRODUCTS:
        if data["name"] in existing_names:
            continue
        fields = {k: v for k, v in data.items() if k != "category"}
        db.add(Product(category_id=category_map[data["category"]].id, **fields))
        new_products += 1
    await db.commit()
    logger.info("products_seeded", added=new_products)

    return {"categories": new_categories, "products": new_products}


async def main():
    from shared.config.database import AsyncSessionLocal, engine, Base
    from shared.observability import configure_logging
    # Order tables have to exist too before the app starts taking orders
    from services.order_service import models as order_models  # noqa: F401

    configure_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as db:
        await seed_catalog(db)
    await engine.dispose()
    logger.info("seeding_finished")


if __name__ == "__main__":
    asyncio.run(main())
