import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports the engine
_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["OTEL_ENABLED"] = "false"

from decimal import Decimal

import httpx
import pytest

from main import app
from shared.config.database import AsyncSessionLocal, Base, engine
from services.catalog_service.models import Category, Product


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def category():
    async with AsyncSessionLocal() as session:
        category = Category(name="Electronics", slug="electronics", description="Devices")
        session.add(category)
        await session.commit()
        return category


@pytest.fixture
def make_product(category):
    """Factory: inserts a product in its own session and returns it."""
    async def _make(name="Widget", price="10.00", stock=5, **kwargs):
        async with AsyncSessionLocal() as session:
            product = Product(
                name=name,
                description=kwargs.pop("description", f"A {name.lower()}"),
                price=Decimal(price),
                stock=stock,
                category_id=kwargs.pop("category_id", category.id),
                **kwargs,
            )
            session.add(product)
            await session.commit()
            return product
    return _make


@pytest.fixture
def stock_of():
    async def _stock(product_id: int) -> int:
        async with AsyncSessionLocal() as session:
            product = await session.get(Product, product_id)
            return product.stock
    return _stock
