from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from services.catalog_service.models import Product
from .models import Order, OrderItem

class OrderRepository:
    """
    Statements used inside the order transaction. Nothing here commits:
    the caller owns the unit of work and decides when it ends.
    """

    @staticmethod
    async def find_product_by_id(db: AsyncSession, product_id: int):
        # Row lock held until the order transaction ends (no-op on SQLite)
        result = await db.execute(
            select(Product).where(Product.id == product_id).with_for_update()
        )
        return result.scalars().first()

    @staticmethod
    async def decrement_stock(db: AsyncSession, product_id: int, amount: int) -> bool:
        result = await db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= amount)
            .values(stock=Product.stock - amount)
        )
        return result.rowcount == 1

    @staticmethod
    async def create_order_with_items(db: AsyncSession, order: Order, items: List[OrderItem]):
        order.items = items
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()
