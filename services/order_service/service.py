import time
from collections import defaultdict
from decimal import Decimal
from typing import List

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.observability import (
    ecomm_orders_total,
    ecomm_order_duration_seconds,
    ecomm_order_rejections_total,
)
from .exceptions import InsufficientStockError
from .models import Order, OrderItem
from .repository import OrderRepository
from .schemas import CartItem, ClientInfo

logger = structlog.get_logger(__name__)


class OrderService:

    @staticmethod
    async def place_order(db: AsyncSession, client_info: ClientInfo, cart_items: List[CartItem]) -> Order:
        """
        Validates the cart against live stock, records the order with its
        line items and takes the units out of stock, all in one transaction.

        ``db`` is the unit of work for this call and must not have a
        transaction in progress. It is committed when every step succeeds
        and rolled back on any exception, so a rejected cart leaves no
        order, no items and no stock change behind.

        Raises InsufficientStockError for the first cart line (in list
        order) whose product is missing or short of stock.
        """
        start = time.perf_counter()
        products = {}
        requested = defaultdict(int)
        try:
            async with db.begin():
                # 1. Validate every line before touching anything
                for item in cart_items:
                    product = products.get(item.product_id)
                    if product is None:
                        product = await OrderRepository.find_product_by_id(db, item.product_id)
                    if not product:
                        raise InsufficientStockError.missing(item.product_id)
                    products[item.product_id] = product

                    # Repeated lines for one product draw on the same stock
                    requested[item.product_id] += item.quantity
                    if product.stock < requested[item.product_id]:
                        raise InsufficientStockError.short(product.id, product.name)

                # 2. Total from the supplied unit prices
                total = sum((item.price * item.quantity for item in cart_items), Decimal("0"))

                # 3. Order + items
                order = Order(
                    client_name=client_info.name,
                    client_phone=client_info.phone,
                    client_address=client_info.address,
                    total_amount=total,
                )
                items = [
                    OrderItem(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        price_at_time=item.price,
                    )
                    for item in cart_items
                ]
                await OrderRepository.create_order_with_items(db, order, items)

                # 4. Deduct
                for item in cart_items:
                    if not await OrderRepository.decrement_stock(db, item.product_id, item.quantity):
                        product = products[item.product_id]
                        raise InsufficientStockError.short(product.id, product.name)

        except InsufficientStockError as e:
            reason = "insufficient_stock" if e.product_id in products else "missing_product"
            ecomm_orders_total.labels(status="rejected").inc()
            ecomm_order_rejections_total.labels(reason=reason).inc()
            logger.info("order_rejected", product_id=e.product_id, reason=reason, error=str(e))
            raise
        except SQLAlchemyError:
            ecomm_orders_total.labels(status="failed").inc()
            logger.exception("order_failed")
            raise
        finally:
            ecomm_order_duration_seconds.observe(time.perf_counter() - start)

        ecomm_orders_total.labels(status="success").inc()
        logger.info(
            "order_placed",
            order_id=order.id,
            total_amount=str(order.total_amount),
            lines=len(items),
        )
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        return await OrderRepository.get_order(db, order_id)
