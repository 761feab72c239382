"""Order transaction engine, exercised directly against the database."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from shared.config.database import AsyncSessionLocal
from services.order_service.exceptions import InsufficientStockError
from services.order_service.models import Order, OrderItem
from services.order_service.repository import OrderRepository
from services.order_service.schemas import CartItem, ClientInfo
from services.order_service.service import OrderService

CLIENT = ClientInfo(name="Amira Ben Salah", phone="+216 20 000 000", address="12 Rue de Marseille, Tunis")


def cart_item(product_id, quantity, price):
    return CartItem(id=product_id, quantity=quantity, price=Decimal(price))


async def count_rows(model) -> int:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def test_successful_order_decrements_stock_and_records_total(db, make_product, stock_of):
    product = await make_product(price="10.00", stock=5)

    order = await OrderService.place_order(db, CLIENT, [cart_item(product.id, 3, "10.00")])

    assert order.id is not None
    assert order.created_at is not None
    assert order.total_amount == Decimal("30.00")
    assert order.client_name == CLIENT.name
    assert [(i.product_id, i.quantity, i.price_at_time) for i in order.items] == [
        (product.id, 3, Decimal("10.00"))
    ]
    assert await stock_of(product.id) == 2


async def test_total_is_sum_of_price_at_time_times_quantity(db, make_product):
    headphones = await make_product(name="Headphones", price="199.99", stock=10)
    shirt = await make_product(name="Shirt", price="29.99", stock=10)

    order = await OrderService.place_order(
        db,
        CLIENT,
        [cart_item(headphones.id, 2, "199.99"), cart_item(shirt.id, 3, "29.99")],
    )

    assert order.total_amount == sum(i.price_at_time * i.quantity for i in order.items)
    assert order.total_amount == Decimal("489.95")


async def test_supplied_unit_price_is_recorded_not_catalog_price(db, make_product):
    product = await make_product(price="10.00", stock=5)

    order = await OrderService.place_order(db, CLIENT, [cart_item(product.id, 2, "8.50")])

    assert order.items[0].price_at_time == Decimal("8.50")
    assert order.total_amount == Decimal("17.00")


async def test_insufficient_stock_rejects_without_side_effects(db, make_product, stock_of):
    product = await make_product(name="Smart Watch", stock=2)

    with pytest.raises(InsufficientStockError) as exc_info:
        await OrderService.place_order(db, CLIENT, [cart_item(product.id, 5, "10.00")])

    assert "Smart Watch" in str(exc_info.value)
    assert exc_info.value.product_id == product.id
    assert await stock_of(product.id) == 2
    assert await count_rows(Order) == 0


async def test_missing_product_names_the_unknown_id(db, make_product, stock_of):
    product = await make_product(stock=5)

    with pytest.raises(InsufficientStockError) as exc_info:
        await OrderService.place_order(
            db, CLIENT, [cart_item(product.id, 1, "10"), cart_item(9999, 1, "5")]
        )

    assert "9999" in str(exc_info.value)
    assert await stock_of(product.id) == 5
    assert await count_rows(Order) == 0


async def test_failure_on_later_item_leaves_earlier_items_untouched(db, make_product, stock_of):
    first = await make_product(name="First", stock=10)
    second = await make_product(name="Second", stock=10)
    third = await make_product(name="Third", stock=1)

    with pytest.raises(InsufficientStockError):
        await OrderService.place_order(
            db,
            CLIENT,
            [
                cart_item(first.id, 4, "1.00"),
                cart_item(second.id, 4, "1.00"),
                cart_item(third.id, 2, "1.00"),
            ],
        )

    assert await stock_of(first.id) == 10
    assert await stock_of(second.id) == 10
    assert await stock_of(third.id) == 1
    assert await count_rows(Order) == 0
    assert await count_rows(OrderItem) == 0


async def test_first_bad_line_wins(db, make_product):
    short = await make_product(name="Short", stock=0)

    with pytest.raises(InsufficientStockError) as exc_info:
        await OrderService.place_order(
            db, CLIENT, [cart_item(424242, 1, "1.00"), cart_item(short.id, 1, "1.00")]
        )

    assert exc_info.value.product_id == 424242


async def test_repeated_lines_for_one_product_share_its_stock(db, make_product, stock_of):
    product = await make_product(name="Laptop Stand", stock=5)

    with pytest.raises(InsufficientStockError):
        await OrderService.place_order(
            db, CLIENT, [cart_item(product.id, 3, "1.00"), cart_item(product.id, 3, "1.00")]
        )

    assert await stock_of(product.id) == 5


async def test_storage_fault_rolls_back(db, make_product, stock_of, monkeypatch):
    product = await make_product(stock=5)

    async def broken(db, order, items):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(OrderRepository, "create_order_with_items", staticmethod(broken))

    with pytest.raises(SQLAlchemyError):
        await OrderService.place_order(db, CLIENT, [cart_item(product.id, 1, "10.00")])

    assert await stock_of(product.id) == 5
    assert await count_rows(Order) == 0


async def test_concurrent_orders_for_last_unit(make_product, stock_of):
    product = await make_product(name="Last One", stock=1)

    async def attempt():
        async with AsyncSessionLocal() as session:
            return await OrderService.place_order(
                session, CLIENT, [cart_item(product.id, 1, "10.00")]
            )

    results = await asyncio.gather(attempt(), attempt(), return_exceptions=True)

    placed = [r for r in results if isinstance(r, Order)]
    rejected = [r for r in results if isinstance(r, InsufficientStockError)]
    assert len(placed) == 1
    assert len(rejected) == 1
    assert await stock_of(product.id) == 0
    assert await count_rows(Order) == 1
