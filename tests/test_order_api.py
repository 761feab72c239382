"""POST /api/orders and GET /api/orders/{id} through the ASGI app."""

from decimal import Decimal

from sqlalchemy.exc import OperationalError

from services.order_service.repository import OrderRepository

CLIENT_INFO = {"name": "Amira", "phone": "+216 20 000 000", "address": "12 Rue de Marseille"}


def order_body(*lines):
    return {
        "clientInfo": CLIENT_INFO,
        "cartItems": [{"id": pid, "quantity": qty, "price": price} for pid, qty, price in lines],
    }


async def test_create_order_returns_201_with_items(client, make_product, stock_of):
    product = await make_product(price="10.00", stock=5)

    response = await client.post("/api/orders", json=order_body((product.id, 3, 10.00)))

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["clientName"] == "Amira"
    assert body["clientPhone"] == CLIENT_INFO["phone"]
    assert body["clientAddress"] == CLIENT_INFO["address"]
    assert Decimal(str(body["totalAmount"])) == Decimal("30")
    assert "createdAt" in body
    assert len(body["items"]) == 1
    assert body["items"][0]["productId"] == product.id
    assert body["items"][0]["quantity"] == 3
    assert Decimal(str(body["items"][0]["priceAtTime"])) == Decimal("10")
    assert await stock_of(product.id) == 2


async def test_insufficient_stock_is_400_naming_the_product(client, make_product, stock_of):
    product = await make_product(name="Garden Tool Set", stock=2)

    response = await client.post("/api/orders", json=order_body((product.id, 5, 10.00)))

    assert response.status_code == 400
    assert "Garden Tool Set" in response.json()["error"]
    assert await stock_of(product.id) == 2


async def test_missing_product_is_400_and_nothing_is_decremented(client, make_product, stock_of):
    product = await make_product(stock=5)

    response = await client.post(
        "/api/orders", json=order_body((product.id, 1, 10), (8888, 1, 5))
    )

    assert response.status_code == 400
    assert "8888" in response.json()["error"]
    assert await stock_of(product.id) == 5


async def test_created_order_can_be_fetched(client, make_product):
    product = await make_product(stock=5)
    created = (await client.post("/api/orders", json=order_body((product.id, 1, 10.00)))).json()

    response = await client.get(f"/api/orders/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert [i["productId"] for i in body["items"]] == [product.id]


async def test_unknown_order_is_404(client):
    response = await client.get("/api/orders/12345")

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


async def test_malformed_body_is_400_before_storage(client, make_product, stock_of):
    product = await make_product(stock=5)

    zero_quantity = await client.post("/api/orders", json=order_body((product.id, 0, 10.00)))
    empty_cart = await client.post("/api/orders", json={"clientInfo": CLIENT_INFO, "cartItems": []})
    no_client = await client.post("/api/orders", json={"cartItems": [{"id": product.id, "quantity": 1, "price": 1}]})

    for response in (zero_quantity, empty_cart, no_client):
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
    assert await stock_of(product.id) == 5


async def test_storage_fault_is_500(client, make_product, stock_of, monkeypatch):
    product = await make_product(stock=5)

    async def broken(db, order, items):
        raise OperationalError("INSERT INTO orders", {}, Exception("disk I/O error"))

    monkeypatch.setattr(OrderRepository, "create_order_with_items", staticmethod(broken))

    response = await client.post("/api/orders", json=order_body((product.id, 1, 10.00)))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create order"}
    assert await stock_of(product.id) == 5
