from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import Field
from shared.schemas import CamelModel


class ClientInfo(CamelModel):
    name: str
    phone: str
    address: str


class CartItem(CamelModel):
    # Wire name is "id"; the engine works with product_id
    product_id: int = Field(alias="id")
    quantity: int = Field(gt=0)
    # Trusted as the price-at-time of purchase, not re-checked against the catalog
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class OrderCreate(CamelModel):
    client_info: ClientInfo
    cart_items: List[CartItem] = Field(min_length=1)


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    price_at_time: Decimal


class OrderResponse(CamelModel):
    id: int
    client_name: str
    client_phone: str
    client_address: str
    total_amount: Decimal
    created_at: datetime
    items: List[OrderItemResponse] = []
