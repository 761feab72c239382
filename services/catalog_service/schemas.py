from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field, model_validator
from shared.schemas import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    created_at: datetime


class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(ge=0)
    image_url: Optional[str] = None
    category_id: int

    @model_validator(mode="after")
    def check_discount_price(self):
        if self.discount_price is not None and self.discount_price > self.price:
            raise ValueError("discountPrice must not exceed price")
        return self


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductResponse(CamelModel):
    id: int
    name: str
    description: Optional[str]
    price: Decimal
    discount_price: Optional[Decimal]
    stock: int
    image_url: Optional[str]
    category_id: int
    category: Optional[CategoryResponse] = None
    created_at: datetime
    updated_at: datetime
