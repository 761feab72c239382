from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from .service import (
    CategoryInUseError,
    CategoryNotFoundError,
    CategoryService,
    DuplicateSlugError,
    ProductService,
)

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- PRODUCTS ---

@product_router.get("", response_model=List[ProductResponse])
async def list_products(
    q: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.list_products(db, q, category)

@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    product = await ProductService.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@product_router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await ProductService.create_product(db, product)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    try:
        updated = await ProductService.update_product(db, product_id, product)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    return updated

@product_router.delete("/{product_id}", response_model=ProductResponse)
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    product = await ProductService.delete_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# --- CATEGORIES ---

@category_router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryService.list_categories(db)

@category_router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, db: AsyncSession = Depends(get_db)):
    category = await CategoryService.get_category_by_slug(db, slug)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category

@category_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(category: CategoryCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await CategoryService.create_category(db, category)
    except DuplicateSlugError as e:
        raise HTTPException(status_code=409, detail=str(e))

@category_router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    try:
        category = await CategoryService.delete_category(db, category_id)
    except CategoryInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
