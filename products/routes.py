"""
Product catalog API routes.

Route prefix: /api/products — every endpoint requires a Bearer token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import Envelope
from auth.dependencies import get_current_identity
from auth.models import TokenClaims
from config.settings import config
from database.session import get_db_session
from products.models import (
    ProductCreate,
    ProductDeleted,
    ProductPage,
    ProductResult,
    ProductUpdate,
)
from products.service import ProductService
from products.store import ProductStore, SqlProductStore

router = APIRouter(tags=["products"])


async def get_product_store(
    session: AsyncSession = Depends(get_db_session),
) -> ProductStore:
    return SqlProductStore(session)


async def get_product_service(
    store: ProductStore = Depends(get_product_store),
) -> ProductService:
    return ProductService(store)


@router.post(
    "",
    response_model=Envelope[ProductResult],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    dto: ProductCreate,
    identity: TokenClaims = Depends(get_current_identity),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    return {"data": await service.create(dto)}


@router.get("", response_model=Envelope[ProductPage])
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(config.default_page_size, ge=1, le=config.max_page_size),
    search: Optional[str] = Query(None, description="Matches name or category"),
    category: Optional[str] = Query(None),
    identity: TokenClaims = Depends(get_current_identity),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Paginated listing, newest first. e.g. ``/products?page=2&limit=5&search=corn``"""
    return {"data": await service.list(page, limit, search, category)}


@router.get("/{product_id}", response_model=Envelope[ProductResult])
async def get_product(
    product_id: str,
    identity: TokenClaims = Depends(get_current_identity),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    return {"data": await service.get(product_id)}


@router.patch("/{product_id}", response_model=Envelope[ProductResult])
async def update_product(
    product_id: str,
    dto: ProductUpdate,
    identity: TokenClaims = Depends(get_current_identity),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    return {"data": await service.update(product_id, dto)}


@router.delete("/{product_id}", response_model=Envelope[ProductDeleted])
async def delete_product(
    product_id: str,
    identity: TokenClaims = Depends(get_current_identity),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    return {"data": await service.delete(product_id)}
