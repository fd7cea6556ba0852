"""
Product catalog service — thin layer over ``ProductStore`` that adds
pagination math, client messages and not-found handling.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from config.settings import config
from core.exceptions import ProductNotFoundError
from products.models import (
    ProductCreate,
    ProductDeleted,
    ProductOut,
    ProductPage,
    ProductResult,
    ProductUpdate,
)
from products.store import ProductStore

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, store: ProductStore):
        self.store = store

    async def create(self, dto: ProductCreate) -> ProductResult:
        product = await self.store.create(dto.model_dump())
        logger.info("Created product %s", product.product_id)
        return ProductResult(
            product=ProductOut.from_row(product),
            message="Product created successfully",
        )

    async def list(
        self,
        page: int = 1,
        limit: int | None = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ProductPage:
        limit = limit or config.default_page_size
        items, total = await self.store.list(
            offset=(page - 1) * limit,
            limit=limit,
            search=search or None,
            category=category or None,
        )
        return ProductPage(
            items=[ProductOut.from_row(p) for p in items],
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit),
            message="Products found" if total > 0 else "No products found",
        )

    async def get(self, product_id: str) -> ProductResult:
        product = await self.store.get(product_id)
        if product is None:
            raise ProductNotFoundError()
        return ProductResult(
            product=ProductOut.from_row(product),
            message="Product found",
        )

    async def update(self, product_id: str, dto: ProductUpdate) -> ProductResult:
        fields = dto.model_dump(exclude_unset=True, exclude_none=True)
        product = await self.store.update(product_id, fields)
        if product is None:
            raise ProductNotFoundError()
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(fields)) or "no fields")
        return ProductResult(
            product=ProductOut.from_row(product),
            message="Product updated successfully",
        )

    async def delete(self, product_id: str) -> ProductDeleted:
        if not await self.store.delete(product_id):
            raise ProductNotFoundError()
        logger.info("Deleted product %s", product_id)
        return ProductDeleted(message="Product deleted successfully")
