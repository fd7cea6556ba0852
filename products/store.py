"""
Product store — persistence for the catalog.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Protocol, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Product, utcnow


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        return None


class ProductStore(Protocol):
    async def create(self, fields: Dict[str, Any]) -> Product: ...

    async def list(
        self,
        *,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        """Return one page of products (newest first) and the total match count."""
        ...

    async def get(self, product_id: str) -> Optional[Product]: ...

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]: ...

    async def delete(self, product_id: str) -> bool: ...


class SqlProductStore:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, fields: Dict[str, Any]) -> Product:
        product = Product(**fields)
        self._session.add(product)
        await self._session.flush()
        await self._session.refresh(product)
        return product

    async def list(
        self,
        *,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        conditions = []
        if search:
            conditions.append(
                or_(
                    Product.name.icontains(search, autoescape=True),
                    Product.category.icontains(search, autoescape=True),
                )
            )
        if category:
            conditions.append(Product.category.icontains(category, autoescape=True))

        total = await self._session.scalar(
            select(func.count()).select_from(Product).where(*conditions)
        )
        result = await self._session.execute(
            select(Product)
            .where(*conditions)
            .order_by(Product.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), int(total or 0)

    async def get(self, product_id: str) -> Optional[Product]:
        pid = _to_uuid(product_id)
        if pid is None:
            return None
        return await self._session.get(Product, pid)

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        product = await self.get(product_id)
        if product is None:
            return None
        for key, value in fields.items():
            setattr(product, key, value)
        product.updated_at = utcnow()
        await self._session.flush()
        await self._session.refresh(product)
        return product

    async def delete(self, product_id: str) -> bool:
        product = await self.get(product_id)
        if product is None:
            return False
        await self._session.delete(product)
        await self._session.flush()
        return True
