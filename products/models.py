"""Request / response schemas for the product catalog."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from database.models import Product


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Corn seeds"])
    description: str = Field("", max_length=2000, examples=["10kg bag"])
    price: float = Field(..., ge=0.01, examples=[15.75])
    category: str = Field("", max_length=128, examples=["Seeds"])

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _strip_required(value)

    @field_validator("description", "category")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class ProductUpdate(BaseModel):
    """Partial update — only fields present in the body are changed."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[float] = Field(None, ge=0.01)
    category: Optional[str] = Field(None, max_length=128)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _strip_required(value)

    @field_validator("description", "category")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else value.strip()


class ProductOut(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Product) -> "ProductOut":
        return cls(
            id=str(row.product_id),
            name=row.name,
            description=row.description or "",
            price=float(row.price),
            category=row.category or "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class ProductResult(BaseModel):
    product: ProductOut
    message: str


class ProductPage(BaseModel):
    items: List[ProductOut]
    total: int
    page: int
    limit: int
    pages: int
    message: str


class ProductDeleted(BaseModel):
    deleted: bool = True
    message: str
