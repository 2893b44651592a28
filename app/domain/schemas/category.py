"""Pydantic schemas for Category domain."""

from datetime import datetime
from typing import Optional

from app.domain.schemas.base import CamelModel, NonBlank


class CategoryCreate(CamelModel):
    name: NonBlank
    description: Optional[str] = None
    image: Optional[str] = None
    order: int = 0
    is_active: bool = True


class CategoryUpdate(CamelModel):
    name: Optional[NonBlank] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    order: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
