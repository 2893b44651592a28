"""Pydantic schemas for Product domain."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.domain.constants import ProductStatus
from app.domain.schemas.base import CamelModel, NonBlank


class Specification(CamelModel):
    key: str
    value: str


class ProductBase(CamelModel):
    name: NonBlank
    description: NonBlank
    price: float = Field(ge=0)
    compare_price: Optional[float] = Field(default=None, ge=0)
    stock: int = Field(default=0, ge=0)
    image: Optional[str] = None
    images: list[str] = []
    category: int
    tags: list[str] = []
    specifications: list[Specification] = []


class ProductCreate(ProductBase):
    """Merchant-submitted product; always starts pending."""


class AdminProductCreate(ProductBase):
    merchant: int


class ProductUpdate(CamelModel):
    name: Optional[NonBlank] = None
    description: Optional[NonBlank] = None
    price: Optional[float] = Field(default=None, ge=0)
    compare_price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    image: Optional[str] = None
    images: Optional[list[str]] = None
    category: Optional[int] = None
    tags: Optional[list[str]] = None
    specifications: Optional[list[Specification]] = None
    is_active: Optional[bool] = None


class AdminProductUpdate(ProductUpdate):
    merchant: Optional[int] = None
    status: Optional[ProductStatus] = None
    is_approved: Optional[bool] = None
    rejection_reason: Optional[str] = None


class RejectRequest(CamelModel):
    reason: Optional[str] = None


class CategoryRef(CamelModel):
    id: int
    name: str


class MerchantRef(CamelModel):
    id: int
    name: str
    phone: Optional[str] = None
    shop_name: Optional[str] = None
    shop_phone: Optional[str] = None


class ProductRead(CamelModel):
    id: int
    name: str
    description: str
    price: float
    compare_price: Optional[float] = None
    stock: int
    image: Optional[str] = None
    images: list[str] = []
    category: Optional[CategoryRef] = None
    merchant: Optional[MerchantRef] = None
    category_name: str
    merchant_name: str
    status: str
    is_approved: bool
    is_active: bool
    rejection_reason: Optional[str] = None
    tags: list[str] = []
    specifications: list[Specification] = []
    views: int
    sold_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicMerchantRef(CamelModel):
    """Storefront view of a merchant: no account name or login phone."""
    id: int
    shop_name: Optional[str] = None
    shop_phone: Optional[str] = None


class PublicProductRead(ProductRead):
    merchant: Optional[PublicMerchantRef] = None


class ProductFilter(CamelModel):
    """Admin and merchant listing filters."""
    status: Optional[str] = None
    category: Optional[int] = None
    merchant: Optional[int] = None
    search: Optional[str] = None


class PublicProductFilter(CamelModel):
    category: Optional[int] = None
    search: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: Optional[Literal["newest", "price_asc", "price_desc", "popular"]] = None
    page: int = 1
    limit: int = 20


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
