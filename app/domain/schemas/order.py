"""Pydantic schemas for orders and dashboard stats."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from app.domain.constants import OrderStatus
from app.domain.schemas.base import CamelModel
from app.domain.schemas.user import AddressCreate


class OrderItemCreate(CamelModel):
    product: int
    quantity: int = Field(default=1, ge=1)


class OrderCreate(CamelModel):
    items: list[OrderItemCreate] = Field(min_length=1)
    address_id: Optional[int] = None
    address: Optional[AddressCreate] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_address(self):
        if self.address_id is None and self.address is None:
            raise ValueError("Une adresse de livraison est requise")
        return self


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
    reason: Optional[str] = None


class CancelOrderRequest(CamelModel):
    reason: Optional[str] = None


class OrderItemRead(CamelModel):
    id: int
    product_id: Optional[int] = Field(default=None, serialization_alias="product")
    merchant_id: Optional[int] = Field(default=None, serialization_alias="merchant")
    name: str
    price: float
    quantity: int
    line_total: float


class OrderRead(CamelModel):
    id: int
    order_number: str
    client_id: Optional[int] = Field(default=None, serialization_alias="client")
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: list[OrderItemRead] = []
    subtotal: float
    delivery_fee: float
    total: float
    status: str
    payment_method: str
    delivery_address: Optional[dict] = None
    delivery_person_id: Optional[int] = Field(default=None, serialization_alias="deliveryPerson")
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DashboardStats(CamelModel):
    total_users: int
    total_products: int
    total_categories: int
    pending_products: int
    pending_merchants: int
    total_orders: int
    total_revenue: float
