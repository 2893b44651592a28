"""Product domain model — maps to the 'products' table."""

from typing import Optional

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.constants import ProductStatus
from app.infrastructure.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    compare_price = Column(Float, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String(500), nullable=True)
    images = Column(JSON, nullable=False, default=list)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    # Deleting a merchant leaves its products orphaned rather than removing them
    merchant_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    status = Column(String(20), nullable=False, default=ProductStatus.PENDING.value, index=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    rejection_reason = Column(String(500), nullable=True)

    tags = Column(JSON, nullable=False, default=list)
    specifications = Column(JSON, nullable=False, default=list)  # [{"key": ..., "value": ...}]

    views = Column(Integer, nullable=False, default=0)
    sold_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category")
    merchant = relationship("User")

    def set_status(self, status: str, rejection_reason: Optional[str] = None) -> None:
        """Single write path for status; keeps is_approved mirrored."""
        status = ProductStatus(status).value
        self.status = status
        self.is_approved = status == ProductStatus.APPROVED.value
        if status == ProductStatus.REJECTED.value:
            self.rejection_reason = rejection_reason
        elif status == ProductStatus.APPROVED.value:
            self.rejection_reason = None

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else "Non catégorisé"

    @property
    def merchant_name(self) -> str:
        if self.merchant is None:
            return "Inconnu"
        return self.merchant.shop_name or self.merchant.name or "Inconnu"

    def __repr__(self):
        return f"<Product {self.id} - {self.name} ({self.status})>"
