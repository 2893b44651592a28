"""User domain model — shared base record in 'users', role variants in profile tables."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.constants import UserRole
from app.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone = Column(String(20), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=True, index=True)
    role = Column(String(20), nullable=False, default=UserRole.CLIENT.value, index=True)
    avatar = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    fcm_token = Column(String(500), nullable=True)

    # Password reset
    otp_code = Column(String(6), nullable=True)
    otp_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    addresses = relationship(
        "Address",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Address.id",
    )
    merchant_profile = relationship(
        "MerchantProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    delivery_profile = relationship(
        "DeliveryProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def profile(self):
        """The role-specific profile for the current role, if any."""
        if self.role == UserRole.MERCHANT.value:
            return self.merchant_profile
        if self.role == UserRole.DELIVERY.value:
            return self.delivery_profile
        return None

    def ensure_profile(self):
        """Create the profile row matching the current role when missing."""
        if self.role == UserRole.MERCHANT.value and self.merchant_profile is None:
            self.merchant_profile = MerchantProfile(is_approved=False)
        elif self.role == UserRole.DELIVERY.value and self.delivery_profile is None:
            self.delivery_profile = DeliveryProfile(is_approved=False)
        return self.profile

    @property
    def is_approved(self) -> bool:
        profile = self.profile
        if profile is not None:
            return bool(profile.is_approved)
        return self.role == UserRole.ADMIN.value

    # Flat accessors used by the merchant/delivery read schemas
    @property
    def shop_name(self):
        return self.merchant_profile.shop_name if self.merchant_profile else None

    @property
    def shop_description(self):
        return self.merchant_profile.shop_description if self.merchant_profile else None

    @property
    def shop_address(self):
        return self.merchant_profile.shop_address if self.merchant_profile else None

    @property
    def shop_phone(self):
        return self.merchant_profile.shop_phone if self.merchant_profile else None

    @property
    def vehicle_type(self):
        return self.delivery_profile.vehicle_type if self.delivery_profile else None

    @property
    def vehicle_number(self):
        return self.delivery_profile.vehicle_number if self.delivery_profile else None

    def otp_is_valid(self, candidate: str) -> bool:
        if not self.otp_code or not self.otp_expires_at:
            return False
        expires_at = self.otp_expires_at
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if datetime.now(timezone.utc) > expires_at:
            return False
        return self.otp_code == candidate

    def __repr__(self):
        return f"<User {self.phone} ({self.role})>"


class MerchantProfile(Base):
    __tablename__ = "merchant_profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    shop_name = Column(String(200), nullable=True)
    shop_description = Column(String(2000), nullable=True)
    shop_address = Column(String(500), nullable=True)
    shop_phone = Column(String(20), nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="merchant_profile")

    def __repr__(self):
        return f"<MerchantProfile {self.shop_name}>"


class DeliveryProfile(Base):
    __tablename__ = "delivery_profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    vehicle_type = Column(String(20), nullable=True)  # moto, velo, voiture
    vehicle_number = Column(String(50), nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="delivery_profile")


class Address(Base):
    __tablename__ = "user_addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(100), nullable=True)  # Maison, Bureau, ...
    full_address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    quarter = Column(String(100), nullable=True)  # Quartier
    details = Column(String(500), nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="addresses")

    def to_snapshot(self) -> dict:
        return {
            "label": self.label,
            "fullAddress": self.full_address,
            "city": self.city,
            "quarter": self.quarter,
            "details": self.details,
        }

    def __repr__(self):
        return f"<Address {self.label} - {self.city}>"
