"""Pydantic schemas for authentication and the current user's account."""

from typing import Optional

from app.domain.constants import VehicleType
from app.domain.schemas.base import CamelModel, Email, NonBlank, Password, Phone, RequiredEmail


class RegisterRequest(CamelModel):
    phone: Phone
    password: Password
    name: NonBlank
    email: RequiredEmail
    # Validated leniently: unknown or privileged roles fall back to client
    role: Optional[str] = None


class LoginRequest(CamelModel):
    phone: str
    password: str


class ForgotPasswordRequest(CamelModel):
    phone: str


class ResetPasswordRequest(CamelModel):
    phone: str
    otp: str
    new_password: Password


class PasswordUpdateRequest(CamelModel):
    current_password: str
    new_password: Password


class ProfileUpdateRequest(CamelModel):
    name: Optional[NonBlank] = None
    email: Optional[Email] = None
    avatar: Optional[str] = None
    # Merchant only
    shop_name: Optional[str] = None
    shop_description: Optional[str] = None
    shop_address: Optional[str] = None
    shop_phone: Optional[str] = None
    # Delivery only
    vehicle_type: Optional[VehicleType] = None
    vehicle_number: Optional[str] = None


class FCMTokenRequest(CamelModel):
    fcm_token: NonBlank
