"""Pydantic schemas for users.

Reads are a tagged union on ``role``: every variant shares the base record and adds
only the fields that belong to its role (shop fields for merchants, vehicle fields for
delivery personnel, addresses for clients).
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from app.domain.constants import UserRole, VehicleType
from app.domain.schemas.base import CamelModel, Email, NonBlank, Password, Phone


class AddressCreate(CamelModel):
    label: Optional[str] = None
    full_address: NonBlank
    city: NonBlank
    quarter: Optional[str] = None
    details: Optional[str] = None
    is_default: bool = False


class AddressRead(CamelModel):
    id: int
    label: Optional[str] = None
    full_address: str
    city: str
    quarter: Optional[str] = None
    details: Optional[str] = None
    is_default: bool


class UserReadBase(CamelModel):
    id: int
    phone: str
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None


class ClientRead(UserReadBase):
    role: Literal["client"]
    addresses: list[AddressRead] = []


class MerchantRead(UserReadBase):
    role: Literal["merchant"]
    shop_name: Optional[str] = None
    shop_description: Optional[str] = None
    shop_address: Optional[str] = None
    shop_phone: Optional[str] = None
    is_approved: bool = False


class DeliveryRead(UserReadBase):
    role: Literal["delivery"]
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None
    is_approved: bool = False


class AdminRead(UserReadBase):
    role: Literal["admin"]


UserRead = Annotated[
    Union[ClientRead, MerchantRead, DeliveryRead, AdminRead],
    Field(discriminator="role"),
]

_READ_BY_ROLE = {
    UserRole.CLIENT.value: ClientRead,
    UserRole.MERCHANT.value: MerchantRead,
    UserRole.DELIVERY.value: DeliveryRead,
    UserRole.ADMIN.value: AdminRead,
}


def user_to_read(user) -> UserReadBase:
    """Serialize a User row into the variant matching its role."""
    return _READ_BY_ROLE[user.role].model_validate(user)


MERCHANT_FIELDS = ("shop_name", "shop_description", "shop_address", "shop_phone")
DELIVERY_FIELDS = ("vehicle_type", "vehicle_number")


class RoleFields(CamelModel):
    """Role-specific fields; applied to the profile matching the user's role."""
    shop_name: Optional[str] = None
    shop_description: Optional[str] = None
    shop_address: Optional[str] = None
    shop_phone: Optional[str] = None
    vehicle_type: Optional[VehicleType] = None
    vehicle_number: Optional[str] = None


class UserCreate(RoleFields):
    name: NonBlank
    phone: Phone
    email: Optional[Email] = None
    password: Password
    role: UserRole = UserRole.CLIENT
    is_active: bool = True
    is_approved: Optional[bool] = None


class UserUpdate(RoleFields):
    name: Optional[NonBlank] = None
    phone: Optional[Phone] = None
    email: Optional[Email] = None
    password: Optional[Password] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    is_approved: Optional[bool] = None
