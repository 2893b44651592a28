"""Shared enumerations for roles and workflow statuses."""

from enum import Enum


class UserRole(str, Enum):
    CLIENT = "client"
    MERCHANT = "merchant"
    DELIVERY = "delivery"
    ADMIN = "admin"


class ProductStatus(str, Enum):
    PENDING = "pending"      # En attente d'approbation
    APPROVED = "approved"
    REJECTED = "rejected"
    INACTIVE = "inactive"


class OrderStatus(str, Enum):
    PENDING = "pending"          # En attente
    CONFIRMED = "confirmed"
    PREPARING = "preparing"      # En préparation
    READY = "ready"
    PICKED = "picked"            # Récupéré
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class VehicleType(str, Enum):
    MOTO = "moto"
    VELO = "velo"
    VOITURE = "voiture"


PAYMENT_METHOD_COD = "cod"

# Roles that carry an approval flag on their profile
ROLES_WITH_PROFILE = (UserRole.MERCHANT.value, UserRole.DELIVERY.value)

ORDER_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING.value: {OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value, OrderStatus.REJECTED.value},
    OrderStatus.CONFIRMED.value: {OrderStatus.PREPARING.value, OrderStatus.CANCELLED.value},
    OrderStatus.PREPARING.value: {OrderStatus.READY.value, OrderStatus.CANCELLED.value},
    OrderStatus.READY.value: {OrderStatus.PICKED.value},
    OrderStatus.PICKED.value: {OrderStatus.DELIVERING.value},
    OrderStatus.DELIVERING.value: {OrderStatus.DELIVERED.value},
    OrderStatus.DELIVERED.value: set(),
    OrderStatus.CANCELLED.value: set(),
    OrderStatus.REJECTED.value: set(),
}

DEFAULT_REJECTION_REASON = "Non conforme aux règles de la plateforme"
