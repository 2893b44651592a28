"""User service — admin-side user, merchant and delivery personnel management."""

from typing import List, Optional

import structlog

from app.application.services.auth_service import hash_password
from app.core.exceptions import DuplicateResourceException, EntityNotFoundException
from app.domain.constants import UserRole
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.user import DELIVERY_FIELDS, MERCHANT_FIELDS, UserCreate, UserUpdate

logger = structlog.get_logger(__name__)

USER_NOT_FOUND = "Utilisateur introuvable"
MERCHANT_NOT_FOUND = "Marchand introuvable"


def _apply_role_fields(user: User, values: dict) -> None:
    """Write shop/vehicle/approval fields onto the profile of the user's current role."""
    profile = user.ensure_profile()
    if profile is None:
        return

    fields = MERCHANT_FIELDS if user.role == UserRole.MERCHANT.value else DELIVERY_FIELDS
    for field in fields:
        if field in values:
            setattr(profile, field, values[field])
    if values.get("is_approved") is not None:
        profile.is_approved = values["is_approved"]


def get_user(repo: UserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise EntityNotFoundException(USER_NOT_FOUND)
    return user


def list_users(repo: UserRepository, role: Optional[str] = None) -> List[User]:
    if role == "all":
        role = None
    return repo.list_users(role)


def create_user(repo: UserRepository, body: UserCreate) -> User:
    if repo.find_conflict(body.phone, body.email):
        raise DuplicateResourceException("Utilisateur déjà existant")

    user = User(
        name=body.name,
        phone=body.phone,
        email=body.email,
        role=body.role,
        is_active=body.is_active,
        password_hash=hash_password(body.password),
    )
    _apply_role_fields(user, body.model_dump(exclude_unset=True))
    user = repo.save(user)
    logger.info("User created by admin", user_id=user.id, role=user.role)
    return user


def update_user(repo: UserRepository, user_id: int, body: UserUpdate) -> User:
    """Load, apply the provided fields, re-hash a new password, save.

    The same path runs whether or not a password is supplied.
    """
    user = get_user(repo, user_id)
    updates = body.model_dump(exclude_unset=True)

    phone = updates.get("phone")
    email = updates.get("email")
    if (phone or email) and repo.find_conflict(phone, email, exclude_id=user.id):
        raise DuplicateResourceException("Utilisateur déjà existant")

    for field in ("name", "phone", "email", "role", "is_active"):
        if field in updates and updates[field] is not None:
            setattr(user, field, updates[field])
    if "email" in updates and updates["email"] is None:
        user.email = None

    if updates.get("password"):
        user.password_hash = hash_password(updates["password"])

    _apply_role_fields(user, updates)
    user = repo.save(user)
    logger.info("User updated by admin", user_id=user.id, fields=sorted(updates))
    return user


def toggle_user_status(repo: UserRepository, user_id: int) -> User:
    user = get_user(repo, user_id)
    user.is_active = not user.is_active
    user = repo.save(user)
    logger.info("User status toggled", user_id=user.id, is_active=user.is_active)
    return user


def delete_user(repo: UserRepository, user_id: int) -> None:
    """Hard delete. Products of a deleted merchant are left orphaned."""
    if not repo.delete(user_id):
        raise EntityNotFoundException(USER_NOT_FOUND)
    logger.info("User deleted", user_id=user_id)


def list_merchants(repo: UserRepository, approved: Optional[bool] = None) -> List[User]:
    return repo.list_merchants(approved)


def set_merchant_approval(repo: UserRepository, user_id: int, approved: bool) -> User:
    user = repo.get_by_id(user_id)
    if not user or user.role != UserRole.MERCHANT.value:
        raise EntityNotFoundException(MERCHANT_NOT_FOUND)
    user.ensure_profile().is_approved = approved
    user = repo.save(user)
    logger.info("Merchant approval changed", user_id=user.id, approved=approved)
    return user


def list_delivery_personnel(repo: UserRepository) -> List[User]:
    return repo.list_users(UserRole.DELIVERY.value)
