"""Auth service — JWT tokens, password hashing, registration, OTP reset and account upkeep."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.core.exceptions import (
    AccountDisabledException,
    DuplicateResourceException,
    EntityNotFoundException,
    InvalidCredentialsException,
    InvalidOrExpiredOTPException,
    UnauthorizedException,
)
from app.domain.constants import UserRole
from app.domain.models.user import Address, User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import ProfileUpdateRequest, RegisterRequest
from app.domain.schemas.user import DELIVERY_FIELDS, MERCHANT_FIELDS, AddressCreate

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

USER_NOT_FOUND = "Utilisateur non trouvé"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {"id": user.id, "role": user.role, "phone": user.phone, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode a bearer token; raises UnauthorizedException on any failure."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise UnauthorizedException("Token expiré")
    except JWTError:
        raise UnauthorizedException("Token invalide")


def authenticate_user(repo: UserRepository, phone: str, password: str) -> User:
    """Credential mismatches share one message; the active check runs only after a match."""
    user = repo.get_by_phone(phone)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsException()
    if not user.is_active:
        raise AccountDisabledException()
    return user


def resolve_public_role(requested: Optional[str]) -> str:
    """Self-registration may never grant admin; unknown roles fall back to client."""
    allowed = {UserRole.CLIENT.value, UserRole.MERCHANT.value, UserRole.DELIVERY.value}
    return requested if requested in allowed else UserRole.CLIENT.value


def register_user(repo: UserRepository, body: RegisterRequest) -> User:
    if repo.get_by_phone(body.phone):
        raise DuplicateResourceException("Ce numéro de téléphone est déjà enregistré")
    if body.email and repo.get_by_email(body.email):
        raise DuplicateResourceException("Cet email est déjà utilisé")

    user = User(
        phone=body.phone,
        password_hash=hash_password(body.password),
        name=body.name,
        email=body.email,
        role=resolve_public_role(body.role),
        is_active=True,
    )
    user.ensure_profile()
    user = repo.save(user)
    logger.info("User registered", user_id=user.id, role=user.role)
    return user


def create_user(
    repo: UserRepository,
    name: str,
    phone: str,
    password: str,
    role: str = UserRole.CLIENT.value,
    email: Optional[str] = None,
) -> User:
    user = User(name=name, phone=phone, email=email, role=role, password_hash=hash_password(password))
    user.ensure_profile()
    return repo.save(user)


def generate_otp(repo: UserRepository, phone: str) -> str:
    """Issue a 6-digit reset code. No delivery channel exists; the caller relays it."""
    user = repo.get_by_phone(phone)
    if not user:
        raise EntityNotFoundException(USER_NOT_FOUND)

    code = f"{secrets.randbelow(900000) + 100000}"
    user.otp_code = code
    user.otp_expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_EXPIRATION_MINUTES)
    repo.save(user)
    logger.info("Password reset OTP issued", user_id=user.id)
    return code


def reset_password(repo: UserRepository, phone: str, otp: str, new_password: str) -> User:
    user = repo.get_by_phone(phone)
    if not user:
        raise EntityNotFoundException(USER_NOT_FOUND)
    if not user.otp_is_valid(otp):
        raise InvalidOrExpiredOTPException()

    user.password_hash = hash_password(new_password)
    user.otp_code = None
    user.otp_expires_at = None
    user = repo.save(user)
    logger.info("Password reset", user_id=user.id)
    return user


def update_password(repo: UserRepository, user: User, current_password: str, new_password: str) -> User:
    if not verify_password(current_password, user.password_hash):
        raise UnauthorizedException("Mot de passe actuel incorrect")
    user.password_hash = hash_password(new_password)
    return repo.save(user)


def update_profile(repo: UserRepository, user: User, body: ProfileUpdateRequest) -> User:
    updates = body.model_dump(exclude_unset=True)

    if updates.get("email") and repo.find_conflict(None, updates["email"], exclude_id=user.id):
        raise DuplicateResourceException("Cet email est déjà utilisé")

    for field in ("name", "email", "avatar"):
        if field in updates:
            setattr(user, field, updates[field])

    profile = user.ensure_profile()
    if user.role == UserRole.MERCHANT.value:
        role_fields = MERCHANT_FIELDS
    elif user.role == UserRole.DELIVERY.value:
        role_fields = DELIVERY_FIELDS
    else:
        role_fields = ()
    for field in role_fields:
        if field in updates:
            setattr(profile, field, updates[field])

    return repo.save(user)


def add_address(repo: UserRepository, user: User, body: AddressCreate) -> User:
    make_default = body.is_default or not user.addresses
    if make_default:
        for existing in user.addresses:
            existing.is_default = False

    user.addresses.append(
        Address(
            label=body.label,
            full_address=body.full_address,
            city=body.city,
            quarter=body.quarter,
            details=body.details,
            is_default=make_default,
        )
    )
    return repo.save(user)


def _find_address(user: User, address_id: int) -> Address:
    for address in user.addresses:
        if address.id == address_id:
            return address
    raise EntityNotFoundException("Adresse introuvable")


def set_default_address(repo: UserRepository, user: User, address_id: int) -> User:
    target = _find_address(user, address_id)
    for address in user.addresses:
        address.is_default = address is target
    return repo.save(user)


def delete_address(repo: UserRepository, user: User, address_id: int) -> User:
    target = _find_address(user, address_id)
    user.addresses.remove(target)
    if target.is_default and user.addresses:
        user.addresses[0].is_default = True
    return repo.save(user)


def update_fcm_token(repo: UserRepository, user: User, fcm_token: str) -> User:
    user.fcm_token = fcm_token
    return repo.save(user)


def seed_default_admin(repo: UserRepository) -> Optional[User]:
    """Create the configured admin account unless an admin already exists."""
    if repo.admin_exists():
        return None
    admin = create_user(
        repo,
        name=settings.ADMIN_NAME,
        phone=settings.ADMIN_PHONE,
        password=settings.ADMIN_PASSWORD,
        role=UserRole.ADMIN.value,
        email=settings.ADMIN_EMAIL,
    )
    logger.info("Default admin user created", phone=admin.phone)
    return admin
