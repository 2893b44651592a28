"""FastAPI dependency — JWT auth (protect) and role checks (authorize)."""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.application.services.auth_service import decode_access_token
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.constants import UserRole
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.interfaces.deps import get_user_repository

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Extract and validate the current user from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Non autorisé, token manquant")

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("id")
    if user_id is None:
        raise UnauthorizedException("Token invalide")

    user = repo.get_by_id(user_id)
    if user is None:
        raise UnauthorizedException("Utilisateur introuvable")
    if not user.is_active:
        raise UnauthorizedException("Compte désactivé")

    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Build a dependency that admits only the given roles."""
    allowed = {UserRole(role).value for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if allowed and user.role not in allowed:
            raise ForbiddenException("Accès refusé")
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_merchant = require_roles(UserRole.MERCHANT)
require_client = require_roles(UserRole.CLIENT)
