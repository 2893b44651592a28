"""
Global exception handling for the application.
Every error leaves the API in the common envelope: {success: false, message, details?, stack?}.
"""

import re
import traceback
from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppError):
    """Missing or malformed input."""
    def __init__(self, message: str = "Données invalides", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class DuplicateResourceException(AppError):
    """Unique constraint violation (phone, email, category name)."""
    def __init__(self, message: str = "Ressource déjà existante", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Ressource non trouvée", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class NotFoundOrUnauthorizedException(EntityNotFoundException):
    """Ownership predicate did not match — indistinguishable from a missing row."""
    def __init__(self, message: str = "Produit introuvable ou non autorisé", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class BusinessRuleViolationException(AppError):
    """Business logic violation error."""
    def __init__(self, message: str = "Règle métier non respectée", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Non autorisé", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidCredentialsException(UnauthorizedException):
    def __init__(self):
        super().__init__("Identifiants invalides")


class AccountDisabledException(UnauthorizedException):
    def __init__(self, message: str = "Votre compte a été désactivé"):
        super().__init__(message)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Accès refusé", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class InvalidOrExpiredOTPException(AppError):
    def __init__(self):
        super().__init__("OTP invalide ou expiré", status.HTTP_400_BAD_REQUEST)


class CategoryInUseException(AppError):
    def __init__(self, count: int):
        super().__init__(
            f"Impossible de supprimer: {count} produit(s) utilisent cette catégorie",
            status.HTTP_400_BAD_REQUEST,
            {"productCount": count},
        )


def _error_response(request: Request, status_code: int, message: str, exc: Exception, details=None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if details:
        content["details"] = details
    if settings.ENVIRONMENT != "production":
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.message, exc, exc.details)


_MISSING_MESSAGES = {
    "phone": "Le numéro de téléphone est requis",
    "password": "Le mot de passe est requis",
    "name": "Le nom est requis",
    "email": "L'email est requis",
    "description": "La description est requise",
    "price": "Le prix est requis",
    "category": "La catégorie est requise",
    "merchant": "Le marchand est requis",
}


def _format_validation_error(err: dict) -> str:
    field = str(err["loc"][-1]) if err.get("loc") else ""
    if err.get("type") == "missing":
        return _MISSING_MESSAGES.get(field, f"{field} est requis")
    message = err.get("msg", "Valeur invalide")
    # field_validator messages come prefixed by pydantic
    message = message.removeprefix("Value error, ")
    return f"{field}: {message}" if err.get("type") != "value_error" else message


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Path parameter parse failures are treated as a missing resource; body/query errors as 400."""
    errors = exc.errors()
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        return _error_response(request, status.HTTP_404_NOT_FOUND, "Ressource non trouvée", exc)

    message = ", ".join(_format_validation_error(err) for err in errors)
    return _error_response(request, status.HTTP_400_BAD_REQUEST, message, exc)


_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),  # sqlite
    re.compile(r"Key \((\w+)\)=\(.*\) already exists"),   # postgresql
)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    text = str(exc.orig)
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(text)
        if match:
            return _error_response(request, status.HTTP_400_BAD_REQUEST, f"{match.group(1)} existe déjà", exc)

    logger.warning("Integrity error", path=request.url.path, error=text)
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "Contrainte d'intégrité violée", exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Non trouvé - {request.url.path}"
    else:
        message = str(exc.detail)
    return _error_response(request, exc.status_code, message, exc)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unexpected error occurred", path=request.url.path)
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Erreur serveur", exc)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
