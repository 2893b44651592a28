"""Auth API routes — register, login, password reset and the current user's account."""

from fastapi import APIRouter, Depends, status

from app.application.services import auth_service
from app.application.services.auth_service import create_access_token
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    FCMTokenRequest,
    ForgotPasswordRequest,
    LoginRequest,
    PasswordUpdateRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.domain.schemas.user import AddressCreate, AddressRead, user_to_read
from app.interfaces.api.deps import get_current_user, require_client
from app.interfaces.api.responses import success
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _addresses(user: User) -> list[AddressRead]:
    return [AddressRead.model_validate(a) for a in user.addresses]


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, repo: UserRepository = Depends(get_user_repository)):
    user = auth_service.register_user(repo, body)
    return success(
        {"token": create_access_token(user), "user": user_to_read(user)},
        "Inscription réussie",
    )


@router.post("/login")
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = auth_service.authenticate_user(repo, body.phone, body.password)
    return success(
        {"token": create_access_token(user), "user": user_to_read(user)},
        "Connexion réussie",
    )


@router.post("/forgot-password")
def forgot_password(body: ForgotPasswordRequest, repo: UserRepository = Depends(get_user_repository)):
    # No SMS provider is wired in: the code is handed back for the caller to relay
    otp = auth_service.generate_otp(repo, body.phone)
    return success({"otp": otp}, "Code OTP envoyé")


@router.post("/reset-password")
def reset_password(body: ResetPasswordRequest, repo: UserRepository = Depends(get_user_repository)):
    user = auth_service.reset_password(repo, body.phone, body.otp, body.new_password)
    return success({"token": create_access_token(user)}, "Mot de passe réinitialisé avec succès")


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return success({"user": user_to_read(user)})


@router.put("/profile")
def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.update_profile(repo, user, body)
    return success({"user": user_to_read(user)}, "Profil mis à jour avec succès")


@router.put("/password")
def update_password(
    body: PasswordUpdateRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.update_password(repo, user, body.current_password, body.new_password)
    return success({"token": create_access_token(user)}, "Mot de passe mis à jour avec succès")


@router.post("/addresses", status_code=status.HTTP_201_CREATED)
def add_address(
    body: AddressCreate,
    user: User = Depends(require_client),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.add_address(repo, user, body)
    return success({"addresses": _addresses(user)}, "Adresse ajoutée avec succès")


@router.put("/addresses/{address_id}/default")
def set_default_address(
    address_id: int,
    user: User = Depends(require_client),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.set_default_address(repo, user, address_id)
    return success({"addresses": _addresses(user)}, "Adresse par défaut mise à jour")


@router.delete("/addresses/{address_id}")
def delete_address(
    address_id: int,
    user: User = Depends(require_client),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.delete_address(repo, user, address_id)
    return success({"addresses": _addresses(user)}, "Adresse supprimée")


@router.post("/fcm-token")
def update_fcm_token(
    body: FCMTokenRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    auth_service.update_fcm_token(repo, user, body.fcm_token)
    return success(message="Token FCM mis à jour")
