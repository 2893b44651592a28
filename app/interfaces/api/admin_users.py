"""Admin API routes — users, merchant approval and delivery personnel."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from app.application.services import user_service
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.user import UserCreate, UserUpdate, user_to_read
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import success
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/admin", tags=["Admin - Users"], dependencies=[Depends(require_admin)])


@router.get("/users")
def list_users(role: Optional[str] = None, repo: UserRepository = Depends(get_user_repository)):
    users = user_service.list_users(repo, role)
    return success({"users": [user_to_read(u) for u in users]})


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, repo: UserRepository = Depends(get_user_repository)):
    user = user_service.create_user(repo, body)
    return success({"user": user_to_read(user)}, "Utilisateur créé")


@router.get("/users/{user_id}")
def get_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    return success({"user": user_to_read(user_service.get_user(repo, user_id))})


@router.put("/users/{user_id}")
def update_user(user_id: int, body: UserUpdate, repo: UserRepository = Depends(get_user_repository)):
    user = user_service.update_user(repo, user_id, body)
    return success({"user": user_to_read(user)}, "Utilisateur mis à jour")


@router.delete("/users/{user_id}")
def delete_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    user_service.delete_user(repo, user_id)
    return success(message="Utilisateur supprimé")


@router.put("/users/{user_id}/toggle-status")
def toggle_user_status(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    user = user_service.toggle_user_status(repo, user_id)
    return success({"user": user_to_read(user)})


@router.get("/merchants")
def list_merchants(approved: Optional[bool] = None, repo: UserRepository = Depends(get_user_repository)):
    merchants = user_service.list_merchants(repo, approved)
    return success({"merchants": [user_to_read(m) for m in merchants]})


@router.put("/merchants/{user_id}/approve")
def approve_merchant(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    merchant = user_service.set_merchant_approval(repo, user_id, True)
    return success({"merchant": user_to_read(merchant)}, "Marchand approuvé")


@router.put("/merchants/{user_id}/reject")
def reject_merchant(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    merchant = user_service.set_merchant_approval(repo, user_id, False)
    return success({"merchant": user_to_read(merchant)}, "Marchand rejeté")


@router.get("/delivery")
def list_delivery_personnel(repo: UserRepository = Depends(get_user_repository)):
    personnel = user_service.list_delivery_personnel(repo)
    return success({"deliveryPersonnel": [user_to_read(d) for d in personnel]})
