"""Admin API routes — product CRUD and the approval workflow."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from app.application.services import product_service
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.product import (
    AdminProductCreate,
    AdminProductUpdate,
    ProductFilter,
    ProductRead,
    RejectRequest,
)
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import success
from app.interfaces.deps import get_category_repository, get_product_repository, get_user_repository

router = APIRouter(prefix="/api/admin/products", tags=["Admin - Products"], dependencies=[Depends(require_admin)])


@router.get("")
def list_products(
    status: Optional[str] = None,
    category: Optional[int] = None,
    merchant: Optional[int] = None,
    search: Optional[str] = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    filters = ProductFilter(status=status, category=category, merchant=merchant, search=search)
    products = product_service.get_products(repo, filters)
    return success({"products": [ProductRead.model_validate(p) for p in products]})


@router.get("/{product_id}")
def get_product(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    product = product_service.get_product(repo, product_id)
    return success({"product": ProductRead.model_validate(product)})


@router.post("", status_code=http_status.HTTP_201_CREATED)
def create_product(
    body: AdminProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    user_repo: UserRepository = Depends(get_user_repository),
):
    product = product_service.create_product(repo, category_repo, user_repo, body)
    return success({"product": ProductRead.model_validate(product)}, "Produit créé")


@router.put("/{product_id}")
def update_product(
    product_id: int,
    body: AdminProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    user_repo: UserRepository = Depends(get_user_repository),
):
    product = product_service.update_product(repo, category_repo, user_repo, product_id, body)
    return success({"product": ProductRead.model_validate(product)}, "Produit mis à jour")


@router.delete("/{product_id}")
def delete_product(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    product_service.delete_product(repo, product_id)
    return success(message="Produit supprimé")


@router.put("/{product_id}/approve")
def approve_product(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    product = product_service.approve_product(repo, product_id)
    return success({"product": ProductRead.model_validate(product)}, "Produit approuvé")


@router.put("/{product_id}/reject")
def reject_product(
    product_id: int,
    body: Optional[RejectRequest] = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    product = product_service.reject_product(repo, product_id, body.reason if body else None)
    return success({"product": ProductRead.model_validate(product)}, "Produit rejeté")
