"""Admin API routes — category CRUD."""

from fastapi import APIRouter, Depends, status

from app.application.services import category_service
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import success
from app.interfaces.deps import get_category_repository, get_product_repository

router = APIRouter(prefix="/api/admin/categories", tags=["Admin - Categories"], dependencies=[Depends(require_admin)])


@router.get("")
def list_categories(active: bool = False, repo: CategoryRepository = Depends(get_category_repository)):
    categories = category_service.list_categories(repo, active_only=active)
    return success({"categories": [CategoryRead.model_validate(c) for c in categories]})


@router.get("/{category_id}")
def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    category = category_service.get_category(repo, category_id)
    return success({"category": CategoryRead.model_validate(category)})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryCreate, repo: CategoryRepository = Depends(get_category_repository)):
    category = category_service.create_category(repo, body)
    return success({"category": CategoryRead.model_validate(category)}, "Catégorie créée")


@router.put("/{category_id}")
def update_category(
    category_id: int,
    body: CategoryUpdate,
    repo: CategoryRepository = Depends(get_category_repository),
):
    category = category_service.update_category(repo, category_id, body)
    return success({"category": CategoryRead.model_validate(category)}, "Catégorie mise à jour")


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    repo: CategoryRepository = Depends(get_category_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    category_service.delete_category(repo, product_repo, category_id)
    return success(message="Catégorie supprimée")


@router.put("/{category_id}/toggle-status")
def toggle_category_status(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    category = category_service.toggle_category_status(repo, category_id)
    return success({"category": CategoryRead.model_validate(category)})
