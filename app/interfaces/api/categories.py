"""Public category routes."""

from fastapi import APIRouter, Depends

from app.application.services import category_service
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.schemas.category import CategoryRead
from app.interfaces.api.responses import success
from app.interfaces.deps import get_category_repository

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("")
def list_categories(active: bool = False, repo: CategoryRepository = Depends(get_category_repository)):
    categories = category_service.list_categories(repo, active_only=active)
    return success({"categories": [CategoryRead.model_validate(c) for c in categories]})


@router.get("/{category_id}")
def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    category = category_service.get_category(repo, category_id)
    return success({"category": CategoryRead.model_validate(category)})
