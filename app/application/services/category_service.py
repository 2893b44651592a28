"""Category service — CRUD with case-insensitive unique names and a delete guard."""

from typing import List

import structlog

from app.core.exceptions import CategoryInUseException, DuplicateResourceException, EntityNotFoundException
from app.domain.models.category import Category
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.category import CategoryCreate, CategoryUpdate

logger = structlog.get_logger(__name__)

CATEGORY_NOT_FOUND = "Catégorie introuvable"
CATEGORY_EXISTS = "Cette catégorie existe déjà"


def list_categories(repo: CategoryRepository, active_only: bool = False) -> List[Category]:
    return repo.list_sorted(active_only)


def get_category(repo: CategoryRepository, category_id: int) -> Category:
    category = repo.get_by_id(category_id)
    if not category:
        raise EntityNotFoundException(CATEGORY_NOT_FOUND)
    return category


def create_category(repo: CategoryRepository, body: CategoryCreate) -> Category:
    if repo.find_by_name(body.name):
        raise DuplicateResourceException(CATEGORY_EXISTS)
    category = repo.create(body.model_dump())
    logger.info("Category created", category_id=category.id, name=category.name)
    return category


def update_category(repo: CategoryRepository, category_id: int, body: CategoryUpdate) -> Category:
    category = get_category(repo, category_id)
    if body.name and repo.find_by_name(body.name, exclude_id=category_id):
        raise DuplicateResourceException(CATEGORY_EXISTS)
    return repo.update(category, body.model_dump(exclude_unset=True, exclude_none=True))


def delete_category(repo: CategoryRepository, product_repo: ProductRepository, category_id: int) -> None:
    """Blocked, not cascaded, while any product references the category."""
    product_count = product_repo.count_by_category(category_id)
    if product_count > 0:
        raise CategoryInUseException(product_count)
    if not repo.delete(category_id):
        raise EntityNotFoundException(CATEGORY_NOT_FOUND)
    logger.info("Category deleted", category_id=category_id)


def toggle_category_status(repo: CategoryRepository, category_id: int) -> Category:
    category = get_category(repo, category_id)
    category.is_active = not category.is_active
    return repo.save(category)
