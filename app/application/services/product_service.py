"""Product service — approval workflow, admin/merchant write paths and public listing."""

from typing import Any, Dict, List

import structlog

from app.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    NotFoundOrUnauthorizedException,
    ValidationException,
)
from app.domain.constants import DEFAULT_REJECTION_REASON, ProductStatus
from app.domain.models.product import Product
from app.domain.models.user import User
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.product import (
    AdminProductCreate,
    AdminProductUpdate,
    ProductCreate,
    ProductFilter,
    ProductUpdate,
    PublicProductFilter,
)

logger = structlog.get_logger(__name__)

PRODUCT_NOT_FOUND = "Produit introuvable"
INVALID_CATEGORY = "Catégorie invalide"
INVALID_MERCHANT = "Marchand invalide"

# Editing any of these sends a merchant's product back to review
REVIEW_FIELDS = ("name", "description", "price")
MERCHANT_EDITABLE = (
    "name", "description", "price", "compare_price", "stock", "image",
    "images", "category", "tags", "specifications", "is_active",
)
REQUIRED_FIELDS = ("name", "description", "price", "stock", "is_active")


def _check_category(category_repo: CategoryRepository, category_id: int) -> None:
    if not category_repo.get_by_id(category_id):
        raise ValidationException(INVALID_CATEGORY)


def _apply_fields(product: Product, updates: Dict[str, Any], category_repo: CategoryRepository) -> None:
    for field, value in updates.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        if field == "category":
            if value is None:
                continue
            _check_category(category_repo, value)
            product.category_id = value
        elif field == "merchant":
            if value is not None:
                product.merchant_id = value
        elif field in ("images", "tags", "specifications"):
            setattr(product, field, value or [])
        else:
            setattr(product, field, value)


def _new_product(body: ProductCreate, merchant_id: int) -> Product:
    data = body.model_dump(exclude={"category", "merchant"})
    return Product(**data, category_id=body.category, merchant_id=merchant_id, views=0, sold_count=0)


# Admin

def get_products(repo: ProductRepository, filters: ProductFilter) -> List[Product]:
    return repo.get_with_filters(filters)


def get_product(repo: ProductRepository, product_id: int) -> Product:
    product = repo.get_by_id(product_id)
    if not product:
        raise EntityNotFoundException(PRODUCT_NOT_FOUND)
    return product


def create_product(
    repo: ProductRepository,
    category_repo: CategoryRepository,
    user_repo: UserRepository,
    body: AdminProductCreate,
) -> Product:
    """Admin-authored products skip review."""
    _check_category(category_repo, body.category)
    if not user_repo.get_by_id(body.merchant):
        raise ValidationException(INVALID_MERCHANT)

    product = _new_product(body, body.merchant)
    product.set_status(ProductStatus.APPROVED)
    product = repo.save(product)
    logger.info("Product created by admin", product_id=product.id, merchant_id=product.merchant_id)
    return product


def update_product(
    repo: ProductRepository,
    category_repo: CategoryRepository,
    user_repo: UserRepository,
    product_id: int,
    body: AdminProductUpdate,
) -> Product:
    product = get_product(repo, product_id)
    updates = body.model_dump(exclude_unset=True)
    status = updates.pop("status", None)
    is_approved = updates.pop("is_approved", None)
    rejection_reason = updates.pop("rejection_reason", None)

    if updates.get("merchant") is not None and not user_repo.get_by_id(updates["merchant"]):
        raise ValidationException(INVALID_MERCHANT)
    _apply_fields(product, updates, category_repo)

    if status is None and is_approved is not None:
        status = ProductStatus.APPROVED.value if is_approved else ProductStatus.PENDING.value
    if status == ProductStatus.REJECTED.value:
        product.set_status(status, rejection_reason or DEFAULT_REJECTION_REASON)
    elif status is not None:
        product.set_status(status, rejection_reason)
    elif rejection_reason is not None:
        product.rejection_reason = rejection_reason

    return repo.save(product)


def delete_product(repo: ProductRepository, product_id: int) -> None:
    if not repo.delete(product_id):
        raise EntityNotFoundException(PRODUCT_NOT_FOUND)
    logger.info("Product deleted", product_id=product_id)


def approve_product(repo: ProductRepository, product_id: int) -> Product:
    product = get_product(repo, product_id)
    product.set_status(ProductStatus.APPROVED)
    product = repo.save(product)
    logger.info("Product approved", product_id=product.id)
    return product


def reject_product(repo: ProductRepository, product_id: int, reason: str | None = None) -> Product:
    product = get_product(repo, product_id)
    product.set_status(ProductStatus.REJECTED, reason or DEFAULT_REJECTION_REASON)
    product = repo.save(product)
    logger.info("Product rejected", product_id=product.id, reason=product.rejection_reason)
    return product


# Merchant

def get_merchant_products(repo: ProductRepository, merchant: User, filters: ProductFilter) -> List[Product]:
    return repo.get_merchant_products(merchant.id, filters)


def create_merchant_product(
    repo: ProductRepository,
    category_repo: CategoryRepository,
    merchant: User,
    body: ProductCreate,
) -> Product:
    if not merchant.is_approved:
        raise ForbiddenException("Votre compte marchand doit être approuvé pour ajouter des produits")
    _check_category(category_repo, body.category)

    product = _new_product(body, merchant.id)
    product.set_status(ProductStatus.PENDING)
    product = repo.save(product)
    logger.info("Product submitted for review", product_id=product.id, merchant_id=merchant.id)
    return product


def update_merchant_product(
    repo: ProductRepository,
    category_repo: CategoryRepository,
    merchant: User,
    product_id: int,
    body: ProductUpdate,
) -> Product:
    product = repo.get_owned(product_id, merchant.id)
    if not product:
        raise NotFoundOrUnauthorizedException()

    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if k in MERCHANT_EDITABLE}
    _apply_fields(product, updates, category_repo)

    if any(field in updates for field in REVIEW_FIELDS):
        product.set_status(ProductStatus.PENDING)

    return repo.save(product)


def delete_merchant_product(repo: ProductRepository, merchant: User, product_id: int) -> None:
    product = repo.get_owned(product_id, merchant.id)
    if not product:
        raise NotFoundOrUnauthorizedException()
    repo.delete(product.id)


# Public

def get_public_products(repo: ProductRepository, filters: PublicProductFilter) -> Dict[str, Any]:
    return repo.get_public(filters)


def get_public_product(repo: ProductRepository, product_id: int) -> Product:
    product = repo.get_public_by_id(product_id)
    if not product:
        raise EntityNotFoundException(PRODUCT_NOT_FOUND)
    repo.increment_views(product.id)
    return product
