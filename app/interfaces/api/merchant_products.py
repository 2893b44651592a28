"""Merchant routes — a merchant's own products.

Every create or reviewable edit lands the product back in ``pending``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from app.application.services import product_service
from app.domain.models.user import User
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductCreate, ProductFilter, ProductRead, ProductUpdate
from app.interfaces.api.deps import require_merchant
from app.interfaces.api.responses import success
from app.interfaces.deps import get_category_repository, get_product_repository

router = APIRouter(prefix="/api/products/merchant", tags=["Merchant - Products"])


@router.get("/my-products")
def my_products(
    status: Optional[str] = None,
    search: Optional[str] = None,
    merchant: User = Depends(require_merchant),
    repo: ProductRepository = Depends(get_product_repository),
):
    products = product_service.get_merchant_products(repo, merchant, ProductFilter(status=status, search=search))
    return success({"products": [ProductRead.model_validate(p) for p in products]})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    merchant: User = Depends(require_merchant),
    repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    product = product_service.create_merchant_product(repo, category_repo, merchant, body)
    return success({"product": ProductRead.model_validate(product)}, "Produit créé, en attente d'approbation")


@router.put("/{product_id}")
def update_product(
    product_id: int,
    body: ProductUpdate,
    merchant: User = Depends(require_merchant),
    repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    product = product_service.update_merchant_product(repo, category_repo, merchant, product_id, body)
    return success({"product": ProductRead.model_validate(product)}, "Produit mis à jour")


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    merchant: User = Depends(require_merchant),
    repo: ProductRepository = Depends(get_product_repository),
):
    product_service.delete_merchant_product(repo, merchant, product_id)
    return success(message="Produit supprimé")
