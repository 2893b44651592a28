"""Public catalog routes — approved, active products only."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.application.services import product_service
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import Pagination, PublicProductFilter, PublicProductRead
from app.interfaces.api.responses import success
from app.interfaces.deps import get_product_repository

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
def list_products(
    category: Optional[int] = None,
    search: Optional[str] = None,
    min_price: Optional[float] = Query(default=None, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, alias="maxPrice"),
    sort: Optional[Literal["newest", "price_asc", "price_desc", "popular"]] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    repo: ProductRepository = Depends(get_product_repository),
):
    filters = PublicProductFilter(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        limit=limit,
    )
    result = product_service.get_public_products(repo, filters)
    return success(
        {
            "products": [PublicProductRead.model_validate(p) for p in result["items"]],
            "pagination": Pagination(
                page=result["page"], limit=result["limit"], total=result["total"], pages=result["pages"]
            ),
        }
    )


@router.get("/{product_id}")
def get_product(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    product = product_service.get_public_product(repo, product_id)
    return success({"product": PublicProductRead.model_validate(product)})
