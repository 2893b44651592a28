"""Dashboard API — counters for the admin home page."""

from fastapi import APIRouter, Depends

from app.application.services.stats_service import get_dashboard_stats
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.user_repository import UserRepository
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import success
from app.interfaces.deps import (
    get_category_repository,
    get_order_repository,
    get_product_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/admin", tags=["Admin - Dashboard"], dependencies=[Depends(require_admin)])


@router.get("/stats")
def dashboard_stats(
    user_repo: UserRepository = Depends(get_user_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    order_repo: OrderRepository = Depends(get_order_repository),
):
    """Users, products, categories, pending reviews, orders and delivered revenue."""
    stats = get_dashboard_stats(user_repo, product_repo, category_repo, order_repo)
    return success(stats.model_dump(by_alias=True))
