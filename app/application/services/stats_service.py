"""Stats service — counters for the admin dashboard."""

from app.domain.constants import ProductStatus
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.order import DashboardStats


def get_dashboard_stats(
    user_repo: UserRepository,
    product_repo: ProductRepository,
    category_repo: CategoryRepository,
    order_repo: OrderRepository,
) -> DashboardStats:
    return DashboardStats(
        total_users=user_repo.count(),
        total_products=product_repo.count(),
        total_categories=category_repo.count(),
        pending_products=product_repo.count_by_status(ProductStatus.PENDING.value),
        pending_merchants=user_repo.count_pending_merchants(),
        total_orders=order_repo.count(),
        total_revenue=order_repo.total_revenue(),
    )
