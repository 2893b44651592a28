"""Admin API routes — order listing and status updates."""

from typing import Optional

from fastapi import APIRouter, Depends

from app.application.services import order_service
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.order import OrderRead, OrderStatusUpdate
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import success
from app.interfaces.deps import get_order_repository, get_product_repository

router = APIRouter(prefix="/api/admin/orders", tags=["Admin - Orders"], dependencies=[Depends(require_admin)])


@router.get("")
def list_orders(status: Optional[str] = None, repo: OrderRepository = Depends(get_order_repository)):
    orders = order_service.list_orders(repo, status)
    return success({"orders": [OrderRead.model_validate(o) for o in orders]})


@router.get("/{order_id}")
def get_order(order_id: int, repo: OrderRepository = Depends(get_order_repository)):
    order = order_service.get_order(repo, order_id)
    return success({"order": OrderRead.model_validate(order)})


@router.put("/{order_id}/status")
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    repo: OrderRepository = Depends(get_order_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    order = order_service.update_order_status(repo, product_repo, order_id, body.status, body.reason)
    return success({"order": OrderRead.model_validate(order)}, "Statut de la commande mis à jour")
