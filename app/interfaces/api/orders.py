"""Client order routes — cash on delivery."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from app.application.services import order_service
from app.domain.models.user import User
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.order import CancelOrderRequest, OrderCreate, OrderRead
from app.interfaces.api.deps import require_client
from app.interfaces.api.responses import success
from app.interfaces.deps import get_order_repository, get_product_repository

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(
    body: OrderCreate,
    client: User = Depends(require_client),
    repo: OrderRepository = Depends(get_order_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    order = order_service.place_order(repo, product_repo, client, body)
    return success({"order": OrderRead.model_validate(order)}, "Commande passée avec succès")


@router.get("")
def my_orders(client: User = Depends(require_client), repo: OrderRepository = Depends(get_order_repository)):
    orders = order_service.list_client_orders(repo, client)
    return success({"orders": [OrderRead.model_validate(o) for o in orders]})


@router.get("/{order_id}")
def get_order(
    order_id: int,
    client: User = Depends(require_client),
    repo: OrderRepository = Depends(get_order_repository),
):
    order = order_service.get_client_order(repo, client, order_id)
    return success({"order": OrderRead.model_validate(order)})


@router.put("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    body: Optional[CancelOrderRequest] = None,
    client: User = Depends(require_client),
    repo: OrderRepository = Depends(get_order_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    order = order_service.cancel_client_order(repo, product_repo, client, order_id, body.reason if body else None)
    return success({"order": OrderRead.model_validate(order)}, "Commande annulée")
