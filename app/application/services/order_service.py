"""Order service — cash-on-delivery order placement and the admin status workflow."""

import secrets
from datetime import datetime, timezone
from typing import List, Optional

import structlog

from app.config import get_settings
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationException,
)
from app.domain.constants import ORDER_TRANSITIONS, OrderStatus, PAYMENT_METHOD_COD
from app.domain.models.order import Order, OrderItem
from app.domain.models.user import User
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.order import OrderCreate

settings = get_settings()
logger = structlog.get_logger(__name__)

ORDER_NOT_FOUND = "Commande introuvable"
RESTOCK_STATUSES = {OrderStatus.CANCELLED.value, OrderStatus.REJECTED.value}


def generate_order_number(repo: OrderRepository) -> str:
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    while True:
        candidate = f"FM-{today}-{secrets.token_hex(3).upper()}"
        if not repo.order_number_exists(candidate):
            return candidate


def _delivery_address(client: User, body: OrderCreate) -> dict:
    if body.address is not None:
        return body.address.model_dump(by_alias=True, exclude={"is_default"})
    for address in client.addresses:
        if address.id == body.address_id:
            return address.to_snapshot()
    raise ValidationException("Adresse de livraison invalide")


def place_order(repo: OrderRepository, product_repo: ProductRepository, client: User, body: OrderCreate) -> Order:
    """Snapshot prices, reserve stock and create the order in a single commit."""
    address = _delivery_address(client, body)

    items: List[OrderItem] = []
    try:
        for line in body.items:
            product = product_repo.get_public_by_id(line.product)
            if not product:
                raise ValidationException(f"Produit indisponible: {line.product}")
            if not product_repo.reserve_stock(product.id, line.quantity):
                raise ValidationException(f"Stock insuffisant pour {product.name}")
            items.append(
                OrderItem(
                    product_id=product.id,
                    merchant_id=product.merchant_id,
                    name=product.name,
                    price=product.price,
                    quantity=line.quantity,
                )
            )
    except ValidationException:
        repo.rollback()
        raise

    subtotal = sum(item.price * item.quantity for item in items)
    order = Order(
        order_number=generate_order_number(repo),
        client_id=client.id,
        customer_name=client.name,
        customer_phone=client.phone,
        items=items,
        subtotal=subtotal,
        delivery_fee=settings.DELIVERY_FEE,
        total=subtotal + settings.DELIVERY_FEE,
        status=OrderStatus.PENDING.value,
        payment_method=PAYMENT_METHOD_COD,
        delivery_address=address,
        notes=body.notes,
    )
    order = repo.save(order)
    logger.info("Order placed", order_id=order.id, order_number=order.order_number, total=order.total)
    return order


def list_client_orders(repo: OrderRepository, client: User) -> List[Order]:
    return repo.list_for_client(client.id)


def get_client_order(repo: OrderRepository, client: User, order_id: int) -> Order:
    order = repo.get_for_client(order_id, client.id)
    if not order:
        raise EntityNotFoundException(ORDER_NOT_FOUND)
    return order


def cancel_client_order(
    repo: OrderRepository,
    product_repo: ProductRepository,
    client: User,
    order_id: int,
    reason: Optional[str] = None,
) -> Order:
    order = get_client_order(repo, client, order_id)
    if order.status != OrderStatus.PENDING.value:
        raise BusinessRuleViolationException("Seules les commandes en attente peuvent être annulées")
    return _transition(repo, product_repo, order, OrderStatus.CANCELLED.value, reason)


def list_orders(repo: OrderRepository, status: Optional[str] = None) -> List[Order]:
    return repo.list_orders(status)


def get_order(repo: OrderRepository, order_id: int) -> Order:
    order = repo.get_by_id(order_id)
    if not order:
        raise EntityNotFoundException(ORDER_NOT_FOUND)
    return order


def update_order_status(
    repo: OrderRepository,
    product_repo: ProductRepository,
    order_id: int,
    status: str,
    reason: Optional[str] = None,
) -> Order:
    order = get_order(repo, order_id)
    return _transition(repo, product_repo, order, status, reason)


def _transition(
    repo: OrderRepository,
    product_repo: ProductRepository,
    order: Order,
    status: str,
    reason: Optional[str] = None,
) -> Order:
    previous = order.status
    if status not in ORDER_TRANSITIONS.get(previous, set()):
        raise BusinessRuleViolationException(
            f"Transition de statut invalide: {previous} → {status}",
            {"from": previous, "to": status},
        )

    if status in RESTOCK_STATUSES:
        for item in order.items:
            if item.product_id is not None:
                product_repo.release_stock(item.product_id, item.quantity)
        order.cancellation_reason = reason
    elif status == OrderStatus.DELIVERED.value:
        for item in order.items:
            if item.product_id is not None:
                product_repo.add_sold(item.product_id, item.quantity)

    order.status = status
    order = repo.save(order)
    logger.info("Order status changed", order_id=order.id, previous=previous, status=status)
    return order
