"""
SQLAlchemy Implementation of Order Repository.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from app.domain.constants import OrderStatus
from app.domain.models.order import Order
from app.domain.repositories.order_repository import OrderRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order], OrderRepository):

    def _query(self):
        return self.db.query(Order).options(selectinload(Order.items))

    def get_by_id(self, id: int) -> Optional[Order]:
        return self._query().filter(Order.id == id).first()

    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        query = self._query()
        if status and status != "all":
            query = query.filter(Order.status == status)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def list_for_client(self, client_id: int) -> List[Order]:
        return (
            self._query()
            .filter(Order.client_id == client_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def get_for_client(self, id: int, client_id: int) -> Optional[Order]:
        return self._query().filter(Order.id == id, Order.client_id == client_id).first()

    def order_number_exists(self, order_number: str) -> bool:
        return self.db.query(Order.id).filter(Order.order_number == order_number).first() is not None

    def total_revenue(self) -> float:
        total = (
            self.db.query(func.coalesce(func.sum(Order.total), 0))
            .filter(Order.status == OrderStatus.DELIVERED.value)
            .scalar()
        )
        return float(total)
