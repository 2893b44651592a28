"""
Order Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.order import Order


class OrderRepository(BaseRepository[Order]):
    """Interface for Order-specific operations."""

    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        """All orders newest first, optionally by status."""
        ...

    def list_for_client(self, client_id: int) -> List[Order]:
        """Orders placed by one client."""
        ...

    def get_for_client(self, id: int, client_id: int) -> Optional[Order]:
        """Get an order only if the client placed it."""
        ...

    def order_number_exists(self, order_number: str) -> bool:
        ...

    def total_revenue(self) -> float:
        """Sum of totals over delivered orders."""
        ...
