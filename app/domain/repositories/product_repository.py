"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import List, Dict, Any, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.product import Product
from app.domain.schemas.product import ProductFilter, PublicProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_with_filters(self, filters: ProductFilter) -> List[Product]:
        """Admin listing: status bucket, category, merchant, search."""
        ...

    def get_merchant_products(self, merchant_id: int, filters: ProductFilter) -> List[Product]:
        """Products owned by one merchant."""
        ...

    def get_owned(self, id: int, merchant_id: int) -> Optional[Product]:
        """Get a product only if it belongs to the merchant."""
        ...

    def get_public(self, filters: PublicProductFilter) -> Dict[str, Any]:
        """Approved and active products with pagination."""
        ...

    def get_public_by_id(self, id: int) -> Optional[Product]:
        """Get an approved and active product."""
        ...

    def increment_views(self, id: int) -> None:
        """Atomically add one view."""
        ...

    def count_by_status(self, status: str) -> int:
        """Count products in a status."""
        ...

    def count_by_category(self, category_id: int) -> int:
        """Count products referencing a category."""
        ...

    def reserve_stock(self, id: int, quantity: int) -> bool:
        """Atomically decrement stock if enough remains. Not committed."""
        ...

    def release_stock(self, id: int, quantity: int) -> None:
        """Atomically give stock back. Not committed."""
        ...

    def add_sold(self, id: int, quantity: int) -> None:
        """Atomically increase sold_count. Not committed."""
        ...
