"""
Category Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.category import Category


class CategoryRepository(BaseRepository[Category]):
    """Interface for Category-specific operations."""

    def list_sorted(self, active_only: bool = False) -> List[Category]:
        """List categories by (order, name)."""
        ...

    def find_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        """Case-insensitive name lookup, ignoring one id."""
        ...
