"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_phone(self, phone: str) -> Optional[User]:
        """Get a user by phone number."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by (lowercased) email."""
        ...

    def find_conflict(self, phone: Optional[str], email: Optional[str], exclude_id: Optional[int] = None) -> Optional[User]:
        """Get another user already holding this phone or email."""
        ...

    def list_users(self, role: Optional[str] = None) -> List[User]:
        """List users newest first, optionally filtered by role."""
        ...

    def list_merchants(self, approved: Optional[bool] = None) -> List[User]:
        """List merchants, optionally filtered by approval."""
        ...

    def count_pending_merchants(self) -> int:
        """Count merchants not yet approved."""
        ...

    def admin_exists(self) -> bool:
        """Whether at least one admin account exists."""
        ...
