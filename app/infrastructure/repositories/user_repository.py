"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload

from app.domain.constants import UserRole
from app.domain.models.user import MerchantProfile, User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def _query(self):
        return self.db.query(User).options(
            selectinload(User.addresses),
            selectinload(User.merchant_profile),
            selectinload(User.delivery_profile),
        )

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self._query().filter(User.phone == phone).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def find_conflict(self, phone: Optional[str], email: Optional[str], exclude_id: Optional[int] = None) -> Optional[User]:
        conditions = []
        if phone:
            conditions.append(User.phone == phone)
        if email:
            conditions.append(User.email == email.lower())
        if not conditions:
            return None

        query = self.db.query(User).filter(or_(*conditions))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    def list_users(self, role: Optional[str] = None) -> List[User]:
        query = self._query()
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.created_at.desc(), User.id.desc()).all()

    def list_merchants(self, approved: Optional[bool] = None) -> List[User]:
        query = self._query().filter(User.role == UserRole.MERCHANT.value)
        if approved is not None:
            query = query.outerjoin(MerchantProfile)
            if approved:
                query = query.filter(MerchantProfile.is_approved.is_(True))
            else:
                query = query.filter(or_(MerchantProfile.is_approved.is_(False), MerchantProfile.user_id.is_(None)))
        return query.order_by(User.created_at.desc(), User.id.desc()).all()

    def count_pending_merchants(self) -> int:
        return (
            self.db.query(func.count(User.id))
            .select_from(User)
            .outerjoin(MerchantProfile)
            .filter(
                User.role == UserRole.MERCHANT.value,
                or_(MerchantProfile.is_approved.is_(False), MerchantProfile.user_id.is_(None)),
            )
            .scalar()
            or 0
        )

    def admin_exists(self) -> bool:
        return self.db.query(User.id).filter(User.role == UserRole.ADMIN.value).first() is not None
