"""
SQLAlchemy Implementation of Category Repository.
"""

from typing import List, Optional

from app.domain.models.category import Category, name_key
from app.domain.repositories.category_repository import CategoryRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category], CategoryRepository):

    def list_sorted(self, active_only: bool = False) -> List[Category]:
        query = self.db.query(Category)
        if active_only:
            query = query.filter(Category.is_active.is_(True))
        return query.order_by(Category.order.asc(), Category.name.asc()).all()

    def find_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        query = self.db.query(Category).filter(Category.name_key == name_key(name))
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first()
