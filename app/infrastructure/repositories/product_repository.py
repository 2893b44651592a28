"""
SQLAlchemy Implementation of Product Repository.
"""

import math
from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import joinedload

from app.domain.constants import ProductStatus
from app.domain.models.product import Product
from app.domain.models.user import User
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductFilter, PublicProductFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

SORT_OPTIONS = {
    "price_asc": (Product.price.asc(),),
    "price_desc": (Product.price.desc(),),
    "popular": (Product.sold_count.desc(),),
}
DEFAULT_SORT = (Product.created_at.desc(), Product.id.desc())


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def _query(self):
        return self.db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.merchant).joinedload(User.merchant_profile),
        )

    @staticmethod
    def _search(query, search: Optional[str], include_tags: bool = False):
        if not search:
            return query
        conditions = [
            Product.name.icontains(search, autoescape=True),
            Product.description.icontains(search, autoescape=True),
        ]
        if include_tags:
            conditions.append(cast(Product.tags, String).icontains(search, autoescape=True))
        return query.filter(or_(*conditions))

    def get_by_id(self, id: int) -> Optional[Product]:
        return self._query().filter(Product.id == id).first()

    def get_with_filters(self, filters: ProductFilter) -> List[Product]:
        query = self._query()

        if filters.status and filters.status != "all":
            if filters.status == ProductStatus.PENDING.value:
                query = query.filter(Product.is_approved.is_(False), Product.status == ProductStatus.PENDING.value)
            elif filters.status == ProductStatus.APPROVED.value:
                query = query.filter(Product.is_approved.is_(True), Product.status == ProductStatus.APPROVED.value)
            elif filters.status == ProductStatus.REJECTED.value:
                query = query.filter(Product.status == ProductStatus.REJECTED.value)

        if filters.category:
            query = query.filter(Product.category_id == filters.category)
        if filters.merchant:
            query = query.filter(Product.merchant_id == filters.merchant)
        query = self._search(query, filters.search)

        return query.order_by(*DEFAULT_SORT).all()

    def get_merchant_products(self, merchant_id: int, filters: ProductFilter) -> List[Product]:
        query = self._query().filter(Product.merchant_id == merchant_id)
        if filters.status and filters.status != "all":
            query = query.filter(Product.status == filters.status)
        query = self._search(query, filters.search)
        return query.order_by(*DEFAULT_SORT).all()

    def get_owned(self, id: int, merchant_id: int) -> Optional[Product]:
        return self._query().filter(Product.id == id, Product.merchant_id == merchant_id).first()

    def _public_query(self):
        return self._query().filter(
            Product.is_approved.is_(True),
            Product.is_active.is_(True),
            Product.status == ProductStatus.APPROVED.value,
        )

    def get_public(self, filters: PublicProductFilter) -> Dict[str, Any]:
        query = self._public_query()

        if filters.category:
            query = query.filter(Product.category_id == filters.category)
        query = self._search(query, filters.search, include_tags=True)
        if filters.min_price is not None:
            query = query.filter(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Product.price <= filters.max_price)

        total = query.order_by(None).count()
        offset = (filters.page - 1) * filters.limit
        products = (
            query.order_by(*SORT_OPTIONS.get(filters.sort, DEFAULT_SORT), Product.id.desc())
            .offset(offset)
            .limit(filters.limit)
            .all()
        )

        return {
            "items": products,
            "total": total,
            "page": filters.page,
            "limit": filters.limit,
            "pages": math.ceil(total / filters.limit),
        }

    def get_public_by_id(self, id: int) -> Optional[Product]:
        return self._public_query().filter(Product.id == id).first()

    def increment_views(self, id: int) -> None:
        self.db.query(Product).filter(Product.id == id).update(
            {Product.views: Product.views + 1}, synchronize_session=False
        )
        self.db.commit()

    def count_by_status(self, status: str) -> int:
        return self.db.query(func.count(Product.id)).filter(Product.status == status).scalar() or 0

    def count_by_category(self, category_id: int) -> int:
        return self.db.query(func.count(Product.id)).filter(Product.category_id == category_id).scalar() or 0

    def reserve_stock(self, id: int, quantity: int) -> bool:
        updated = (
            self.db.query(Product)
            .filter(Product.id == id, Product.stock >= quantity)
            .update({Product.stock: Product.stock - quantity}, synchronize_session=False)
        )
        return updated == 1

    def release_stock(self, id: int, quantity: int) -> None:
        self.db.query(Product).filter(Product.id == id).update(
            {Product.stock: Product.stock + quantity}, synchronize_session=False
        )

    def add_sold(self, id: int, quantity: int) -> None:
        self.db.query(Product).filter(Product.id == id).update(
            {Product.sold_count: Product.sold_count + quantity}, synchronize_session=False
        )
