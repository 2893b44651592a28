"""Category domain model — maps to the 'categories' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from app.infrastructure.database import Base


def name_key(name: str) -> str:
    """Case-folded form used for uniqueness; SQL lower() ignores non-ASCII letters on SQLite."""
    return name.strip().casefold()


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    name_key = Column(String(200), unique=True, nullable=False, index=True)
    description = Column(String(1000), nullable=True)
    image = Column(String(500), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = name_key(value)
        return value

    def __repr__(self):
        return f"<Category {self.name}>"
