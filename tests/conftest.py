import itertools
import os

# Settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.application.services import auth_service
from app.application.services.auth_service import create_access_token
from app.domain.constants import ProductStatus
from app.domain.models.category import Category
from app.domain.models.product import Product
from app.domain.models.user import User
from app.infrastructure.database import Base, SessionLocal, engine
from app.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    repo = SQLAlchemyUserRepository(db, User)
    phones = itertools.count(1)

    def _make(role="client", approved=None, is_active=True, name=None, phone=None, email=None, **profile):
        phone = phone or f"+2376{next(phones):08d}"
        user = auth_service.create_user(repo, name=name or f"{role} user", phone=phone, password=PASSWORD, role=role, email=email)
        if approved is not None:
            user.ensure_profile().is_approved = approved
        for field, value in profile.items():
            setattr(user.ensure_profile(), field, value)
        user.is_active = is_active
        return repo.save(user)

    return _make


@pytest.fixture
def headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Admin")


@pytest.fixture
def admin_headers(admin, headers):
    return headers(admin)


@pytest.fixture
def make_category(db):
    repo = SQLAlchemyCategoryRepository(db, Category)
    names = itertools.count(1)

    def _make(name=None, order=0, is_active=True):
        return repo.create({"name": name or f"Catégorie {next(names)}", "order": order, "is_active": is_active})

    return _make


@pytest.fixture
def make_product(db, make_category):
    repo = SQLAlchemyProductRepository(db, Product)

    def _make(merchant, category=None, status=ProductStatus.APPROVED, name="Savon", price=1000.0, stock=10, **fields):
        category = category or make_category()
        product = Product(
            name=name,
            description=f"Description de {name}",
            price=price,
            stock=stock,
            category_id=category.id,
            merchant_id=merchant.id,
            images=[],
            tags=fields.pop("tags", []),
            specifications=[],
            views=0,
            sold_count=0,
            is_active=fields.pop("is_active", True),
        )
        product.set_status(status)
        return repo.save(product)

    return _make
