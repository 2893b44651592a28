"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User, MerchantProfile, DeliveryProfile, Address  # noqa: F401
from app.domain.models.category import Category  # noqa: F401
from app.domain.models.product import Product  # noqa: F401
from app.domain.models.order import Order, OrderItem  # noqa: F401

from app.application.services.auth_service import seed_default_admin
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.admin_users import router as admin_users_router
from app.interfaces.api.admin_products import router as admin_products_router
from app.interfaces.api.admin_categories import router as admin_categories_router
from app.interfaces.api.admin_orders import router as admin_orders_router
from app.interfaces.api.dashboard import router as dashboard_router
from app.interfaces.api.merchant_products import router as merchant_products_router
from app.interfaces.api.products import router as products_router
from app.interfaces.api.categories import router as categories_router
from app.interfaces.api.orders import router as orders_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Favela Market API", env=settings.ENVIRONMENT)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        seed_default_admin(SQLAlchemyUserRepository(db, User))
    finally:
        db.close()

    yield

    logger.info("Favela Market API stopped")


app = FastAPI(
    title="Favela Market API",
    description="Marketplace backend — clients, merchants, delivery personnel and admin back-office",
    version="1.0.0",
    lifespan=lifespan,
)

# Request logging, correlation id and CORS
setup_middleware(app)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(admin_users_router)
app.include_router(admin_products_router)
app.include_router(admin_categories_router)
app.include_router(admin_orders_router)
app.include_router(dashboard_router)
# Merchant routes share the /api/products prefix and must match before /{product_id}
app.include_router(merchant_products_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(orders_router)


@app.get("/")
def root():
    return {
        "name": "Favela Market API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
