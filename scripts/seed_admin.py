import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.infrastructure.database import Base, SessionLocal, engine
from app.domain.models.user import User
from app.domain.models.category import Category  # noqa: F401
from app.domain.models.product import Product  # noqa: F401
from app.domain.models.order import Order  # noqa: F401
from app.application.services.auth_service import seed_default_admin
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def seed():
    settings = get_settings()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin = seed_default_admin(SQLAlchemyUserRepository(db, User))
        if admin is None:
            print("Admin user already exists")
            return 0

        print("Admin user created successfully")
        print(f"Phone: {admin.phone}")
        print(f"Password: {settings.ADMIN_PASSWORD}")
        print("Please change the password after first login!")
        return 0
    except Exception as e:
        print(f"Error seeding admin: {e}")
        db.rollback()
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(seed())
