# todoapp/seed.py
import logging

from sqlalchemy.orm import Session

from todoapp.config import settings
from todoapp.database import Base, engine, SessionLocal
from todoapp.models import User, RoleType
from todoapp.utils.clock import utc_now
from todoapp.utils.security import hash_password

logger = logging.getLogger(__name__)


def seed_admin(db: Session, username: str, password: str) -> bool:
    """Create the default admin account if it is missing. Returns True when created."""
    if db.query(User).filter(User.username == username).first():
        return False

    admin = User(
        username=username,
        password_hash=hash_password(password),
        first_name="Admin",
        last_name="User",
        role=RoleType.ADMIN,
        created_by=0,  # System
        created_date=utc_now(),
    )
    db.add(admin)
    db.commit()
    logger.info("Seeded default admin user %r", username)
    return True


def init_database(bind=None) -> None:
    """Create missing tables and seed initial data"""
    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        logger.info("Database tables are up to date")

        db = SessionLocal(bind=bind)
        try:
            seed_admin(db, settings.SEED["admin_username"], settings.SEED["admin_password"])
        finally:
            db.close()
        logger.info("Database seeding completed")
    except Exception:
        logger.exception("Failed to create tables or seed the database")
        raise
