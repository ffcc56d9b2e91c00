"""
Creates the tables, the configured admin account and a first tournament.

    python -m app.seed

Safe to run repeatedly: existing rows are left alone.
"""
import logging

from app.core import security
from app.core.config import settings
from app.core.database import SessionLocal
from app.models import Tournament, TournamentStatus, User, UserRole, create_tables

logger = logging.getLogger(__name__)


def seed(db) -> None:
    admin = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
    if admin:
        logger.info("Admin user already exists.")
    else:
        db.add(User(
            email=settings.ADMIN_EMAIL,
            full_name=settings.ADMIN_FULL_NAME,
            password_hash=security.get_password_hash(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        ))
        logger.info("Created admin user %s.", settings.ADMIN_EMAIL)

    if db.query(Tournament).first():
        logger.info("Tournament already exists.")
    else:
        db.add(Tournament(name="Five-a-side Tourney 1", status=TournamentStatus.REGISTRATION_OPEN))
        logger.info("Created default tournament.")

    db.commit()


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)
    create_tables()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
