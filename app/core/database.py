import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite connections are handed between threads by the server's threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session):
    """
    Runs the block as one unit of work on ``db``: commits when it exits
    cleanly, rolls back every write made inside it when anything raises.
    """
    try:
        yield db
        db.commit()
    except Exception as exc:
        db.rollback()
        logger.warning("Rolled back transaction: %s", exc)
        raise
