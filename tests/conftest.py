import os

# Must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_db
from app.core import security
from app.core.database import Base
from app.main import app
from app.models import Registration, RegistrationStatus, Tournament, TournamentStatus, User, UserRole


@pytest.fixture
def engine():
    # One shared in-memory connection so every session sees the same database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.PLAYER, full_name: str = None, email: str = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            email=email or f"player{n}@example.com",
            full_name=full_name or f"Player {n}",
            password_hash="not-a-real-hash",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_tournament(db):
    def _make_tournament(status: TournamentStatus = TournamentStatus.REGISTRATION_OPEN, **kwargs) -> Tournament:
        tournament = Tournament(name=kwargs.pop("name", "Sunday Cup"), status=status, **kwargs)
        db.add(tournament)
        db.commit()
        db.refresh(tournament)
        return tournament

    return _make_tournament


@pytest.fixture
def fill_waiting_pool(db, make_user):
    """Registers ``count`` fresh players as WAITING and returns their ids."""
    def _fill(tournament: Tournament, count: int):
        user_ids = []
        for _ in range(count):
            user = make_user()
            db.add(Registration(tournament_id=tournament.id, user_id=user.id, status=RegistrationStatus.WAITING))
            user_ids.append(user.id)
        db.commit()
        return user_ids

    return _fill


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(make_user):
    admin = make_user(role=UserRole.ADMIN, email="admin@example.com", full_name="Admin")
    return {"Authorization": f"Bearer {security.create_user_token(admin.id, admin.role.value)}"}


@pytest.fixture
def player(make_user):
    return make_user()


@pytest.fixture
def player_headers(player):
    return {"Authorization": f"Bearer {security.create_user_token(player.id, player.role.value)}"}
