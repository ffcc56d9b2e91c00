import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import EmailInUse, InvalidCredentials
from app.models import user as user_model
from app.models.user import UserRole
from app.schemas import auth_schemas, user_schemas

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.email == email).first()


def _create_user(db: Session, email: str, full_name: str, password: str, role: UserRole) -> user_model.User:
    if get_user_by_email(db, email):
        raise EmailInUse()

    user = user_model.User(
        email=email,
        full_name=full_name,
        password_hash=security.get_password_hash(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request took the email after the lookup
        db.rollback()
        raise EmailInUse()
    db.refresh(user)
    return user


def _auth_response(user: user_model.User) -> auth_schemas.AuthResponse:
    return auth_schemas.AuthResponse(
        access_token=security.create_user_token(user.id, user.role.value),
        user=user_schemas.UserRead.model_validate(user),
    )


def register(db: Session, request: auth_schemas.RegisterRequest) -> auth_schemas.AuthResponse:
    user = _create_user(db, request.email, request.full_name, request.password, UserRole.PLAYER)
    logger.info("Registered player %s", user.id)
    return _auth_response(user)


def login(db: Session, request: auth_schemas.LoginRequest) -> auth_schemas.AuthResponse:
    user = get_user_by_email(db, request.email)
    if not user or not security.verify_password(request.password, user.password_hash):
        raise InvalidCredentials()
    return _auth_response(user)


def create_player(db: Session, player_in: user_schemas.PlayerCreate) -> Tuple[user_model.User, str]:
    """Admin-created player with a generated password, returned only here."""
    generated_password = security.generate_password()
    user = _create_user(db, player_in.email, player_in.full_name, generated_password, UserRole.PLAYER)
    return user, generated_password


def list_players(db: Session) -> List[user_model.User]:
    return db.query(user_model.User)\
        .filter(user_model.User.role == UserRole.PLAYER)\
        .order_by(user_model.User.created_at.asc(), user_model.User.id.asc())\
        .all()
