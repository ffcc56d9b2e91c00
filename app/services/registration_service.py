from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AlreadyRegistered, NotFound
from app.models import registration as registration_model
from app.models import tournament as tournament_model
from app.models import user as user_model
from app.models.registration import RegistrationStatus


def _ensure_tournament_exists(db: Session, tournament_id: int):
    exists = db.query(tournament_model.Tournament.id).filter(tournament_model.Tournament.id == tournament_id).first()
    if not exists:
        raise NotFound("Tournament not found")


def _get_registration(db: Session, tournament_id: int, user_id: int):
    return db.query(registration_model.Registration).filter(
        registration_model.Registration.tournament_id == tournament_id,
        registration_model.Registration.user_id == user_id,
    ).first()


def register(db: Session, tournament_id: int, user_id: int) -> RegistrationStatus:
    """
    Puts the user in the tournament's waiting pool. A cancelled registration
    is reopened rather than duplicated.
    """
    _ensure_tournament_exists(db, tournament_id)

    existing = _get_registration(db, tournament_id, user_id)
    if existing and existing.status != RegistrationStatus.CANCELLED:
        raise AlreadyRegistered()

    if existing:
        existing.status = RegistrationStatus.WAITING
    else:
        db.add(registration_model.Registration(
            tournament_id=tournament_id,
            user_id=user_id,
            status=RegistrationStatus.WAITING,
        ))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (tournament, user) pair
        db.rollback()
        raise AlreadyRegistered()
    return RegistrationStatus.WAITING


def unregister(db: Session, tournament_id: int, user_id: int) -> RegistrationStatus:
    _ensure_tournament_exists(db, tournament_id)

    existing = _get_registration(db, tournament_id, user_id)
    if not existing:
        raise NotFound("Registration not found")

    existing.status = RegistrationStatus.CANCELLED
    db.commit()
    return RegistrationStatus.CANCELLED


def waiting_user_ids(db: Session, tournament_id: int) -> List[int]:
    """User ids in the waiting pool, in registration order."""
    rows = db.query(registration_model.Registration.user_id).filter(
        registration_model.Registration.tournament_id == tournament_id,
        registration_model.Registration.status == RegistrationStatus.WAITING,
    ).order_by(
        registration_model.Registration.created_at.asc(),
        registration_model.Registration.id.asc(),
    ).all()
    return [row.user_id for row in rows]


def waiting_pool(db: Session, tournament_id: int) -> List[user_model.User]:
    return db.query(user_model.User)\
        .join(registration_model.Registration, registration_model.Registration.user_id == user_model.User.id)\
        .filter(
            registration_model.Registration.tournament_id == tournament_id,
            registration_model.Registration.status == RegistrationStatus.WAITING,
        )\
        .order_by(registration_model.Registration.created_at.asc(), registration_model.Registration.id.asc())\
        .all()
