from typing import Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for domain errors raised by the services.

    Each subclass fixes the HTTP status and a short machine-readable ``code``
    so the HTTP layer can render it without knowing about the service.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "app_error"
    default_detail = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Resource not found"


class InvalidState(AppError):
    code = "invalid_state"
    default_detail = "Tournament status does not allow team generation"


class InvalidRegistrationCount(AppError):
    code = "invalid_registration_count"
    default_detail = "Invalid number of registrations"


class MissingTeams(AppError):
    code = "missing_teams"
    default_detail = "Semi-final teams not set"


class DrawNotAllowed(AppError):
    code = "draw_not_allowed"
    default_detail = "Semi-final cannot end in a draw"


class ColorConflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "color_conflict"
    default_detail = "Team color already used in this tournament"


class TooManyTeams(AppError):
    code = "too_many_teams"
    default_detail = "Too many teams for tournament"


class AlreadyRegistered(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_registered"
    default_detail = "Already registered"


class EmptyUpdate(AppError):
    code = "empty_update"
    default_detail = "No fields to update"


class TeamNotInMatch(AppError):
    code = "team_not_in_match"
    default_detail = "Scoring team is not in match"


class InvalidPlayer(AppError):
    code = "invalid_player"
    default_detail = "User is not a player"


class EmailInUse(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "email_in_use"
    default_detail = "Email already in use"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_detail = "Invalid credentials"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail)
        self.headers = {"WWW-Authenticate": "Bearer"}
