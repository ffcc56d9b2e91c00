from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.database import SessionLocal
from app.models import user as user_model
from app.models.user import UserRole

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(token: str = Depends(security.oauth2_scheme), db: Session = Depends(get_db)) -> user_model.User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_data = security.verify_token(token, credentials_exception)

    # The role claim is informational; the stored role is what counts
    user = db.query(user_model.User).filter(user_model.User.id == token_data.user_id).first()
    if user is None:
        raise credentials_exception
    return user

def require_admin(current_user: user_model.User = Depends(get_current_user)) -> user_model.User:
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return current_user
