from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from .user_schemas import UserRead

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenData(BaseModel):
    user_id: Optional[int] = None
    role: Optional[str] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

class RegisterRequest(LoginRequest):
    full_name: str = Field(..., min_length=1)

class AuthResponse(Token):
    user: UserRead
