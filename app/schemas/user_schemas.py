from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole

class UserBase(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1)

class PlayerCreate(UserBase):
    pass

class UserRead(UserBase):
    id: int
    role: UserRole

    class Config:
        from_attributes = True

class PlayerCreated(BaseModel):
    user: UserRead
    # Returned once; only its hash is stored
    generated_password: str
