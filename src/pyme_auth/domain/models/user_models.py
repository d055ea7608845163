# schemas.py
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from pyme_auth.domain.entities.user_entity import RoleType

class RegisterRequest(BaseModel):
    business_name: str = Field(min_length=1, max_length=255)
    business_phone: str | None = Field(default=None, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)

class RegisterResponse(BaseModel):
    user_id: int
    email: EmailStr
    role: RoleType
    business_id: int

class UserRead(BaseModel):
    id: int
    email: EmailStr
    role: RoleType
    is_active: bool
    business_id: int
    status_changed_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    email: EmailStr
    role: RoleType
    business_id: int

class TokenPayload(BaseModel):
    sub: str  # email
    role: RoleType
