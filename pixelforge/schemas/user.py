import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from pixelforge.core.security import BCRYPT_MAX_BYTES, password_fits
from pixelforge.schemas.enums import Role


def _check_password_bytes(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return value


class UserRef(BaseModel):
    """Minimal user reference embedded in project and document payloads."""

    id: uuid.UUID
    username: str

    model_config = {"from_attributes": True}


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    role: Role = Role.DEVELOPER

    model_config = {"str_strip_whitespace": True}


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=BCRYPT_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class UserRead(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberRead(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    role: Role

    model_config = {"from_attributes": True}


class CurrentUser(BaseModel):
    """Identity decoded from a bearer token."""

    id: uuid.UUID
    username: str
    role: Role


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserRead


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=BCRYPT_MAX_BYTES)

    @field_validator("new_password")
    @classmethod
    def new_password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)
