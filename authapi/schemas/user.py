"""Request/response schemas for the /users endpoints. No schema exposes password_hash."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from authapi.core.permissions import Role
from authapi.core.security import validate_password_strength


class UserCreate(BaseModel):
    """Admin-created account."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str
    age: int | None = Field(default=None, ge=0, le=150)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


class UserUpdate(BaseModel):
    """Profile update: replaces username, email and age."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    age: int | None = Field(default=None, ge=0, le=150)


class UserShort(BaseModel):
    """User entry for lists and write responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None = None
    age: int | None = None
    role: Role


class UserResponse(UserShort):
    """Full user profile including storage timestamps."""

    created_at: datetime
    updated_at: datetime
