"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from authapi.core.security import validate_password_strength


class RegisterRequest(BaseModel):
    """New account. The role is never taken from the request; new users get 'user'."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., description="Password (8+ chars, lower, upper, digit, symbol)")
    email: EmailStr | None = Field(default=None, description="Optional email address")
    age: int | None = Field(default=None, ge=0, le=150, description="Optional age")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


class LoginRequest(BaseModel):
    """Credentials for login. Any role field sent by the client is ignored."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RefreshRequest(BaseModel):
    """Refresh token previously returned by register, login or refresh."""

    refresh_token: str = Field(..., min_length=1, description="JWT refresh token")


class TokenPairResponse(BaseModel):
    """Access and refresh tokens returned after register, login or refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
