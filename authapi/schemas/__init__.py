"""Pydantic request/response schemas."""

from authapi.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPairResponse,
)
from authapi.schemas.common import ErrorResponse
from authapi.schemas.health import HealthResponse
from authapi.schemas.user import (
    Role,
    UserCreate,
    UserResponse,
    UserShort,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "Role",
    "TokenPairResponse",
    "UserCreate",
    "UserResponse",
    "UserShort",
    "UserUpdate",
]
