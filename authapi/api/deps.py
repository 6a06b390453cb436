"""Request-scoped dependencies: services, and Bearer authentication for protected routers.

Protected routers attach `require_identity` at router level, so a request that
lacks a valid access token is rejected with 401 before any handler runs. Public
routes (/auth/*, /health) never see it.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from authapi.core.config import get_settings
from authapi.core.database import get_db
from authapi.core.exceptions import InvalidTokenError, MissingCredentialsError
from authapi.core.permissions import Identity
from authapi.core.tokens import TokenCodec
from authapi.repositories.users import UserRepository
from authapi.services.auth import AuthService
from authapi.services.users import UserService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Raw header access (no scheme parsing); also documents the header in OpenAPI.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide codec built once from settings."""
    return TokenCodec.from_settings(get_settings())


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    repo: Annotated[UserRepository, Depends(get_user_repository)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(repo, codec)


def get_user_service(
    repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserService:
    return UserService(repo)


def authenticate(authorization: str | None, codec: TokenCodec) -> Identity:
    """
    Turn an Authorization header value into an Identity.
    Raises MissingCredentialsError if the header is absent or not 'Bearer <token>',
    InvalidTokenError if the token does not verify as an access token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingCredentialsError()
    token = authorization[len(BEARER_PREFIX):]
    claims = codec.parse_access(token)
    return Identity(user_id=claims.subject_id, role=claims.role)


def require_identity(
    request: Request,
    authorization: Annotated[str | None, Depends(authorization_header)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> Identity:
    """Dependency: require a valid Bearer access token; stores and returns the caller's Identity."""
    try:
        identity = authenticate(authorization, codec)
    except (MissingCredentialsError, InvalidTokenError) as e:
        logger.info(
            "Request rejected: unauthenticated",
            extra={"path": request.url.path, "reason": type(e).__name__},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    request.state.identity = identity
    return identity


def current_identity(request: Request) -> Identity | None:
    """Identity attached by require_identity, or None when the route is not protected."""
    identity = getattr(request.state, "identity", None)
    return identity if isinstance(identity, Identity) else None
