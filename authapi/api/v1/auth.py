"""Public auth endpoints: register, login and refresh. Each returns a fresh token pair."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from authapi.api.deps import get_auth_service
from authapi.core.exceptions import (
    DuplicateIdentityError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from authapi.core.tokens import TokenPair
from authapi.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPairResponse,
)
from authapi.schemas.common import ErrorResponse
from authapi.services.auth import AuthService

router = APIRouter()

# Unknown username and wrong password are indistinguishable to callers.
LOGIN_FAILED_DETAIL = "invalid username or password"


def _token_response(tokens: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
    )


@router.post(
    "/register",
    response_model=TokenPairResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPairResponse:
    """
    Create an account with role 'user' and return access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    try:
        tokens = service.register(
            username=body.username,
            password=body.password,
            email=body.email,
            age=body.age,
        )
    except DuplicateIdentityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to register",
        ) from e
    return _token_response(tokens)


@router.post(
    "/login",
    response_model=TokenPairResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPairResponse:
    """Authenticate with username and password; tokens carry the role stored for the user."""
    try:
        tokens = service.login(body.username, body.password)
    except (NotFoundError, InvalidCredentialsError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=LOGIN_FAILED_DETAIL,
        ) from e
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to login",
        ) from e
    return _token_response(tokens)


@router.post(
    "/refresh",
    response_model=TokenPairResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def refresh(
    body: RefreshRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPairResponse:
    """
    Exchange a refresh token for a new access token and a new refresh token.
    The role is carried over from the refresh token, not re-read from the database.
    """
    try:
        tokens = service.refresh(body.refresh_token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to refresh token",
        ) from e
    return _token_response(tokens)
