"""User CRUD. Every route requires a Bearer access token; per-route policies use the permission predicates."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from authapi.api.deps import get_user_service, require_identity
from authapi.core.exceptions import (
    AuthError,
    DuplicateIdentityError,
    InternalError,
    NotFoundError,
)
from authapi.core.permissions import Identity, is_admin, is_moderator, owns_resource
from authapi.schemas.common import ErrorResponse
from authapi.schemas.user import UserCreate, UserResponse, UserShort, UserUpdate
from authapi.services.users import UserService

router = APIRouter(
    dependencies=[Depends(require_identity)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

CurrentIdentity = Annotated[Identity, Depends(require_identity)]
Service = Annotated[UserService, Depends(get_user_service)]


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")


def _to_http(e: AuthError, failure_detail: str) -> HTTPException:
    """Map a service error to the HTTP error the routes expose."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, DuplicateIdentityError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=failure_detail,
    )


@router.post(
    "",
    response_model=UserShort,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_user(body: UserCreate, identity: CurrentIdentity, service: Service) -> UserShort:
    """Create a user (admin only). New users always get role 'user'."""
    if not is_admin(identity):
        raise _forbidden()
    try:
        user = service.create_user(
            username=body.username,
            email=body.email,
            password=body.password,
            age=body.age,
        )
    except (DuplicateIdentityError, InternalError) as e:
        raise _to_http(e, "failed to create user") from e
    return UserShort.model_validate(user)


@router.get("", response_model=list[UserShort], responses={403: {"model": ErrorResponse}})
def list_users(identity: CurrentIdentity, service: Service) -> list[UserShort]:
    """List all users (admin or moderator)."""
    if not (is_admin(identity) or is_moderator(identity)):
        raise _forbidden()
    try:
        users = service.list_users()
    except InternalError as e:
        raise _to_http(e, "failed to get users") from e
    return [UserShort.model_validate(u) for u in users]


@router.get("/me", response_model=UserResponse, responses={404: {"model": ErrorResponse}})
def get_me(identity: CurrentIdentity, service: Service) -> UserResponse:
    """Profile of the authenticated caller."""
    try:
        user = service.get_user(identity.user_id)
    except (NotFoundError, InternalError) as e:
        raise _to_http(e, "failed to get user") from e
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_user(user_id: int, identity: CurrentIdentity, service: Service) -> UserResponse:
    """Full profile by id (admin, moderator, or the user themself)."""
    if not (is_admin(identity) or is_moderator(identity) or owns_resource(identity, user_id)):
        raise _forbidden()
    try:
        user = service.get_user(user_id)
    except (NotFoundError, InternalError) as e:
        raise _to_http(e, "failed to get user") from e
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserShort,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_user(
    user_id: int,
    body: UserUpdate,
    identity: CurrentIdentity,
    service: Service,
) -> UserShort:
    """Replace username, email and age (admin, or the user themself). Role is not editable here."""
    if not (is_admin(identity) or owns_resource(identity, user_id)):
        raise _forbidden()
    try:
        user = service.update_user(
            user_id,
            username=body.username,
            email=body.email,
            age=body.age,
        )
    except (NotFoundError, DuplicateIdentityError, InternalError) as e:
        raise _to_http(e, "failed to update user") from e
    return UserShort.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_user(user_id: int, identity: CurrentIdentity, service: Service) -> Response:
    """Delete a user (admin only)."""
    if not is_admin(identity):
        raise _forbidden()
    try:
        service.delete_user(user_id)
    except (NotFoundError, InternalError) as e:
        raise _to_http(e, "failed to delete user") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
