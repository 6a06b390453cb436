"""User CRUD for the authenticated /users routes. Authorization is decided by the routes."""

import logging

from authapi.core.exceptions import DuplicateIdentityError, InternalError, NotFoundError
from authapi.core.security import hash_password
from authapi.models.user import User
from authapi.repositories.users import DuplicateError, RecordNotFoundError, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def create_user(
        self,
        username: str,
        email: str | None,
        password: str,
        age: int | None = None,
    ) -> User:
        op = "users.create"
        password_hash = hash_password(password)
        try:
            user = self.repo.create_user(
                username=username,
                password_hash=password_hash,
                email=email,
                age=age,
            )
        except DuplicateError:
            raise DuplicateIdentityError()
        except Exception as e:
            logger.exception("Failed to create user", extra={"op": op})
            raise InternalError(cause=e) from e
        logger.info("User created", extra={"op": op, "user_id": user.id})
        return user

    def get_user(self, user_id: int) -> User:
        try:
            return self.repo.get_by_id(user_id)
        except RecordNotFoundError:
            raise NotFoundError()
        except Exception as e:
            logger.exception("Failed to get user", extra={"op": "users.get", "user_id": user_id})
            raise InternalError(cause=e) from e

    def list_users(self) -> list[User]:
        try:
            return self.repo.list_all()
        except Exception as e:
            logger.exception("Failed to list users", extra={"op": "users.list"})
            raise InternalError(cause=e) from e

    def update_user(
        self,
        user_id: int,
        username: str,
        email: str | None,
        age: int | None,
    ) -> User:
        op = "users.update"
        try:
            user = self.repo.update_by_id(user_id, username=username, email=email, age=age)
        except RecordNotFoundError:
            raise NotFoundError()
        except DuplicateError:
            raise DuplicateIdentityError()
        except Exception as e:
            logger.exception("Failed to update user", extra={"op": op, "user_id": user_id})
            raise InternalError(cause=e) from e
        logger.info("User updated", extra={"op": op, "user_id": user_id})
        return user

    def delete_user(self, user_id: int) -> None:
        op = "users.delete"
        try:
            self.repo.delete_by_id(user_id)
        except RecordNotFoundError:
            raise NotFoundError()
        except Exception as e:
            logger.exception("Failed to delete user", extra={"op": op, "user_id": user_id})
            raise InternalError(cause=e) from e
        logger.info("User deleted", extra={"op": op, "user_id": user_id})
