"""SQLAlchemy-backed user storage.

Callers only ever see two storage failures: DuplicateError (unique username or
email violated) and RecordNotFoundError (no such row). Any other database error
propagates unchanged.
"""

from typing import NamedTuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authapi.models.user import User


class StorageError(Exception):
    """Base class for failures reported by the user repository."""


class DuplicateError(StorageError):
    """A unique constraint (username or email) was violated."""


class RecordNotFoundError(StorageError):
    """No user matched the lookup."""


class Credentials(NamedTuple):
    """What login needs from storage: id, stored hash and current role."""

    id: int
    password_hash: str
    role: str


class UserRepository:
    """User persistence on one session. Each mutating call commits its own transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_user(
        self,
        username: str,
        password_hash: str,
        email: str | None = None,
        age: int | None = None,
        role: str = "user",
    ) -> User:
        user = User(
            username=username,
            email=email,
            age=age,
            password_hash=password_hash,
            role=role,
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def get_credentials_by_username(self, username: str) -> Credentials:
        row = (
            self.db.query(User.id, User.password_hash, User.role)
            .filter(User.username == username)
            .first()
        )
        if row is None:
            raise RecordNotFoundError(username)
        return Credentials(id=row.id, password_hash=row.password_hash, role=row.role)

    def get_by_id(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise RecordNotFoundError(user_id)
        return user

    def list_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def update_by_id(
        self,
        user_id: int,
        username: str,
        email: str | None,
        age: int | None,
    ) -> User:
        user = self.get_by_id(user_id)
        user.username = username
        user.email = email
        user.age = age
        self._commit()
        self.db.refresh(user)
        return user

    def delete_by_id(self, user_id: int) -> None:
        deleted = self.db.query(User).filter(User.id == user_id).delete()
        if deleted == 0:
            self.db.rollback()
            raise RecordNotFoundError(user_id)
        self.db.commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateError(str(e.orig)) from e
