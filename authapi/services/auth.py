"""Registration, login and token refresh on top of the user repository and token codec."""

import logging

from authapi.core.exceptions import (
    DuplicateIdentityError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from authapi.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from authapi.core.tokens import TokenCodec, TokenPair
from authapi.repositories.users import DuplicateError, RecordNotFoundError, UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Maps credentials to token pairs. Storage-specific failures never escape this class."""

    def __init__(self, repo: UserRepository, codec: TokenCodec) -> None:
        self.repo = repo
        self.codec = codec

    def register(
        self,
        username: str,
        password: str,
        email: str | None = None,
        age: int | None = None,
    ) -> TokenPair:
        """
        Create a user with the default role and return a fresh token pair for it.
        Raises DuplicateIdentityError if the username or email is taken.
        """
        op = "auth.register"
        password_hash = hash_password(password)
        try:
            user = self.repo.create_user(
                username=username,
                password_hash=password_hash,
                email=email,
                age=age,
            )
        except DuplicateError:
            logger.info("Registration rejected: duplicate identity", extra={"op": op})
            raise DuplicateIdentityError()
        except Exception as e:
            logger.exception("Failed to create user", extra={"op": op})
            raise InternalError(cause=e) from e

        tokens = self._issue_pair(op, user.id, user.role)
        logger.info("User registered", extra={"op": op, "user_id": user.id})
        return tokens

    def login(self, username: str, password: str) -> TokenPair:
        """
        Verify the password against the stored hash and issue tokens bound to the stored role.
        Raises NotFoundError for an unknown username, InvalidCredentialsError on mismatch.
        """
        op = "auth.login"
        try:
            credentials = self.repo.get_credentials_by_username(username)
        except RecordNotFoundError:
            # Pay the same bcrypt cost as a real mismatch so timing does not reveal the username.
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login rejected: unknown username", extra={"op": op})
            raise NotFoundError()
        except Exception as e:
            logger.exception("Failed to load credentials", extra={"op": op})
            raise InternalError(cause=e) from e

        if not verify_password(password, credentials.password_hash):
            logger.info(
                "Login rejected: password mismatch",
                extra={"op": op, "user_id": credentials.id},
            )
            raise InvalidCredentialsError()

        tokens = self._issue_pair(op, credentials.id, credentials.role)
        logger.info("User logged in", extra={"op": op, "user_id": credentials.id})
        return tokens

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a valid refresh token for a new access token and a new refresh token.

        Subject and role come from the refresh token's claims; storage is not consulted,
        so a role change only takes effect once the presented refresh token has expired.
        """
        op = "auth.refresh"
        try:
            claims = self.codec.parse_refresh(refresh_token)
        except InvalidTokenError:
            logger.info("Refresh rejected: invalid refresh token", extra={"op": op})
            raise

        tokens = self._issue_pair(op, claims.subject_id, claims.role)
        logger.info("Tokens refreshed", extra={"op": op, "user_id": claims.subject_id})
        return tokens

    def _issue_pair(self, op: str, subject_id: int, role: str) -> TokenPair:
        try:
            return self.codec.issue_pair(subject_id, role)
        except Exception as e:
            logger.exception("Failed to sign tokens", extra={"op": op, "user_id": subject_id})
            raise InternalError(cause=e) from e
