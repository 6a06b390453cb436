"""Signed access/refresh tokens: issue and parse HS256 JWTs carrying subject id and role.

Access and refresh tokens share one claim shape (sub, role, iat, exp) but are
signed with different secrets and have different lifetimes. A token only
verifies under the secret of its own kind, so one kind can never be replayed as
the other. Parse failures of any sort surface as a single InvalidTokenError.
"""

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from authapi.core.config import Settings
from authapi.core.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "role", "iat", "exp")


class TokenKind(str, enum.Enum):
    """Which secret and lifetime a token is bound to."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class Claims:
    """Payload of a verified token. role is a snapshot taken when the token was issued."""

    subject_id: int
    role: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """Issues and verifies tokens. Holds only immutable configuration; safe to share across requests."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("access and refresh secrets must be non-empty")
        if access_secret == refresh_secret:
            raise ValueError("access and refresh secrets must differ")
        if access_ttl <= timedelta(0) or refresh_ttl <= timedelta(0):
            raise ValueError("token lifetimes must be positive")
        self._secrets = {TokenKind.ACCESS: access_secret, TokenKind.REFRESH: refresh_secret}
        self._ttls = {TokenKind.ACCESS: access_ttl, TokenKind.REFRESH: refresh_ttl}
        self._algorithm = algorithm
        self._clock = clock or _utc_now

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        """Build a codec from loaded settings (secrets, TTLs, algorithm)."""
        return cls(
            access_secret=settings.JWT_ACCESS_SECRET.get_secret_value(),
            refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
            algorithm=settings.JWT_ALGORITHM,
        )

    def ttl(self, kind: TokenKind) -> timedelta:
        return self._ttls[kind]

    def issue(self, kind: TokenKind, subject_id: int, role: str) -> str:
        """Sign a token of the given kind with iat=now and exp=now+ttl(kind)."""
        # JWT NumericDate has second precision; truncate so iat/exp round-trip exactly.
        now = self._clock().replace(microsecond=0)
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "role": role,
            "iat": now,
            "exp": now + self._ttls[kind],
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=self._algorithm)

    def issue_access(self, subject_id: int, role: str) -> str:
        return self.issue(TokenKind.ACCESS, subject_id, role)

    def issue_refresh(self, subject_id: int, role: str) -> str:
        return self.issue(TokenKind.REFRESH, subject_id, role)

    def issue_pair(self, subject_id: int, role: str) -> TokenPair:
        """Issue a fresh access token and refresh token for the same identity."""
        return TokenPair(
            access_token=self.issue_access(subject_id, role),
            refresh_token=self.issue_refresh(subject_id, role),
        )

    def parse(self, kind: TokenKind, token: str) -> Claims:
        """
        Verify signature (with the secret for `kind`), structure and validity window.
        Raises InvalidTokenError on any failure without saying which check failed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self._algorithm],
                # The validity window is checked below against this codec's clock.
                options={
                    "require": list(REQUIRED_CLAIMS),
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
            claims = _claims_from_payload(payload)
        except (jwt.PyJWTError, TypeError, ValueError, OverflowError) as e:
            logger.debug("Token rejected", extra={"token_kind": kind.value, "reason": type(e).__name__})
            raise InvalidTokenError() from e

        now = self._clock()
        if now < claims.issued_at or now > claims.expires_at:
            logger.debug("Token rejected", extra={"token_kind": kind.value, "reason": "outside validity window"})
            raise InvalidTokenError()
        return claims

    def parse_access(self, token: str) -> Claims:
        return self.parse(TokenKind.ACCESS, token)

    def parse_refresh(self, token: str) -> Claims:
        return self.parse(TokenKind.REFRESH, token)


def _claims_from_payload(payload: dict[str, Any]) -> Claims:
    role = payload["role"]
    if not isinstance(role, str) or not role:
        raise ValueError("role claim must be a non-empty string")
    sub = payload["sub"]
    if isinstance(sub, bool):
        raise ValueError("sub claim must be an integer id")
    issued_at = payload["iat"]
    expires_at = payload["exp"]
    if not isinstance(issued_at, (int, float)) or not isinstance(expires_at, (int, float)):
        raise ValueError("iat and exp must be NumericDate values")
    return Claims(
        subject_id=int(sub),
        role=role,
        issued_at=datetime.fromtimestamp(issued_at, UTC),
        expires_at=datetime.fromtimestamp(expires_at, UTC),
    )
