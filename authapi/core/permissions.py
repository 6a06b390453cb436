"""Request identity and the permission predicates handlers compose into route policies."""

import enum
from dataclasses import dataclass


class Role(str, enum.Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as recovered from a verified access token."""

    user_id: int
    role: str


def is_admin(identity: Identity | None) -> bool:
    """True iff the caller's role is exactly 'admin'. False when unauthenticated."""
    return identity is not None and identity.role == Role.ADMIN.value


def is_moderator(identity: Identity | None) -> bool:
    """True iff the caller's role is exactly 'moderator'. False when unauthenticated."""
    return identity is not None and identity.role == Role.MODERATOR.value


def owns_resource(identity: Identity | None, target_id: int) -> bool:
    """True iff the caller is the user identified by target_id. False when unauthenticated."""
    return identity is not None and identity.user_id == target_id
