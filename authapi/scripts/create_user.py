"""
Create a user with any role (e.g. the first admin). Run from project root:
  python -m authapi.scripts.create_user USERNAME PASSWORD [--email EMAIL] [--role ROLE]
Example:
  python -m authapi.scripts.create_user admin 'S3cure!pass' --role admin
"""
import argparse
import logging
import sys

from authapi.core.config import settings
from authapi.core.database import session_scope
from authapi.core.permissions import Role
from authapi.core.security import USERNAME_MAX_LEN, hash_password, validate_password_strength
from authapi.repositories.users import DuplicateError, UserRepository

logger = logging.getLogger("authapi.scripts.create_user")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user directly in the database.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8+ chars, lower, upper, digit, symbol)")
    parser.add_argument("--email", default=None, help="Optional email address")
    parser.add_argument(
        "--role",
        default=Role.USER.value,
        choices=[role.value for role in Role],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    try:
        validate_password_strength(args.password)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    with session_scope() as db:
        repo = UserRepository(db)
        try:
            user = repo.create_user(
                username=username,
                password_hash=hash_password(args.password),
                email=args.email,
                role=args.role,
            )
        except DuplicateError:
            print(f"User '{username}' or that email already exists.", file=sys.stderr)
            return 1
    logger.info("User created", extra={"op": "cli.create_user", "user_id": user.id})
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
