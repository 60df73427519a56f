"""
Create a user (e.g. an extra admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--admin]
Example:
  python -m app.scripts.create_user jane jane@example.com 'a-long-password' --admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import AppError
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.services.users import UserStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Proposal Builder user.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--admin", action="store_true", help="Grant admin rights")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = UserStore(db).create(username, args.email, args.password, is_admin=args.admin)
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    role = "admin" if user.is_admin else "user"
    print(f"Created {role} '{user.username}' (id={user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
