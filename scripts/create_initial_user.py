"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users.create_user import create_user
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the VaultDesk API.",
    )
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument("--name", default="Administrator", help="Full name (default: Administrator)")
    parser.add_argument("--department", default="IT", help="Department (default: IT)")
    parser.add_argument("--email", default=None, help="Email address used for notifications")
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Grant administrator privileges to the new account.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            password=password,
            name=args.name,
            department=args.department,
            email=args.email,
            is_admin=args.admin,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Name: {user.name}\n"
            f"  Admin: {'yes' if user.is_admin else 'no'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
