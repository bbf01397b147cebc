"""Utility script to create an initial user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from schoolhub.application.use_cases.teachers import create_teacher
from schoolhub.application.use_cases.users import create_user
from schoolhub.domain.entities import UserRole
from schoolhub.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the SchoolHub API.",
    )
    parser.add_argument(
        "--email",
        default="admin@school.org",
        help="E-mail address of the user (default: admin@school.org)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.ADMIN.value,
        help="Role of the new user (default: ADMIN)",
    )
    parser.add_argument("--name", default=None, help="Teacher name; creates a teacher profile")
    parser.add_argument("--department", default=None, help="Department of the teacher profile")
    parser.add_argument("--position", default="Teacher", help="Position of the teacher profile")
    return parser.parse_args()


def main() -> None:
    """Create a user, and optionally its teacher profile, from the command line."""

    args = parse_args()
    role = UserRole(args.role)
    if args.name and role is not UserRole.TEACHER:
        raise SystemExit("Teacher profiles can only be attached to TEACHER users.")
    if args.name and not args.department:
        raise SystemExit("--department is required together with --name.")

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(session, email=args.email, password=password, role=role)
        if args.name:
            create_teacher(
                session,
                user_id=user.id,
                name=args.name,
                department=args.department,
                position=args.position,
            )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.value}\n"
            f"  Teacher profile: {args.name or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
