"""
Bootstrap users and reference data without a login flow.

    python -m shared.data.provision_user create --email admin@example.com --role admin
    python -m shared.data.provision_user token --email admin@example.com
    python -m shared.data.provision_user seed-categories
"""
import argparse
import logging
import sys
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.auth import create_access_token
from shared.core.database import (
    AuthBase, AuthSessionLocal, Base, InventorySessionLocal, auth_engine, inventory_engine)
from shared.models.users import Users
from shared.utils.enums import UserRole

logger = logging.getLogger(__name__)


def provision_user(db: Session, email: str, full_name: str = "",
                   role: str = UserRole.USER.value, verified: bool = True) -> Tuple[Users, bool]:
    """Create the user unless the email is taken. Returns (user, created)."""
    email = email.strip().lower()
    role = UserRole(role).value

    user = db.query(Users).filter(func.lower(Users.email) == email).first()
    if user and not user.is_deleted:
        logger.info("User %s already exists", email)
        return user, False

    if user is None:
        user = Users(email=email)
        db.add(user)
    user.is_deleted = False
    user.full_name = full_name.strip()
    user.role = role
    user.is_verified = verified
    db.commit()
    db.refresh(user)

    logger.info("Provisioned user %s with role %s", email, role)
    return user, True


def token_for_email(db: Session, email: str) -> Optional[str]:
    user = db.query(Users).filter(
        func.lower(Users.email) == email.strip().lower(),
        Users.is_deleted == False
    ).first()
    if not user:
        return None
    return create_access_token(user.token_claims())


def seed_categories(db: Session) -> int:
    # Imported here so the auth-only commands do not register inventory tables
    from inventory_service.app.data.default_categories import DEFAULT_CATEGORIES
    from inventory_service.app.models.categories import Category

    existing = {name.lower() for (name,) in db.query(Category.name).all()}
    added = 0
    for entry in DEFAULT_CATEGORIES:
        if entry["name"].lower() in existing:
            continue
        db.add(Category(**entry))
        added += 1
    db.commit()

    logger.info("Seeded %s categories", added)
    return added


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="provision_user")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="create a user")
    create.add_argument("--email", required=True)
    create.add_argument("--full-name", default="")
    create.add_argument("--role", choices=[r.value for r in UserRole],
                        default=UserRole.USER.value)
    create.add_argument("--unverified", action="store_true")

    token = sub.add_parser("token", help="print an access token for a user")
    token.add_argument("--email", required=True)

    sub.add_parser("seed-categories", help="insert the default categories")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "seed-categories":
        from inventory_service.app.models import categories, items, transactions  # noqa: F401
        Base.metadata.create_all(bind=inventory_engine)
        db = InventorySessionLocal()
        try:
            print(f"Added {seed_categories(db)} categories")
        finally:
            db.close()
        return 0

    AuthBase.metadata.create_all(bind=auth_engine)
    db = AuthSessionLocal()
    try:
        if args.command == "create":
            user, created = provision_user(
                db, args.email, args.full_name, args.role, not args.unverified)
            print(f"{'Created' if created else 'Exists'}: {user.email} ({user.role}) id={user.id}")
            return 0

        token = token_for_email(db, args.email)
        if not token:
            print(f"No active user with email {args.email}", file=sys.stderr)
            return 1
        print(token)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
