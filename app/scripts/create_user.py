"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user CONTACT_NUMBER [--full-name NAME] [--email EMAIL] [--role-id ID ...]
Example:
  python -m app.scripts.create_user 9876543210 --full-name "Office Admin" --role-id 1
Without --role-id the user gets the public role.
"""
import argparse
import logging
import sys

from sqlalchemy import select

from app.core.config import settings
from app.core.database import SessionLocal, transaction
from app.core.logging_config import configure_logging
from app.models import User
from app.services.rbac import assign_roles_to_user, resolve_role_ids_or_default

logger = logging.getLogger(__name__)

CONTACT_NUMBER_MAX_LEN = 20


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user (no registration UI).")
    parser.add_argument("contact_number", help="Contact number (unique, up to 20 chars)")
    parser.add_argument("--full-name", default=None)
    parser.add_argument("--email", default=None)
    parser.add_argument("--role-id", type=int, action="append", dest="role_ids", default=None)
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    contact_number = args.contact_number.strip()
    if not contact_number or len(contact_number) > CONTACT_NUMBER_MAX_LEN:
        print("Invalid contact number length.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.scalar(select(User).where(User.contact_number == contact_number))
        if existing is not None:
            print(f"User '{contact_number}' already exists (id={existing.id}).", file=sys.stderr)
            return 1
        with transaction(db, "create user"):
            role_ids = resolve_role_ids_or_default(db, args.role_ids)
            user = User(
                contact_number=contact_number,
                full_name=args.full_name,
                email=args.email,
                created_by=settings.SYSTEM_ACTOR_ID,
                updated_by=settings.SYSTEM_ACTOR_ID,
            )
            db.add(user)
            db.flush()
            outcomes = assign_roles_to_user(db, user.id, role_ids, settings.SYSTEM_ACTOR_ID)
            user_id = user.id
    except Exception:
        logger.exception("Creating user %s failed", contact_number)
        return 1
    finally:
        db.close()

    print(f"Created user '{contact_number}' with id {user_id}.")
    for outcome in outcomes:
        print(outcome.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
