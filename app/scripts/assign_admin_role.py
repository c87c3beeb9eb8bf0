"""
Assign the admin role to a user. Run from project root:
  python -m app.scripts.assign_admin_role USER_ID [--role-id ROLE_ID]
Without --role-id the role named ADMIN_ROLE_NAME is used.
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal, transaction
from app.core.logging_config import configure_logging
from app.services.rbac import assign_roles_to_user, get_role_id

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Assign the admin role to a user.")
    parser.add_argument("user_id", type=int, help="Id of the user to promote")
    parser.add_argument("--role-id", type=int, default=None, help="Role id (default: admin role)")
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        with transaction(db, "assign admin role"):
            role_id = args.role_id or get_role_id(db, settings.ADMIN_ROLE_NAME)
            outcomes = assign_roles_to_user(db, args.user_id, [role_id], settings.SYSTEM_ACTOR_ID)
    except Exception:
        logger.exception("Assigning admin role to user %s failed", args.user_id)
        return 1
    finally:
        db.close()

    for outcome in outcomes:
        if outcome.created:
            print(f"Assigned {outcome.key}")
        else:
            print(f"Already assigned (reactivated) {outcome.key}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
