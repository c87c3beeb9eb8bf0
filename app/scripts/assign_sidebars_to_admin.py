"""
Assign sidebars to the admin role. Run from project root:
  python -m app.scripts.assign_sidebars_to_admin [--role-id ROLE_ID] [SIDEBAR_ID ...]
Without sidebar ids every active sidebar except the open ones is assigned.
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal, transaction
from app.core.logging_config import configure_logging
from app.services.rbac import active_sidebar_ids, assign_sidebars_to_role, get_role_id
from app.services.rbac_catalog import OPEN_SIDEBARS

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Assign sidebars to the admin role.")
    parser.add_argument("sidebar_ids", type=int, nargs="*", help="Sidebar ids to assign")
    parser.add_argument("--role-id", type=int, default=None, help="Role id (default: admin role)")
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        with transaction(db, "assign sidebars to admin"):
            role_id = args.role_id or get_role_id(db, settings.ADMIN_ROLE_NAME)
            sidebar_ids = args.sidebar_ids or active_sidebar_ids(
                db, exclude_ids=[sidebar.id for sidebar in OPEN_SIDEBARS]
            )
            if not sidebar_ids:
                logger.warning("No sidebars to assign")
            outcomes = assign_sidebars_to_role(
                db, role_id, sidebar_ids, settings.SYSTEM_ACTOR_ID
            )
    except Exception:
        logger.exception("Assigning sidebars to admin failed")
        return 1
    finally:
        db.close()

    for outcome in outcomes:
        print(outcome.describe())
    print(f"{len(outcomes)} sidebar(s) assigned to admin role.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
