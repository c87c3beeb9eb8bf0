"""
Give every active role except the public role the dashboard sidebar. Run from project root:
  python -m app.scripts.add_dashboard_to_roles [--sidebar-id SIDEBAR_ID]
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal, transaction
from app.core.logging_config import configure_logging
from app.services.rbac import active_role_ids, assign_sidebars_to_role
from app.services.rbac_catalog import DASHBOARD_SIDEBAR_ID

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Add the dashboard sidebar to all non-public roles.")
    parser.add_argument("--sidebar-id", type=int, default=DASHBOARD_SIDEBAR_ID)
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    outcomes = []
    try:
        with transaction(db, "add dashboard to roles"):
            for role_id in active_role_ids(db, exclude_names=[settings.PUBLIC_ROLE_NAME]):
                outcomes.extend(
                    assign_sidebars_to_role(
                        db, role_id, [args.sidebar_id], settings.SYSTEM_ACTOR_ID
                    )
                )
    except Exception:
        logger.exception("Adding dashboard sidebar %s to roles failed", args.sidebar_id)
        return 1
    finally:
        db.close()

    for outcome in outcomes:
        print(outcome.describe())
    print(f"Dashboard added to {len(outcomes)} non-public role(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
