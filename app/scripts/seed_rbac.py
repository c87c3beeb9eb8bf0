"""
Seed roles, permission groups, permissions and the admin grant. Run from project root:
  python -m app.scripts.seed_rbac
Safe to re-run: existing rows are reactivated and updated, never duplicated.
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.services.rbac import seed_rbac

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the RBAC catalog (idempotent).")
    parser.add_argument(
        "--actor-id",
        type=int,
        default=settings.SYSTEM_ACTOR_ID,
        help="Value written to created_by/updated_by",
    )
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        outcomes = seed_rbac(db, args.actor_id)
    except Exception:
        logger.exception(
            "RBAC seed failed; the failing step was rolled back, earlier steps were kept"
        )
        return 1
    finally:
        db.close()

    for outcome in outcomes:
        print(outcome.describe())
    created = sum(1 for outcome in outcomes if outcome.created)
    print(f"RBAC seed complete: {created} created, {len(outcomes) - created} updated.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
