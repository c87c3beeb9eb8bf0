"""
Create or refresh the open sidebars (Requests, Profile, Dashboard). Run from project root:
  python -m app.scripts.add_open_sidebars
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal, transaction
from app.core.logging_config import configure_logging
from app.services.rbac import seed_sidebars
from app.services.rbac_catalog import OPEN_SIDEBARS

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    argparse.ArgumentParser(description="Create or refresh the open sidebars.").parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        with transaction(db, "add open sidebars"):
            outcomes = seed_sidebars(db, OPEN_SIDEBARS, settings.SYSTEM_ACTOR_ID)
    except Exception:
        logger.exception("Adding open sidebars failed")
        return 1
    finally:
        db.close()

    for outcome in outcomes:
        print(outcome.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
