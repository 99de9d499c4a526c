"""Module: platform_owners.

Out-of-band management of platform owners. There is no HTTP
endpoint for this; run it with database credentials:

    python -m petcare.scripts.platform_owners grant <user_id>
    python -m petcare.scripts.platform_owners revoke <user_id>
"""

import argparse

import structlog

from petcare.core.logging import configure_logging
from petcare.db.session import SessionLocal
from petcare.policy.platform import set_platform_owner

logger = structlog.get_logger(__name__)


def main(argv: list[str] | None = None) -> str:
    parser = argparse.ArgumentParser(description="Grant or revoke platform owner access.")
    parser.add_argument("action", choices=["grant", "revoke"])
    parser.add_argument("user_id")
    args = parser.parse_args(argv)

    session = SessionLocal()
    try:
        outcome = set_platform_owner(session, args.user_id, is_owner=args.action == "grant")
    finally:
        session.close()

    logger.info("platform_owner_updated", user_id=args.user_id, action=args.action, outcome=outcome)
    return outcome


if __name__ == "__main__":
    configure_logging()
    print(main())
