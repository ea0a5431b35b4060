#!/usr/bin/env python3

"""
Reconciliation job for post and comment reaction counters.
This script:
1. Recomputes like/dislike totals from the reactions table
2. Reports every post or comment whose cached counters differ
3. With --repair, rewrites the drifting counters

Exits with status 1 when drift was found and left unrepaired.
"""

import argparse
import os
import sys
import logging

# Add parent directory to path to import app modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.modules.posts.reactions.schemas.reaction import TARGET_KINDS
from app.modules.posts.reactions.services.counters import reconcile_counters

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Check reaction counters against reaction rows")
    parser.add_argument(
        "--kind",
        choices=TARGET_KINDS,
        default=None,
        help="Only check this target kind (default: all)"
    )
    parser.add_argument(
        "--repair",
        action="store_true",
        help="Overwrite drifting counters with the recomputed totals"
    )
    return parser.parse_args(argv)

def main(argv=None, session_factory=SessionLocal) -> int:
    args = parse_args(argv)
    logger.info("Starting reaction counter reconciliation...")

    db = session_factory()
    try:
        report = reconcile_counters(db, target_kind=args.kind, repair=args.repair)
    except Exception as e:
        db.rollback()
        logger.error(f"Reconciliation failed: {e}")
        raise
    finally:
        db.close()

    logger.info(
        f"Checked {report.checked} targets, {len(report.drifted)} drifted, {report.repaired} repaired"
    )
    if report.drifted and report.repaired < len(report.drifted):
        return 1
    return 0

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
