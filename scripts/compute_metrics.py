"""Compute metrics for all stored activities.

Usage:
    python -m scripts.compute_metrics           # Compute new metrics
    python -m scripts.compute_metrics --force   # Recompute all metrics
    python -m scripts.compute_metrics --quiet   # Suppress output
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from db.models import get_engine, get_session, init_db
from metrics.compute import run_full_computation


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger from --log-level or LOG_LEVEL (default WARNING)."""
    log_level = (level or os.environ.get("LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compute activity metrics (xPower Swim, SwimScore, TSS, TriScore)"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Recompute all metrics (default: only compute missing)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="Path to database file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or WARNING)",
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    engine = get_engine(args.db)
    init_db(engine)
    session = get_session(engine)

    try:
        stats = run_full_computation(
            session,
            force=args.force,
            quiet=args.quiet,
        )

        if not args.quiet:
            print()
            print("=" * 50)
            print("Computation Summary")
            print("=" * 50)
            print(f"Activities processed: {stats['activities_processed']}")
            print(f"Activities skipped: {stats['activities_skipped']}")

            if stats["errors"]:
                print(f"Errors: {len(stats['errors'])}")
                for error in stats["errors"][:5]:
                    print(f"  - {error}")
                if len(stats["errors"]) > 5:
                    print(f"  ... and {len(stats['errors']) - 5} more")

            if stats["summary"]:
                print()
                print("Across activities:")
                for symbol, value in stats["summary"].items():
                    print(f"  {symbol}: {value:.1f}")

    finally:
        session.close()

    return 1 if stats["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
