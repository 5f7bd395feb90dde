#!/usr/bin/env python3
"""Load generated listings and buyer requests.

Listings go through the same repositories the marketplace uses, so they
are validated, start as pending and are then approved (or sold) in the
configured proportions.

Targets:
- PostgreSQL (default): tables are created with --create-tables.
- In-memory (--dry-run): nothing is persisted; a summary is printed.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from property_match.config import AppConfig
from property_match.exceptions import PropertyMatchError
from property_match.generators import load_sample_data
from property_match.logging import setup_logging
from property_match.store import (
    InMemoryBuyerRequestRepository,
    InMemoryPropertyRepository,
    ListingDataStore,
    PostgresBuyerRequestRepository,
    PostgresDatabase,
    PostgresPropertyRepository,
)

logger = logging.getLogger(__name__)


def parse_args(config: AppConfig, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load generated listings and buyer requests")
    parser.add_argument(
        "--properties",
        type=int,
        default=50,
        help="Number of listings to generate (default: 50)",
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=20,
        help="Number of buyer requests to generate (default: 20)",
    )
    parser.add_argument(
        "--approve-ratio",
        type=float,
        default=0.7,
        help="Share of listings to approve (default: 0.7)",
    )
    parser.add_argument(
        "--sold-ratio",
        type=float,
        default=0.1,
        help="Share of approved listings to mark sold (default: 0.1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=config.postgres.connection_string,
        help="PostgreSQL connection string (default: from POSTGRES_* / DATABASE_URL)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables and indexes before loading",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load into memory only and print a summary",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = AppConfig.from_env()
    args = parse_args(config, argv)
    setup_logging(args.log_level, config.log_format)
    recent_days = config.listings.recent_days

    if not 0 <= args.approve_ratio <= 1 or not 0 <= args.sold_ratio <= 1:
        logger.error("--approve-ratio and --sold-ratio must be between 0 and 1")
        return 2

    if args.dry_run:
        store = ListingDataStore()
        summary = load_sample_data(
            InMemoryPropertyRepository(store, recent_days=recent_days),
            InMemoryBuyerRequestRepository(store, recent_days=recent_days),
            num_properties=args.properties,
            num_requests=args.requests,
            seed=args.seed,
            approve_ratio=args.approve_ratio,
            sold_ratio=args.sold_ratio,
        )
        print(f"Dry run complete: {store.summary()}")
        print(summary)
        return 0

    try:
        with PostgresDatabase(args.postgres_url) as db:
            if args.create_tables:
                db.create_tables()
            summary = load_sample_data(
                PostgresPropertyRepository(db, recent_days=recent_days),
                PostgresBuyerRequestRepository(db, recent_days=recent_days),
                num_properties=args.properties,
                num_requests=args.requests,
                seed=args.seed,
                approve_ratio=args.approve_ratio,
                sold_ratio=args.sold_ratio,
            )
    except PropertyMatchError as exc:
        logger.error("Load failed: %s", exc)
        return 1

    logger.info(
        "Loaded %d properties (%d approved, %d sold, %d images) and %d buyer requests",
        summary.properties,
        summary.approved,
        summary.sold,
        summary.images,
        summary.buyer_requests,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
