#!/usr/bin/env python3
"""Print every property in the database with a breakdown by status.

Handy when listings are missing from the public pages: only approved
properties are shown there.
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from property_match.config import AppConfig
from property_match.exceptions import StoreUnavailableError
from property_match.logging import configure_logging
from property_match.store import PostgresDatabase, PostgresPropertyRepository


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = AppConfig.from_env()
    parser = argparse.ArgumentParser(description="Check properties in the listing database")
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=config.postgres.connection_string,
        help="PostgreSQL connection string (default: from POSTGRES_* / DATABASE_URL)",
    )
    args = parser.parse_args(argv)
    configure_logging(config)

    print("Checking all properties in database...\n")
    try:
        with PostgresDatabase(args.postgres_url) as db:
            properties = PostgresPropertyRepository(db).get_all()
    except StoreUnavailableError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Total properties in database: {len(properties)}\n")
    if not properties:
        print("No properties found in database!")
        print("\nYou need to:")
        print('1. Add properties through the "Submit Property" page, OR')
        print("2. Load sample data with scripts/load_listings.py")
        return 0

    print("Properties breakdown by status:")
    for status, count in Counter(p.status.value for p in properties).most_common():
        print(f"  {status}: {count}")

    print("\nProperty details:")
    for idx, prop in enumerate(properties, start=1):
        print(f"{idx}. {prop.title} - Status: {prop.status.value} - ID: {prop.property_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
