#!/usr/bin/env python3
"""
CLI script to import listings from a CSV export for one owner.

Run from backend directory:
  uv run python scripts/import_listings.py listings.csv --owner USER_ID
  # or
  python scripts/import_listings.py listings.csv --owner USER_ID

Uses backend/.env for DB settings.
"""

import argparse
import sys
from pathlib import Path
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Ensure backend root is on path when run as scripts/import_listings.py
_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

# Load .env before importing config/database
from dotenv import load_dotenv

load_dotenv(_backend_root / ".env")

from sqlalchemy.exc import SQLAlchemyError

from database import Database, ListingRepository
from config import set_db_instance
from api.services.listing_csv_parser import parse_listings_csv


def import_listings(db: Database, content: bytes, owner_id: str) -> int:
    """Parse CSV bytes and create one listing per valid row. Returns the count."""
    listings = parse_listings_csv(content)
    session = db.get_session()
    try:
        repo = ListingRepository(session)
        for data in listings:
            repo.create_listing(owner_id, data)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        session.close()
    return len(listings)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import listings from a CSV file")
    parser.add_argument("csv_path", type=Path, help="CSV file to import")
    parser.add_argument("--owner", required=True, help="User ID that will own the listings")
    args = parser.parse_args(argv)

    print("Listing import: initializing database...")
    db = Database()
    db.create_tables()
    set_db_instance(db)
    try:
        created = import_listings(db, args.csv_path.read_bytes(), args.owner)
    except (OSError, ValueError, SQLAlchemyError) as e:
        print(f"Listing import failed: {e}", file=sys.stderr)
        return 1
    print("Listing import complete.")
    print(f"  created: {created}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
