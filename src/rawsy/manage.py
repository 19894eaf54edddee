"""Rawsy database management CLI.

Creates and drops the aggregate tables of the SQL database provider. The
database is taken from ``--database-uri`` or, by default, ``RAWSY_DATABASE_URI``.

Usage:
    python -m rawsy.manage setup-db   # Create all tables
    python -m rawsy.manage drop-db    # Drop all tables
"""

import argparse
import sys

from rawsy.config import get_settings
from rawsy.domain import init_domain, use_database
from rawsy.utils.db import drop_db, setup_db


def _init(database_uri=None):
    uri = database_uri or get_settings().database_uri
    if not uri:
        print("No database configured: pass --database-uri or set RAWSY_DATABASE_URI.")
        sys.exit(1)

    print("Initializing rawsy domain...")
    domain = init_domain()
    use_database(uri)
    return domain


def setup_database(database_uri=None):
    """Create the aggregate tables."""
    domain = _init(database_uri)
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_database(database_uri=None):
    """Drop the aggregate tables."""
    domain = _init(database_uri)
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Rawsy database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("--database-uri", help="SQLAlchemy URL (default: RAWSY_DATABASE_URI)")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database(args.database_uri)
    elif args.command == "drop-db":
        drop_database(args.database_uri)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
