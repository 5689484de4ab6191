#!/usr/bin/env python3
# create_tables.py
"""
Create the database schema and seed the default admin user.

    python create_tables.py          # create missing tables
    python create_tables.py --reset  # drop everything first
"""

import sys

from todoapp.database import Base, engine, DATABASE_URL
from todoapp.logging_setup import setup_logging
from todoapp.seed import init_database
import todoapp.models  # noqa: F401  (registers the tables on Base.metadata)


def create_tables(reset: bool = False):
    """Create all tables"""
    try:
        if reset:
            # drop_all orders the drops by foreign key dependencies
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Dropped existing tables")

        init_database(engine)
        print(f"✅ All tables created successfully on {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise


if __name__ == "__main__":
    setup_logging()
    print(f"Using database: {DATABASE_URL.split('@')[-1]}")
    create_tables(reset="--reset" in sys.argv)
