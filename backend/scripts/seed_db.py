"""CLI script to populate the default alumnos/cursadas into the backend DB.
Usage: python scripts/seed_db.py [--database-url URL]
"""
import sys
import argparse
import pathlib
from typing import Optional
# Ensure `backend/` is on sys.path so `alumnos` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from alumnos import database
from alumnos.config import settings
from alumnos.seed import seed_defaults


def main(database_url: Optional[str] = None):
    """Create the tables if needed and seed them when both are empty.

    Results are printed to stdout for a quick CLI feedback loop.
    """
    url = database_url or settings.DATABASE_URL
    print('Using database:', url)
    database.init_engine(url, echo=settings.SQL_ECHO)
    try:
        database.create_db_and_tables()
        with Session(database.get_engine()) as session:
            if seed_defaults(session):
                print('Default alumnos and cursadas inserted.')
            else:
                print('Nothing inserted (store not empty or seeding failed, see log).')
    finally:
        database.dispose_engine()


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--database-url', help='SQLAlchemy URL; defaults to DATABASE_URL')
    args = parser.parse_args()
    main(database_url=args.database_url)
