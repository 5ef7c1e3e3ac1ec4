"""
Create tables, seed the default service categories and optionally
import organizations from a CSV file.

Usage (from Backend/):
    python -m scripts.init_db [organizations.csv]
"""
from database import engine, Base, SessionLocal
from crud import seed_default_categories
from services.import_service import parse_organizations_csv, import_organizations
import sys

import app_models  # noqa: F401  (registers tables on Base.metadata)


def init_db(csv_path=None):
    Base.metadata.create_all(bind=engine)
    print("Tables created")

    db = SessionLocal()
    try:
        seeded = seed_default_categories(db)
        print(f"Seeded {seeded} service categories")

        if csv_path:
            with open(csv_path, "r", encoding="utf-8-sig") as f:
                rows, errors = parse_organizations_csv(f.read())

            for err in errors:
                print(f"Row {err['row']}, {err['field']}: {err['message']}")

            result = import_organizations(db, rows)
            print(f"Imported {result['imported']} organizations ({result['failed']} failed)")
    finally:
        db.close()


if __name__ == "__main__":
    init_db(sys.argv[1] if len(sys.argv) > 1 else None)
