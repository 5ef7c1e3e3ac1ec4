from sqlalchemy import text
from database import engine
import sys

def migrate():
    """Run migration to add latitude and longitude fields to organizations table"""
    print("Starting migration: Adding latitude and longitude to organizations...")

    try:
        with engine.connect() as conn:
            # Start transaction
            trans = conn.begin()

            try:
                if engine.url.drivername == 'sqlite':
                    for col in ["latitude", "longitude"]:
                        result = conn.execute(text(f"SELECT COUNT(*) FROM pragma_table_info('organizations') WHERE name = '{col}'"))
                        if result.scalar() == 0:
                            print(f"Adding {col} column...")
                            conn.execute(text(f"ALTER TABLE organizations ADD COLUMN {col} FLOAT"))
                        else:
                            print(f"[OK] {col} column already exists")

                else:
                    # PostgreSQL
                    for col in ["latitude", "longitude"]:
                        conn.execute(text(f"ALTER TABLE organizations ADD COLUMN IF NOT EXISTS {col} DOUBLE PRECISION"))
                        print(f"[OK] {col} column present")

                # Commit transaction
                trans.commit()
                print("\n[SUCCESS] Migration completed successfully!")

            except Exception:
                trans.rollback()
                raise

    except Exception as e:
        print(f"\n[ERROR] Migration failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    migrate()
