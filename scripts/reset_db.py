import argparse
import sys
from pathlib import Path

CURRENT_DIR = Path(__file__).resolve().parent
ROOT_DIR = CURRENT_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pixelforge.core.settings import get_settings  # noqa: E402
from pixelforge.db import Database  # noqa: E402
from pixelforge.services.bootstrap import ensure_default_admin  # noqa: E402


def reset_database(seed_admin: bool = True) -> None:
    settings = get_settings()
    database = Database(settings.db_url)

    if database.sqlite_path:
        path = Path(database.sqlite_path)
        database.dispose()
        if path.exists():
            print(f"[reset_db] Removing existing sqlite file: {path}")
            path.unlink()
        else:
            print(f"[reset_db] No existing sqlite file at {path}, skipping delete.")
    else:
        print("[reset_db] Non-sqlite database configured, dropping tables instead.")
        database.drop_all()

    print("[reset_db] Creating database schema...")
    database.create_all()

    if seed_admin:
        with database.session() as db:
            if ensure_default_admin(db, settings) is None:
                print("[reset_db] ADMIN_PASSWORD is not set, no administrator created.")
            else:
                print(f"[reset_db] Administrator '{settings.admin_username}' is ready.")
    database.dispose()
    print("[reset_db] Done.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reset local development database.")
    parser.add_argument(
        "--no-admin",
        action="store_true",
        help="Reset schema without creating the default administrator.",
    )
    args = parser.parse_args()
    reset_database(seed_admin=not args.no_admin)
