"""Create the blog tables.

Usage:
  python scripts/init_db.py            # create missing tables
  python scripts/init_db.py --reset    # drop blogPosts/users/emails first

Refuses to reset a production database.
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from blog_backend.config import load_config
from blog_backend.db import init_db


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--reset", action="store_true", help="drop and recreate all tables")
    args = ap.parse_args()

    cfg = load_config()
    if args.reset and cfg.is_production:
        raise SystemExit("Refusing to reset the production database")

    init_db(cfg.DB_PATH, reset=args.reset)
    print(f"DB initialized: {cfg.DB_PATH}")


if __name__ == "__main__":
    main()
