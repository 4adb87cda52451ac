"""Create the admin user in the blog DB.

Usage:
  python scripts/create_user.py --username alice --password '...'

The HTTP API has no registration endpoint; this is the only way in.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from blog_backend.auth.crud import create_user
from blog_backend.config import load_config
from blog_backend.db import connect, init_db


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--username", required=True)
    ap.add_argument("--password", required=True)
    args = ap.parse_args()

    cfg = load_config()
    init_db(cfg.DB_PATH)

    with connect(cfg.DB_PATH) as conn:
        u = create_user(conn, username=args.username, password=args.password)

    print("Created user:")
    print(u)


if __name__ == "__main__":
    main()
