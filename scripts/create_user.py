"""Create or update a portal login (accounts are provisioned out-of-band).

Usage:
    python scripts/create_user.py admin --email admin@example.com --role admin
"""

from __future__ import annotations

import argparse
import getpass
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.worktime_portal.worktime_portal.core.enums import Role
from src.worktime_portal.worktime_portal.database.bootstrap import upsert_user


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("username")
    parser.add_argument("--email")
    parser.add_argument("--name")
    parser.add_argument("--role", choices=[r.value for r in Role], default=Role.ADMIN.value)
    parser.add_argument("--inactive", action="store_true", help="create the account disabled")
    parser.add_argument("--password", help="omit to be prompted")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Mật khẩu: ")
    if len(password) < 6:
        raise SystemExit("Mật khẩu tối thiểu 6 ký tự")

    settings = importlib.import_module(get_settings_module())
    user_id = upsert_user(
        dict(settings.DB_CONFIG),
        username=args.username,
        email=args.email,
        password=password,
        name=args.name,
        role=Role(args.role),
        is_active=not args.inactive,
    )
    print(f"OK: user '{args.username}' ready (user_id={user_id}, role={args.role})")


if __name__ == "__main__":
    main()
