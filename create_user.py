#!/usr/bin/env python3
"""
Create a user in the Event Hub SQLite database.

The HTTP API has no signup endpoint; use this script to provision
accounts.  The password is stored as a PBKDF2‑HMAC‑SHA256 hash
("salthex$hashhex") and never printed.

Usage:
    python create_user.py --email jane@example.com --name "Jane Doe"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import sys

from event_hub_api.app.core.config import Settings
from event_hub_api.app.core.db import Database
from event_hub_api.app.core.errors import Conflict
from event_hub_api.app.core.security import hash_password
from event_hub_api.app.services.user_service import UserService


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an Event Hub user.")
    ap.add_argument("--email", required=True, help="Unique email of the new user")
    ap.add_argument("--name", required=True, help="Display name")
    ap.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    db = Database.from_settings(Settings.from_env())
    db.init_db()
    try:
        user = asyncio.run(UserService(db).insert(args.email, args.name, hash_password(password)))
    except Conflict as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        sys.exit(2)
    print(f"[+] Created user {user.id}: {user.email}")


if __name__ == "__main__":
    main()
