#!/usr/bin/env python3
"""
Issue a bearer token for an existing Event Hub user.

Looks the user up by email (or takes an explicit id), signs a token
with SECRET_KEY from the environment and prints it.  Intended for
local development and manual testing of protected endpoints.

Usage:
    python create_token.py --email admin@example.com
    python create_token.py --user-id 1 --minutes 60
"""

import argparse
import asyncio
import sys

from event_hub_api.app.core.config import Settings
from event_hub_api.app.core.db import Database
from event_hub_api.app.core.security import create_access_token
from event_hub_api.app.services.user_service import UserService


async def resolve_user_id(users: UserService, email: str) -> int | None:
    user = await users.get_by_email(email)
    return user.id if user else None


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue an Event Hub bearer token.")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--email", help="Email of the user the token is issued to")
    target.add_argument("--user-id", type=int, help="Id of the user the token is issued to")
    ap.add_argument("--minutes", type=int, help="Token lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)")
    args = ap.parse_args()

    settings = Settings.from_env()
    user_id = args.user_id
    if args.email:
        db = Database.from_settings(settings)
        db.init_db()
        user_id = asyncio.run(resolve_user_id(UserService(db), args.email))
        if user_id is None:
            print(f"[!] No user found with email: {args.email}", file=sys.stderr)
            sys.exit(2)

    minutes = args.minutes or settings.access_token_expire_minutes
    print(create_access_token({"sub": user_id}, settings.secret_key, expires_in=minutes * 60))


if __name__ == "__main__":
    main()
