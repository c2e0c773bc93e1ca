#!/usr/bin/env python3
"""
Create an admin account, or reset the password and role of an existing one.

Usage:
    python scripts/create_admin.py --email admin@esrent.com --password secret123 \
        --name "Site Admin" --role super_admin

Connection settings come from the environment (or .env), the same as the API.
"""
import argparse
import logging
import sys

from fastapi import HTTPException
from pydantic import ValidationError

from app.core.logging import setup_logging
from app.database.mongo import get_database
from app.services.user_service import UserService

logger = logging.getLogger("scripts.create_admin")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or update an ES Rent admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--role", choices=["admin", "super_admin"], default="admin")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    setup_logging("INFO")
    args = parse_args(argv)
    service = UserService(get_database())
    try:
        user = service.set_password(args.email, args.password, args.name, args.role)
    except (HTTPException, ValidationError) as e:
        print(f"Failed to save {args.email}: {e}")
        return 1
    print(f"Saved {user.role} {user.email} ({user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
