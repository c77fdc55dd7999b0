#!/usr/bin/env python3
"""
User Management Utility

This script provides utilities to manage API users:
- Create a user and print a token for it
- List all users
- Issue a token for an existing user
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from api.tokens import TokenService
from storage.database import DuplicateUserError, MongoDatabase, UserStore
from utilities.config import config
from utilities.logger import setup_logging


def build_token_service() -> TokenService:
    return TokenService(config.token_secret, config.token_algorithm)


async def create_user(username: str) -> int:
    """Create a user and print its token."""
    print(f"\n👤 CREATING USER: {username}")
    print("=" * 80)

    database = MongoDatabase(config.mongodb_url, config.mongodb_database)
    try:
        db = await database.connect()
        user = await UserStore(db).create(username)
    except DuplicateUserError:
        print(f"❌ User '{username}' already exists")
        return 1
    finally:
        await database.disconnect()

    print(f"✅ User created with id {user.id}")
    print(f"🔑 Token: {build_token_service().issue(user.id)}")
    return 0


async def list_users() -> int:
    """List all users."""
    print("\n📋 ALL USERS")
    print("=" * 80)

    database = MongoDatabase(config.mongodb_url, config.mongodb_database)
    try:
        db = await database.connect()
        users = await UserStore(db).list()
    finally:
        await database.disconnect()

    if not users:
        print("❌ No users found in database")
        return 0

    print(f"✅ Found {len(users)} users:")
    print()
    for user in users:
        print(f"{user.id:5d}. {user.username} (created {user.created_at.isoformat()})")
    return 0


async def issue_token(user_id: int) -> int:
    """Issue a token for an existing user."""
    database = MongoDatabase(config.mongodb_url, config.mongodb_database)
    try:
        db = await database.connect()
        user = await UserStore(db).get(user_id)
    finally:
        await database.disconnect()

    if user is None:
        print(f"❌ No user with id {user_id}")
        return 1

    print(f"🔑 Token for {user.username}: {build_token_service().issue(user.id)}")
    return 0


def print_usage():
    print("Usage: python manage_users.py [create|list|token] [argument]")
    print()
    print("Commands:")
    print("  create <username>  - Create a user and print its token")
    print("  list               - List all users")
    print("  token <user_id>    - Issue a token for an existing user")


async def main(argv) -> int:
    """Main function."""
    if len(argv) < 2:
        print_usage()
        return 1

    command = argv[1].lower()

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug
    )

    if command == "create":
        if len(argv) < 3:
            print("❌ Error: username required for create command")
            return 1
        return await create_user(argv[2])
    elif command == "list":
        return await list_users()
    elif command == "token":
        if len(argv) < 3 or not argv[2].isdigit():
            print("❌ Error: numeric user id required for token command")
            return 1
        return await issue_token(int(argv[2]))
    else:
        print(f"❌ Unknown command: {command}")
        print_usage()
        return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv)))
