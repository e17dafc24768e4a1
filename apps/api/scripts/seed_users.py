#!/usr/bin/env python3
"""Register a Firebase user in the users table with a role.

Characters can only be managed by users that exist in the users table with
the 'Jogador' or 'Admin' role.

Usage:
    cd apps/api
    uv run python scripts/seed_users.py <firebase_uid> <email> [--role Admin]
"""

import argparse
import asyncio
import sys

sys.path.insert(0, ".")

from rpg_api.database import AsyncSessionLocal
from rpg_api.models import User
from rpg_api.repositories.user_repository import get_user_by_firebase_uid


async def upsert_user(firebase_uid: str, email: str, role: str) -> None:
    async with AsyncSessionLocal() as session:
        user = await get_user_by_firebase_uid(session, firebase_uid)
        if user is None:
            user = User(firebase_uid=firebase_uid, email=email, role=role)
            session.add(user)
            action = "Created"
        else:
            user.role = role
            action = "Updated"
        await session.commit()
        print(f"{action} user {user.id} ({email}) with role {role}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("firebase_uid")
    parser.add_argument("email")
    parser.add_argument("--role", default="Jogador", choices=["Jogador", "Admin"])
    args = parser.parse_args()
    asyncio.run(upsert_user(args.firebase_uid, args.email, args.role))


if __name__ == "__main__":
    main()
