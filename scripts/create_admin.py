#!/usr/bin/env python3
"""Create the first admin account: create_admin.py <username> <password> <name> <surname>"""

import asyncio
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from schoolhub.core.database import AsyncSessionLocal, close_db_connections
from schoolhub.core.exceptions import DuplicateRecord
from schoolhub.core.security import get_password_hash
from schoolhub.models import Admin
from schoolhub.services.auth_service import AuthService


async def create_admin(username: str, password: str, name: str, surname: str):
    async with AsyncSessionLocal() as db:
        try:
            await AuthService(db).ensure_username_available(username)
        except DuplicateRecord as e:
            print(f"✗ {e.message}")
            return False

        admin = Admin(
            username=username,
            password_hash=get_password_hash(password),
            name=name,
            surname=surname,
        )
        db.add(admin)
        await db.commit()
        print(f"✓ Created admin {username} ({admin.id})")
        return True


async def main(argv):
    try:
        return await create_admin(*argv)
    finally:
        await close_db_connections()


if __name__ == "__main__":
    if len(sys.argv) != 5:
        print(__doc__)
        sys.exit(1)
    ok = asyncio.run(main(sys.argv[1:]))
    sys.exit(0 if ok else 1)
