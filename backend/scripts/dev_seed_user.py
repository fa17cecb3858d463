from __future__ import annotations

import asyncio

from sqlalchemy import select

from snapgram.core.config import get_settings
from snapgram.core.security import get_password_hash
from snapgram.db.session import create_schema, get_sessionmaker
from snapgram.models import User

USERNAME = "demo"
EMAIL = "demo@snapgram.local"
PASSWORD = "demo1234"


async def main() -> None:
    settings = get_settings()
    if settings.auto_create_schema:
        await create_schema(settings.database_url)
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await session.execute(select(User.id).where(User.email == EMAIL))
        if existing.first():
            print(f"User {EMAIL} already exists")
            return

        session.add(
            User(
                fullname="Demo User",
                username=USERNAME,
                email=EMAIL,
                hashed_password=get_password_hash(PASSWORD),
                is_active=True,
            )
        )
        await session.commit()
        print(f"Created active user {USERNAME} / {PASSWORD}")


if __name__ == "__main__":
    asyncio.run(main())
