"""Script to initialize the database for local development.

Usage: python scripts/init_db.py [admin-email]
"""

import asyncio
import sys

from sqlalchemy import func, insert, select

from clinic_desk.database import engine
from clinic_desk.models import allowed_users, clinic_locations, metadata


async def init_db(admin_email: str | None = None) -> None:
    """Create all tables, the first clinic location and optionally an admin."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

        location_count = (
            await conn.execute(select(func.count()).select_from(clinic_locations))
        ).scalar_one()
        if location_count == 0:
            await conn.execute(insert(clinic_locations).values(name="Clinic 1"))
            print("✓ Created clinic location 'Clinic 1'")

        if admin_email:
            existing = await conn.execute(
                select(allowed_users.c.id).where(allowed_users.c.email == admin_email.lower())
            )
            if existing.first() is None:
                await conn.execute(
                    insert(allowed_users).values(email=admin_email.lower(), is_admin=True)
                )
                print(f"✓ Added admin {admin_email}")

    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db(sys.argv[1] if len(sys.argv) > 1 else None))
