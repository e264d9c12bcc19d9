"""
Seed Catalog

Loads the Punjab districts and the advertised posts used by the signup and
profile forms. Safe to run repeatedly; existing rows are left alone.

Usage:
    cd apps/api
    python scripts/seed_catalog.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobportal.core.database import async_session_maker, close_db
from jobportal.modules.catalog.seed import seed_catalog


async def main() -> None:
    async with async_session_maker() as db:
        district_count, post_count = await seed_catalog(db)

    print("Catalog seeded successfully!")
    print(f"  Districts added: {district_count}")
    print(f"  Posts added: {post_count}")

    await close_db()


if __name__ == "__main__":
    asyncio.run(main())
