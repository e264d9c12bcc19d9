"""
Catalog Repository
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import District, Post


async def list_posts(db: AsyncSession) -> list[Post]:
    """All posts, in creation order."""
    result = await db.execute(select(Post).order_by(Post.id))
    return list(result.scalars().all())


async def list_districts(db: AsyncSession) -> list[District]:
    """All districts, alphabetically."""
    result = await db.execute(select(District).order_by(District.name))
    return list(result.scalars().all())


async def get_post(db: AsyncSession, post_id: int) -> Post | None:
    return await db.get(Post, post_id)


async def get_district(db: AsyncSession, district_id: int) -> District | None:
    return await db.get(District, district_id)
