# posts.py

"""Read-only access to posts for dependency checks and category aggregates."""

from enum import Enum
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Post


class Visibility(str, Enum):
    ALL = "all"
    PUBLIC_ONLY = "public_only"


async def get_post(session: AsyncSession, post_id: int) -> Optional[Post]:
    return await session.get(Post, post_id)


async def post_exists(session: AsyncSession, post_id: int) -> bool:
    stmt = select(Post.id).where(Post.id == post_id)
    return (await session.execute(stmt)).scalar_one_or_none() is not None


async def list_posts(session: AsyncSession, visibility: Visibility = Visibility.ALL) -> List[Post]:
    """Posts ordered by id, each carrying its category title."""
    stmt = select(Post)
    if visibility is Visibility.PUBLIC_ONLY:
        stmt = stmt.where(Post.is_public.is_(True))
    result = await session.execute(stmt.order_by(Post.id))
    return list(result.scalars().all())
