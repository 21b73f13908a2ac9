# categories.py

"""Category lifecycle: add, rename, delete and list categories.

A category is identified by its title, which posts reference directly.
Renames repoint those posts in the same transaction, deletion is refused while
any post still references the category.
"""

from typing import List, Set

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import (
    CategoryAlreadyExists,
    CategoryInUse,
    CategoryNotFound,
    ServiceError,
    Unexpected,
)
from logger import logger
from models import Category, Post


async def category_exists(session: AsyncSession, title: str) -> bool:
    return await session.get(Category, title) is not None


async def category_titles(session: AsyncSession) -> Set[str]:
    result = await session.execute(select(Category.title))
    return set(result.scalars().all())


async def count_posts_in_category(session: AsyncSession, title: str) -> int:
    stmt = select(func.count()).select_from(Post).where(Post.category == title)
    return (await session.execute(stmt)).scalar_one()


async def add_category(session: AsyncSession, title: str) -> Category:
    if await category_exists(session, title):
        raise CategoryAlreadyExists(f"category '{title}' already exists")

    category = Category(title=title)
    session.add(category)
    try:
        await session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent insert of the same title
        await session.rollback()
        raise CategoryAlreadyExists(f"category '{title}' already exists") from exc

    logger.info(f"Category added: {title}")
    return category


async def _classify_rename_error(session: AsyncSession, old_title: str, new_title: str) -> ServiceError:
    """Work out which constraint a failed rename ran into."""
    if await category_exists(session, new_title):
        return CategoryAlreadyExists(f"category '{new_title}' already exists")
    posts_count = await count_posts_in_category(session, old_title)
    if posts_count:
        return CategoryInUse(f"category '{old_title}' still has {posts_count} posts")
    return Unexpected(f"constraint violation renaming category '{old_title}'")


async def update_category(session: AsyncSession, old_title: str, new_title: str) -> Category:
    """Rename a category and repoint its posts to the new title."""
    category = await session.get(Category, old_title)
    if category is None:
        raise CategoryNotFound(f"category '{old_title}' not found")
    if old_title == new_title:
        return category
    if await category_exists(session, new_title):
        raise CategoryAlreadyExists(f"category '{new_title}' already exists")

    renamed = Category(title=new_title)
    try:
        session.add(renamed)
        await session.flush()
        await session.execute(
            update(Post).where(Post.category == old_title).values(category=new_title)
        )
        await session.delete(category)
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        error = await _classify_rename_error(session, old_title, new_title)
        raise error from exc

    logger.info(f"Category renamed: {old_title} -> {new_title}")
    return renamed


async def delete_category(session: AsyncSession, title: str) -> None:
    category = await session.get(Category, title)
    if category is None:
        raise CategoryNotFound(f"category '{title}' not found")

    posts_count = await count_posts_in_category(session, title)
    if posts_count:
        raise CategoryInUse(f"category '{title}' has {posts_count} posts")

    await session.delete(category)
    try:
        await session.commit()
    except IntegrityError as exc:
        # A post was attached between the check and the delete
        await session.rollback()
        raise CategoryInUse(f"category '{title}' has posts") from exc

    logger.info(f"Category deleted: {title}")


async def get_all_categories(session: AsyncSession) -> List[Category]:
    result = await session.execute(select(Category).order_by(Category.title))
    categories = list(result.scalars().all())
    if not categories:
        raise CategoryNotFound("no categories found")
    return categories
