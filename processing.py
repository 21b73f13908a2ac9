# processing.py

"""Read projections: categories grouped with posts, analytics with words."""

import re
from collections import Counter
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from analytics import get_analytic_by_post
from categories import category_titles
from config import get_settings
from errors import AnalyticNotFound, MissingRole, PostNotFound
from logger import logger
from models import Post
from posts import Visibility, get_post, list_posts
from schemas import (
    AnalyticResponse,
    AnalyticWithWords,
    CategoriesWithPosts,
    PostResponse,
    Role,
    WordStat,
)

# Helper function to clean and count words
def calculate_word_frequency(text: Optional[str]) -> Dict[str, int]:
    if not text:
        return {}
    # Simple cleaning: lowercase and remove non-alphanumeric characters
    words = re.findall(r'\b\w+\b', text.lower())
    return dict(Counter(words))


def build_word_stats(frequency: Dict[str, int], role: Role, public_limit: int) -> List[WordStat]:
    """Most frequent words first. Non-admin readers only get the top `public_limit`."""
    ranked = sorted(frequency.items(), key=lambda item: (-item[1], item[0]))
    if role is not Role.ADMIN:
        ranked = ranked[:public_limit]
    return [WordStat(word=word, count=count) for word, count in ranked]


async def get_analytic_with_words(
    session: AsyncSession,
    post_id: int,
    role: Optional[Role],
    public_limit: Optional[int] = None,
) -> AnalyticWithWords:
    """
    Merge a post's analytic with the word breakdown of the post content.

    The role decides how much of the breakdown is returned; the metrics are the
    same for every role. Private posts are hidden from non-admin readers.
    """
    if role is None:
        raise MissingRole()
    if public_limit is None:
        public_limit = get_settings().public_word_limit

    analytic = await get_analytic_by_post(session, post_id)
    post = await get_post(session, post_id) if analytic is not None else None
    if analytic is None or post is None:
        raise AnalyticNotFound(f"analytic for post {post_id} not found")
    if role is not Role.ADMIN and not post.is_public:
        raise AnalyticNotFound(f"analytic for post {post_id} not found")

    frequency = calculate_word_frequency(post.content)
    metrics = AnalyticResponse.model_validate(analytic).model_dump()
    return AnalyticWithWords(
        **metrics,
        total_words=sum(frequency.values()),
        unique_words=len(frequency),
        words=build_word_stats(frequency, role, public_limit),
    )


def group_posts_by_category(posts: List[Post], known_categories) -> CategoriesWithPosts:
    """Group posts under their category title, skipping stale references."""
    grouped: CategoriesWithPosts = {}
    stale = []
    for post in posts:
        if post.category not in known_categories:
            stale.append(post.id)
            continue
        grouped.setdefault(post.category, []).append(PostResponse.model_validate(post))
    if stale:
        logger.warning(f"Skipped posts with unknown category: {stale}")
    return {title: grouped[title] for title in sorted(grouped)}


async def _categories_with_posts(session: AsyncSession, visibility: Visibility) -> CategoriesWithPosts:
    posts = await list_posts(session, visibility)
    grouped = group_posts_by_category(posts, await category_titles(session))
    if not grouped:
        raise PostNotFound("posts not found")
    return grouped


async def get_categories_with_public_posts(session: AsyncSession) -> CategoriesWithPosts:
    return await _categories_with_posts(session, Visibility.PUBLIC_ONLY)


async def get_categories_with_posts(session: AsyncSession) -> CategoriesWithPosts:
    return await _categories_with_posts(session, Visibility.ALL)
