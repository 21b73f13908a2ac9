# analytics.py

"""Analytic lifecycle.

An analytic belongs to exactly one post. Checks run in a fixed order:
duplicate post_id first, then that the post exists. The unique constraint on
analytics.post_id is what actually guarantees one analytic per post; the
checks below only fail fast with a precise error.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import (
    AnalyticDependencyNotFound,
    AnalyticNotFound,
    EmptyUpdate,
    PostIDAlreadyExists,
    ServiceError,
    Unexpected,
)
from logger import logger
from models import Analytic
from posts import post_exists
from schemas import AnalyticCreate, AnalyticUpdate


async def get_analytic_by_post(session: AsyncSession, post_id: int) -> Optional[Analytic]:
    stmt = select(Analytic).where(Analytic.post_id == post_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def _check_post_reference(session: AsyncSession, post_id: int) -> None:
    if await get_analytic_by_post(session, post_id) is not None:
        raise PostIDAlreadyExists(f"analytic for post {post_id} already exists")
    if not await post_exists(session, post_id):
        raise AnalyticDependencyNotFound(f"post {post_id} not found")


async def _classify_integrity_error(session: AsyncSession, post_id: int) -> ServiceError:
    """Work out which constraint a failed write ran into."""
    try:
        await _check_post_reference(session, post_id)
    except (PostIDAlreadyExists, AnalyticDependencyNotFound) as exc:
        return exc
    return Unexpected(f"constraint violation writing analytic for post {post_id}")


def validate_update(update: AnalyticUpdate) -> None:
    """Reject an update that sets no field at all."""
    if update.is_empty():
        raise EmptyUpdate()


async def add_analytic(session: AsyncSession, data: AnalyticCreate) -> Analytic:
    await _check_post_reference(session, data.post_id)

    analytic = Analytic(**data.model_dump())
    session.add(analytic)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        error = await _classify_integrity_error(session, data.post_id)
        raise error from exc

    logger.info(f"Analytic {analytic.id} added for post {analytic.post_id}")
    return analytic


async def update_analytic(session: AsyncSession, analytic_id: int, update: AnalyticUpdate) -> Analytic:
    """Apply the fields set in `update`, leaving the others untouched."""
    validate_update(update)

    analytic = await session.get(Analytic, analytic_id)
    if analytic is None:
        raise AnalyticNotFound(f"analytic {analytic_id} not found")

    changes = update.changes()
    new_post_id = changes.get("post_id")
    if new_post_id is not None and new_post_id != analytic.post_id:
        await _check_post_reference(session, new_post_id)

    for field, value in changes.items():
        setattr(analytic, field, value)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if new_post_id is None:
            raise Unexpected(f"constraint violation updating analytic {analytic_id}") from exc
        error = await _classify_integrity_error(session, new_post_id)
        raise error from exc

    logger.info(f"Analytic {analytic_id} updated: {sorted(changes)}")
    return analytic


async def delete_analytic(session: AsyncSession, analytic_id: int) -> None:
    analytic = await session.get(Analytic, analytic_id)
    if analytic is None:
        raise AnalyticNotFound(f"analytic {analytic_id} not found")

    await session.delete(analytic)
    await session.commit()
    logger.info(f"Analytic {analytic_id} deleted")
