"""Per-user backup store: progress, cravings and challenge state.

Saves are last-write-wins. Progress and challenge rows are replaced wholesale
on every save with no version check, so the most recent device to sync wins.
Cravings are append-only.
"""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.session import utcnow
from app.db.upsert import insert_for
from app.models.challenge import ChallengeProgress
from app.models.craving import Craving
from app.models.progress import Progress
from app.schemas.challenge import ChallengeInSchema
from app.schemas.craving import CravingInSchema
from app.schemas.progress import ProgressInSchema

logger = logging.getLogger(__name__)


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """Missing or non-positive -> default; anything above maximum is capped."""
    if limit is None or limit <= 0:
        return min(default, maximum)
    return min(limit, maximum)


async def save_progress(db: AsyncSession, auth_key_hash: str, body: ProgressInSchema) -> None:
    values = {
        "start_date": body.start_date,
        "goal_days": body.goal_days,
        "goal_description": body.goal_description,
        "check_ins": body.check_ins or [],
        "updated_at": utcnow(),
    }
    stmt = insert_for(db, Progress).values(auth_key_hash=auth_key_hash, **values)
    stmt = stmt.on_conflict_do_update(index_elements=[Progress.auth_key_hash], set_=values)
    await db.execute(stmt)
    await db.commit()


async def load_progress(db: AsyncSession, auth_key_hash: str) -> Progress | None:
    result = await db.execute(select(Progress).where(Progress.auth_key_hash == auth_key_hash))
    return result.scalar_one_or_none()


async def add_craving(db: AsyncSession, auth_key_hash: str, body: CravingInSchema) -> Craving:
    craving = Craving(
        auth_key_hash=auth_key_hash,
        timestamp=body.timestamp or utcnow(),
        intensity=body.intensity,
        triggers=body.triggers or [],
        notes=body.notes,
        overcome=body.overcome,
    )
    db.add(craving)
    await db.commit()
    return craving


async def list_cravings(db: AsyncSession, auth_key_hash: str, limit: int) -> list[Craving]:
    """Newest first; id breaks ties so equal timestamps keep insertion order reversed."""
    result = await db.execute(
        select(Craving)
        .where(Craving.auth_key_hash == auth_key_hash)
        .order_by(Craving.timestamp.desc(), Craving.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def save_challenges(db: AsyncSession, auth_key_hash: str, body: ChallengeInSchema) -> None:
    values = {
        "xp_points": body.xp_points,
        "current_challenge_index": body.current_challenge_index,
        "last_skip_time": body.last_skip_time,
        "updated_at": utcnow(),
    }
    stmt = insert_for(db, ChallengeProgress).values(auth_key_hash=auth_key_hash, **values)
    stmt = stmt.on_conflict_do_update(index_elements=[ChallengeProgress.auth_key_hash], set_=values)
    await db.execute(stmt)
    await db.commit()


async def load_challenges(db: AsyncSession, auth_key_hash: str) -> ChallengeProgress | None:
    result = await db.execute(
        select(ChallengeProgress).where(ChallengeProgress.auth_key_hash == auth_key_hash)
    )
    return result.scalar_one_or_none()


async def full_sync(
    sessionmaker: async_sessionmaker[AsyncSession],
    auth_key_hash: str,
    cravings_limit: int,
) -> tuple[Progress | None, list[Craving], ChallengeProgress | None]:
    """Run the three reads concurrently, each on its own session.

    Not a snapshot: a write landing between the reads can show up in one and
    not the others. Any failing read fails the whole call and cancels the
    reads still in flight.
    """

    async def _read(fn, *args):
        async with sessionmaker() as db:
            return await fn(db, auth_key_hash, *args)

    tasks = [
        asyncio.ensure_future(_read(load_progress)),
        asyncio.ensure_future(_read(list_cravings, cravings_limit)),
        asyncio.ensure_future(_read(load_challenges)),
    ]
    try:
        progress, cravings, challenges = await asyncio.gather(*tasks)
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            # let cancelled reads close their sessions before returning
            await asyncio.gather(*pending, return_exceptions=True)
    return progress, cravings, challenges
