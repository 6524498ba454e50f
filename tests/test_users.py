from __future__ import annotations

import asyncio

from sqlalchemy import func, select

from app.db.base import Base
from app.db.session import build_engine, build_sessionmaker
from app.models import Craving, Progress, User
from app.schemas.craving import CravingInSchema
from app.schemas.progress import ProgressInSchema
from app.services import backup
from app.services.users import get_or_create_user
from tests.helpers import AUTH_KEY


async def _with_db(settings, scenario):
    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        return await scenario(build_sessionmaker(engine))
    finally:
        await engine.dispose()


def test_get_or_create_user_is_idempotent(settings):
    async def scenario(sessionmaker):
        async with sessionmaker() as db:
            first = await get_or_create_user(db, AUTH_KEY)
            second = await get_or_create_user(db, AUTH_KEY)
            total = (await db.execute(select(func.count()).select_from(User))).scalar_one()
        return first, second, total

    first, second, total = asyncio.run(_with_db(settings, scenario))
    assert first is True
    assert second is False
    assert total == 1


def test_get_or_create_user_refreshes_last_active(settings):
    async def scenario(sessionmaker):
        async with sessionmaker() as db:
            await get_or_create_user(db, AUTH_KEY)
            before = (await db.execute(select(User.last_active))).scalar_one()
            await asyncio.sleep(0.01)
            await get_or_create_user(db, AUTH_KEY)
            after = (await db.execute(select(User.last_active))).scalar_one()
            created = (await db.execute(select(User.created_at))).scalar_one()
        return before, after, created

    before, after, created = asyncio.run(_with_db(settings, scenario))
    assert after > before
    assert created == before


def test_deleting_user_cascades_to_owned_rows(settings):
    async def scenario(sessionmaker):
        async with sessionmaker() as db:
            await get_or_create_user(db, AUTH_KEY)
            await backup.save_progress(db, AUTH_KEY, ProgressInSchema(goal_days=30))
            await backup.add_craving(db, AUTH_KEY, CravingInSchema(intensity=4))
            user = await db.get(User, AUTH_KEY)
            await db.delete(user)
            await db.commit()
            progress = (await db.execute(select(func.count()).select_from(Progress))).scalar_one()
            cravings = (await db.execute(select(func.count()).select_from(Craving))).scalar_one()
        return progress, cravings

    assert asyncio.run(_with_db(settings, scenario)) == (0, 0)
