from __future__ import annotations

import asyncio

from sqlalchemy import func, select

from app.core.config import Settings
from app.db.session import build_engine

AUTH_KEY = "a" * 64
OTHER_KEY = "0123456789abcdef" * 4


def auth_headers(key: str = AUTH_KEY) -> dict[str, str]:
    return {"X-Auth-Key": key}


def count_rows(settings: Settings, model, **filters) -> int:
    """Count rows with a separate engine so the app's pool is left alone."""

    async def _count() -> int:
        engine = build_engine(settings)
        try:
            async with engine.connect() as conn:
                stmt = select(func.count()).select_from(model)
                for column, value in filters.items():
                    stmt = stmt.where(getattr(model, column) == value)
                return (await conn.execute(stmt)).scalar_one()
        finally:
            await engine.dispose()

    return asyncio.run(_count())
