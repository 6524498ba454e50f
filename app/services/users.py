"""Auto-registration: explicit, idempotent get-or-create of the user row behind an auth key."""
import logging

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import key_fingerprint
from app.db.session import utcnow
from app.db.upsert import insert_for
from app.models.user import User

logger = logging.getLogger(__name__)


async def get_or_create_user(db: AsyncSession, auth_key_hash: str) -> bool:
    """Insert the user if unseen, otherwise refresh last_active. Returns True when a row was created."""
    now = utcnow()
    stmt = (
        insert_for(db, User)
        .values(auth_key_hash=auth_key_hash, created_at=now, last_active=now)
        .on_conflict_do_nothing(index_elements=[User.auth_key_hash])
    )
    result = await db.execute(stmt)
    created = result.rowcount == 1
    if not created:
        await db.execute(
            update(User).where(User.auth_key_hash == auth_key_hash).values(last_active=now)
        )
    await db.commit()

    if created:
        logger.info("Registered new user %s", key_fingerprint(auth_key_hash))
    return created
