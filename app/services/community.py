"""Anonymous community board. Posts carry no identity and cannot be edited or removed through the API."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.message import AnonymousMessage


def is_valid_message(message: str | None, max_length: int = 500) -> bool:
    return bool(message) and len(message) <= max_length


async def post_message(db: AsyncSession, message: str, days_clean: int, emoji: str) -> AnonymousMessage:
    row = AnonymousMessage(message=message, days_clean=days_clean, emoji=emoji)
    db.add(row)
    await db.commit()
    return row


async def list_messages(db: AsyncSession, limit: int) -> list[AnonymousMessage]:
    result = await db.execute(
        select(AnonymousMessage)
        .order_by(AnonymousMessage.created_at.desc(), AnonymousMessage.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
