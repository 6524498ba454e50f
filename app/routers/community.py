"""Community board routes. No auth key; posting sits behind the strict per-IP limit."""
from fastapi import APIRouter, HTTPException, status

from app.core.errors import datastore_errors
from app.routers.deps import DbDep, SettingsDep
from app.schemas.common import SuccessSchema
from app.schemas.community import CommunityMessageInSchema, CommunityMessageOutSchema
from app.services import community
from app.services.backup import clamp_limit

router = APIRouter(prefix="/api/community", tags=["community"])


@router.post("/message", response_model=SuccessSchema)
async def post_message(body: CommunityMessageInSchema, db: DbDep, settings: SettingsDep):
    if not community.is_valid_message(body.message, settings.community_message_max_length):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid message")

    with datastore_errors("Failed to save message", "Save community message failed"):
        await community.post_message(
            db,
            message=body.message,
            days_clean=body.days_clean or 0,
            emoji=body.emoji or settings.community_default_emoji,
        )
    return SuccessSchema()


@router.get("/messages", response_model=list[CommunityMessageOutSchema])
async def list_messages(db: DbDep, settings: SettingsDep, limit: int | None = None):
    limit = clamp_limit(limit, settings.community_default_limit, settings.community_max_limit)
    with datastore_errors("Failed to load messages", "Load community messages failed"):
        rows = await community.list_messages(db, limit)
    return [CommunityMessageOutSchema.model_validate(r) for r in rows]
