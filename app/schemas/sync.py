"""Pydantic schema for the full-sync snapshot."""
from pydantic import BaseModel

from app.schemas.challenge import ChallengeOutSchema
from app.schemas.common import UtcDateTime
from app.schemas.craving import CravingOutSchema
from app.schemas.progress import ProgressOutSchema


class FullSyncOutSchema(BaseModel):
    progress: ProgressOutSchema | None
    cravings: list[CravingOutSchema]
    challenges: ChallengeOutSchema | None
    synced_at: UtcDateTime
