"""Pydantic schemas for challenge (XP) progress."""
from pydantic import BaseModel

from app.schemas.common import UtcDateTime


class ChallengeInSchema(BaseModel):
    xp_points: int | None = 0
    current_challenge_index: int | None = 0
    last_skip_time: UtcDateTime | None = None


class ChallengeOutSchema(BaseModel):
    xp_points: int | None = None
    current_challenge_index: int | None = None
    last_skip_time: UtcDateTime | None = None

    class Config:
        from_attributes = True
