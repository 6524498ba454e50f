"""Pydantic schemas for the anonymous community board."""
from pydantic import BaseModel

from app.schemas.common import UtcDateTime


class CommunityMessageInSchema(BaseModel):
    # length is checked by the route so an empty message is a 400, not a 422
    message: str | None = None
    days_clean: int | None = 0
    emoji: str | None = None


class CommunityMessageOutSchema(BaseModel):
    message: str
    days_clean: int
    emoji: str
    created_at: UtcDateTime

    class Config:
        from_attributes = True
