"""Pydantic schemas for craving events."""
from pydantic import BaseModel, Field

from app.schemas.common import UtcDateTime


class CravingInSchema(BaseModel):
    timestamp: UtcDateTime | None = None  # server time when omitted
    intensity: int | None = None
    triggers: list[str] | None = Field(default_factory=list)
    notes: str | None = None
    overcome: bool | None = None


class CravingOutSchema(BaseModel):
    timestamp: UtcDateTime
    intensity: int | None = None
    triggers: list[str] = Field(default_factory=list)
    notes: str | None = None
    overcome: bool | None = None

    class Config:
        from_attributes = True
