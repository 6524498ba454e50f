"""Pydantic schemas for recovery progress."""
from typing import Any

from pydantic import BaseModel, Field

from app.schemas.common import UtcDateTime


class ProgressInSchema(BaseModel):
    start_date: UtcDateTime | None = None
    goal_days: int | None = 90
    goal_description: str | None = None
    # opaque client records, not validated individually
    check_ins: list[Any] | None = Field(default_factory=list)


class ProgressOutSchema(BaseModel):
    start_date: UtcDateTime | None = None
    goal_days: int | None = None
    goal_description: str | None = None
    check_ins: list[Any] = Field(default_factory=list)

    class Config:
        from_attributes = True
