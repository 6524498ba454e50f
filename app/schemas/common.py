"""Shared schema types."""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel


def _to_utc(value: datetime) -> datetime:
    # naive values are taken as UTC (SQLite hands them back without tzinfo)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[datetime, AfterValidator(_to_utc)]


class SuccessSchema(BaseModel):
    success: bool = True
