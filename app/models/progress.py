"""Progress model: one row per user, replaced wholesale on every save."""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow

# JSONB on Postgres, plain JSON (stored as text) on SQLite
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Progress(Base):
    __tablename__ = "progress"

    auth_key_hash = Column(
        String(64),
        ForeignKey("users.auth_key_hash", ondelete="CASCADE"),
        primary_key=True,
    )
    start_date = Column(DateTime(timezone=True), nullable=True)
    goal_days = Column(Integer, nullable=True, default=90)
    goal_description = Column(Text, nullable=True)
    # ordered list of client check-in records, stored as-is
    check_ins = Column(JSONDocument, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="progress")
