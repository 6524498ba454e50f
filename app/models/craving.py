"""Craving model: append-only log, never updated after insert."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow
from app.models.progress import JSONDocument


class Craving(Base):
    __tablename__ = "cravings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    auth_key_hash = Column(
        String(64),
        ForeignKey("users.auth_key_hash", ondelete="CASCADE"),
        nullable=False,
    )
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    intensity = Column(Integer, nullable=True)
    triggers = Column(JSONDocument, nullable=False, default=list)  # list of labels
    notes = Column(Text, nullable=True)
    overcome = Column(Boolean, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="cravings")


Index("idx_cravings_auth", Craving.auth_key_hash)
Index("idx_cravings_timestamp", Craving.timestamp.desc())
