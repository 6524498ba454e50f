"""ChallengeProgress model: gamification state, one row per user."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow


class ChallengeProgress(Base):
    __tablename__ = "challenge_progress"

    auth_key_hash = Column(
        String(64),
        ForeignKey("users.auth_key_hash", ondelete="CASCADE"),
        primary_key=True,
    )
    xp_points = Column(Integer, nullable=True, default=0)
    current_challenge_index = Column(Integer, nullable=True, default=0)
    last_skip_time = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="challenge_progress")
