"""User model: identity is the device-computed auth key hash. Created on first authenticated call."""
from sqlalchemy import Column, DateTime, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.session import Base, utcnow


class User(Base):
    __tablename__ = "users"

    auth_key_hash = Column(String(64), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    last_active = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    security_level = Column(Text, nullable=False, default="standard", server_default="standard")

    progress = relationship("Progress", back_populates="user", uselist=False, passive_deletes=True)
    cravings = relationship("Craving", back_populates="user", passive_deletes=True)
    challenge_progress = relationship("ChallengeProgress", back_populates="user", uselist=False, passive_deletes=True)


Index("idx_users_last_active", User.last_active.desc())
