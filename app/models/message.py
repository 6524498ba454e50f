"""AnonymousMessage model: community board post. No link to any user."""
from sqlalchemy import Column, DateTime, Index, Integer, Text

from app.db.session import Base, utcnow


class AnonymousMessage(Base):
    __tablename__ = "anonymous_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    message = Column(Text, nullable=False)
    days_clean = Column(Integer, nullable=False, default=0)
    emoji = Column(Text, nullable=False, default="💪")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


Index("idx_anonymous_messages_created", AnonymousMessage.created_at.desc())
