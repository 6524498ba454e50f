"""SQLAlchemy declarative base and model imports for create_all."""
from app.db.session import Base

# Import all models so Base.metadata sees every table
from app.models.challenge import ChallengeProgress  # noqa: F401
from app.models.craving import Craving  # noqa: F401
from app.models.message import AnonymousMessage  # noqa: F401
from app.models.progress import Progress  # noqa: F401
from app.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Progress", "Craving", "ChallengeProgress", "AnonymousMessage"]
