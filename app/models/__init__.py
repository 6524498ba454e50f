from app.models.user import User
from app.models.progress import Progress
from app.models.craving import Craving
from app.models.challenge import ChallengeProgress
from app.models.message import AnonymousMessage

__all__ = ["User", "Progress", "Craving", "ChallengeProgress", "AnonymousMessage"]
