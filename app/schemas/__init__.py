from app.schemas.challenge import ChallengeInSchema, ChallengeOutSchema
from app.schemas.common import SuccessSchema
from app.schemas.community import CommunityMessageInSchema, CommunityMessageOutSchema
from app.schemas.craving import CravingInSchema, CravingOutSchema
from app.schemas.progress import ProgressInSchema, ProgressOutSchema
from app.schemas.sync import FullSyncOutSchema

__all__ = [
    "ChallengeInSchema",
    "ChallengeOutSchema",
    "CommunityMessageInSchema",
    "CommunityMessageOutSchema",
    "CravingInSchema",
    "CravingOutSchema",
    "FullSyncOutSchema",
    "ProgressInSchema",
    "ProgressOutSchema",
    "SuccessSchema",
]
