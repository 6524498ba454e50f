from app.services.backup import clamp_limit, full_sync
from app.services.community import is_valid_message
from app.services.users import get_or_create_user

__all__ = ["clamp_limit", "full_sync", "get_or_create_user", "is_valid_message"]
