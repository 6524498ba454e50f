"""Shared route dependencies: settings, DB session and the auth key gate."""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import datastore_errors
from app.core.security import is_valid_auth_key, key_fingerprint
from app.db.session import get_db
from app.services.users import get_or_create_user


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_auth_key(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> str:
    """Validate the auth key header and make sure its user row exists.

    Shape is checked before the datastore is touched. Any 64-char hex value
    is accepted; the key is registered on first use.
    """
    auth_key = request.headers.get(settings.auth_header_name)
    if not is_valid_auth_key(auth_key, settings.auth_key_length):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authentication")

    with datastore_errors("Authentication failed", "Auth upsert failed for %s", key_fingerprint(auth_key)):
        await get_or_create_user(db, auth_key)
    return auth_key


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DbDep = Annotated[AsyncSession, Depends(get_db)]
AuthKeyDep = Annotated[str, Depends(require_auth_key)]
