"""API routes: per-user backup of progress, cravings and challenges, plus full sync."""
from fastapi import APIRouter, Request

from app.core.errors import datastore_errors
from app.core.security import key_fingerprint
from app.db.session import utcnow
from app.routers.deps import AuthKeyDep, DbDep, SettingsDep
from app.schemas.challenge import ChallengeInSchema, ChallengeOutSchema
from app.schemas.common import SuccessSchema
from app.schemas.craving import CravingInSchema, CravingOutSchema
from app.schemas.progress import ProgressInSchema, ProgressOutSchema
from app.schemas.sync import FullSyncOutSchema
from app.services import backup

router = APIRouter(prefix="/api", tags=["api"])


@router.post("/progress", response_model=SuccessSchema)
async def save_progress(body: ProgressInSchema, auth_key: AuthKeyDep, db: DbDep):
    """Replace the stored progress with this payload."""
    with datastore_errors("Failed to save progress", "Save progress failed for %s", key_fingerprint(auth_key)):
        await backup.save_progress(db, auth_key, body)
    return SuccessSchema()


@router.get("/progress", response_model=ProgressOutSchema | None)
async def load_progress(auth_key: AuthKeyDep, db: DbDep):
    """Stored progress, or null when nothing was saved yet."""
    with datastore_errors("Failed to load progress", "Load progress failed for %s", key_fingerprint(auth_key)):
        progress = await backup.load_progress(db, auth_key)
    if progress is None:
        return None
    return ProgressOutSchema.model_validate(progress)


@router.post("/cravings", response_model=SuccessSchema)
async def save_craving(body: CravingInSchema, auth_key: AuthKeyDep, db: DbDep):
    """Append one craving event. Repeated calls store duplicates."""
    with datastore_errors("Failed to save craving", "Save craving failed for %s", key_fingerprint(auth_key)):
        await backup.add_craving(db, auth_key, body)
    return SuccessSchema()


@router.get("/cravings", response_model=list[CravingOutSchema])
async def load_cravings(
    auth_key: AuthKeyDep,
    db: DbDep,
    settings: SettingsDep,
    limit: int | None = None,
):
    limit = backup.clamp_limit(limit, settings.cravings_default_limit, settings.cravings_max_limit)
    with datastore_errors("Failed to load cravings", "Load cravings failed for %s", key_fingerprint(auth_key)):
        cravings = await backup.list_cravings(db, auth_key, limit)
    return [CravingOutSchema.model_validate(c) for c in cravings]


@router.post("/challenges", response_model=SuccessSchema)
async def save_challenges(body: ChallengeInSchema, auth_key: AuthKeyDep, db: DbDep):
    with datastore_errors(
        "Failed to save challenge progress",
        "Save challenge progress failed for %s",
        key_fingerprint(auth_key),
    ):
        await backup.save_challenges(db, auth_key, body)
    return SuccessSchema()


@router.get("/challenges", response_model=ChallengeOutSchema | None)
async def load_challenges(auth_key: AuthKeyDep, db: DbDep):
    with datastore_errors(
        "Failed to load challenge progress",
        "Load challenge progress failed for %s",
        key_fingerprint(auth_key),
    ):
        challenges = await backup.load_challenges(db, auth_key)
    if challenges is None:
        return None
    return ChallengeOutSchema.model_validate(challenges)


@router.get("/sync/full", response_model=FullSyncOutSchema)
async def full_sync(request: Request, auth_key: AuthKeyDep, settings: SettingsDep):
    """Everything the user has stored, read concurrently. All or nothing."""
    with datastore_errors("Sync failed", "Full sync failed for %s", key_fingerprint(auth_key)):
        progress, cravings, challenges = await backup.full_sync(
            request.app.state.sessionmaker,
            auth_key,
            settings.sync_cravings_limit,
        )
    return FullSyncOutSchema(
        progress=ProgressOutSchema.model_validate(progress) if progress else None,
        cravings=[CravingOutSchema.model_validate(c) for c in cravings],
        challenges=ChallengeOutSchema.model_validate(challenges) if challenges else None,
        synced_at=utcnow(),
    )
