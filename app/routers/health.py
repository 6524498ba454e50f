"""Liveness and readiness probes."""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.core.errors import DATASTORE_ERRORS
from app.db.session import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "healthy", "timestamp": utcnow().isoformat()}


@router.get("/health/ready")
async def health_ready(request: Request):
    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except DATASTORE_ERRORS:
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse({"error": "Database unavailable"}, status_code=503)
    return {"status": "ready"}
