"""Run the API under uvicorn: `python -m app`."""
import uvicorn

from app.core.config import get_settings


def main() -> None:
    settings = get_settings()
    # SIGTERM: stop accepting, let in-flight requests finish, then run lifespan shutdown
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        proxy_headers=settings.trust_forwarded_for,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
