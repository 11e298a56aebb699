"""Application entrypoint for the AltCredit FastAPI service."""

from typing import Optional

from fastapi import FastAPI
import uvicorn

from .api import build_credit_router
from .core import AppSettings, get_logger, load_settings, setup_logging
from .models.enums import ScoringVariant
from .scoring import ScoringEngine


logger = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and configure a FastAPI application instance."""
    settings = settings or load_settings()
    setup_logging(debug=settings.debug)
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    engine = ScoringEngine.from_settings(settings)
    app.state.scoring_engine = engine
    app.include_router(
        build_credit_router(engine, default_variant=ScoringVariant(settings.default_variant))
    )

    logger.info(
        "Application initialized: %s default_variant=%s",
        settings.app_name,
        settings.default_variant,
    )
    return app


def run() -> None:
    """Start the ASGI server for local development."""
    settings = load_settings()
    try:
        uvicorn.run(
            "altcredit.main:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
        )
    except Exception:
        logger.exception("Failed to start uvicorn server.")
        raise


if __name__ == "__main__":
    run()
