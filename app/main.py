import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import health, localization
from app.core.config import Settings, get_settings
from app.core.logging_config import configure_logging
from app.localization import (
    Culture,
    FormatMismatch,
    LocalizationCache,
    LocalizationEngine,
    ResourceStore,
    ResourceUnavailable,
    known_cultures,
)
from app.middleware.locale import LocaleMiddleware

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> LocalizationEngine:
    """Wire resource store, cache and default culture from settings."""
    store = ResourceStore(settings.RESOURCES_DIR, settings.RESOURCE_EXTENSION)
    cache = LocalizationCache(
        settings.CACHE_NAMESPACE,
        ttl_seconds=settings.CACHE_TTL_SECONDS,
        max_entries=settings.CACHE_MAX_ENTRIES,
    )
    return LocalizationEngine(store, cache, Culture.parse(settings.DEFAULT_CULTURE))


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory used by production runners and tests.

    It wires logging, the localization engine, the locale middleware and
    all API routers.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG)

    engine = build_engine(settings)
    known = known_cultures(
        settings.SUPPORTED_CULTURES,
        accept_any=settings.ACCEPT_ANY_KNOWN_CULTURE,
    )
    app.state.settings = settings
    app.state.localization = engine
    supported: list[str] | str = "any"
    if not settings.ACCEPT_ANY_KNOWN_CULTURE:
        supported = sorted(c.name for c in known | {engine.default_culture})
    logger.info(
        "Localization ready: default=%s, supported=%s, resources=%s",
        engine.default_culture,
        supported,
        engine.store.base_dir,
    )

    # Middleware added last runs first: CORS wraps the locale middleware.
    app.add_middleware(LocaleMiddleware, default=engine.default_culture, known=known)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ResourceUnavailable)
    async def _resource_unavailable(request: Request, exc: ResourceUnavailable) -> JSONResponse:
        logger.warning("Resource unavailable: %s", exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(FormatMismatch)
    async def _format_mismatch(request: Request, exc: FormatMismatch) -> JSONResponse:
        logger.error("Format mismatch: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    # Routers
    app.include_router(health.router)
    app.include_router(localization.router)

    @app.get("/")
    def root() -> dict:
        """Service info with the cultures the locale middleware accepts."""
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "default_culture": engine.default_culture.name,
            "supported_cultures": supported,
        }

    return app


# Default application instance used by tests and ASGI servers.
app = create_app()
