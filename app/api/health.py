from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.localization import ResourceUnavailable

# Health router kept prefix-free to expose exactly /health and /health/ready
router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
def health() -> dict:
    """Return a simple OK payload to indicate the app is alive."""
    return {"status": "ok"}


@router.get("/health/ready", summary="Readiness probe")
def ready(request: Request):
    """
    Ready when the default culture's resource loads.
    Also lists the cultures that have a resource file on disk.
    """
    engine = request.app.state.localization
    available = [c.name for c in engine.store.available_cultures()]
    try:
        engine.store.load(engine.default_culture)
    except ResourceUnavailable as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "ready": False, "detail": str(exc), "cultures": available},
        )
    return {"status": "ready", "ready": True, "cultures": available}
