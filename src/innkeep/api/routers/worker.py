"""Worker/internal routes (APP_ROLE=worker)."""

from fastapi import APIRouter

from innkeep.api.routes import tasks_night_audit

router = APIRouter()


@router.get("/internal/health")
def internal_health() -> dict:
    """Internal subsystem health check."""
    return {"status": "ok", "subsystem": "internal"}


router.include_router(tasks_night_audit.router)
