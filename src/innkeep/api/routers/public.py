"""Public-facing routes (APP_ROLE=public)."""

from fastapi import APIRouter

from innkeep.api.routes import bookings, night_audit, reports, room_board, room_statuses

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


router.include_router(room_board.router)
router.include_router(reports.router)
router.include_router(night_audit.router)
router.include_router(room_statuses.router)
router.include_router(bookings.router)
