"""Worker task: run the night audit.

POST /tasks/night-audit/run

Mounted only for APP_ROLE=worker; the scheduler calls it once per night.
Returns 409 with the blocker counts when the business day is not closed
out and force is false.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict

from innkeep.domain.night_audit import NightAuditBlockedError
from innkeep.observability.logging import get_logger

router = APIRouter(prefix="/tasks/night-audit", tags=["tasks"])

logger = get_logger(__name__)


class RunNightAuditRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    audited_by: str
    force: bool = False


def _run(audited_by: str, force: bool) -> dict:
    from innkeep.infra.db import txn
    from innkeep.services.night_audit_service import run_night_audit

    with txn() as cur:
        return run_night_audit(cur, audited_by=audited_by, force=force)


@router.post("/run")
def run(body: RunNightAuditRequest) -> dict:
    """Close the current business day."""
    try:
        return _run(body.audited_by, body.force)
    except NightAuditBlockedError as exc:
        logger.warning(
            "night audit blocked",
            extra={"extra_fields": exc.blockers.to_dict()},
        )
        raise HTTPException(
            status_code=409,
            detail={"message": str(exc), "blockers": exc.blockers.to_dict()},
        )
