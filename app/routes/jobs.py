from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.auth_utils import require_user
from core.database import (
    JOB_STATUSES,
    get_jobs_for_user,
    get_notifications_for_user,
    mark_jobs_seen,
    update_job_status,
)

router = APIRouter(prefix="/api")


class StatusIn(BaseModel):
    status: Optional[str] = None


@router.get("/jobs")
def list_jobs(limit: int = 100, user: dict = Depends(require_user)):
    return get_jobs_for_user(int(user["id"]), limit=max(1, min(limit, 500)))


@router.post("/jobs/mark-seen")
def jobs_mark_seen(user: dict = Depends(require_user)):
    return {"updated": mark_jobs_seen(int(user["id"]))}


@router.patch("/jobs/{job_id}/status")
def set_job_status(job_id: int, body: StatusIn, user: dict = Depends(require_user)):
    if body.status is not None and body.status not in JOB_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Status must be one of: {', '.join(JOB_STATUSES)} (or null).",
        )
    if not update_job_status(user_id=int(user["id"]), job_id=job_id, status=body.status):
        raise HTTPException(status_code=404, detail="Job not found.")
    return {"success": True, "status": body.status}


@router.get("/notifications")
def list_notifications(limit: int = 50, user: dict = Depends(require_user)):
    return get_notifications_for_user(user_id=int(user["id"]), limit=max(1, min(limit, 200)))
