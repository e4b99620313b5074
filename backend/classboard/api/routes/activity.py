from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from classboard.api.deps import get_db, require_admin
from classboard.models.activity_log import ActivityLog
from classboard.schemas.activity import ActivityLogOut

router = APIRouter()


@router.get("/activity/logs", response_model=list[ActivityLogOut], dependencies=[Depends(require_admin)])
def list_activity_logs(
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[ActivityLogOut]:
    query = select(ActivityLog).order_by(ActivityLog.created_at.desc()).limit(limit)
    return list(db.execute(query).scalars())
