from fastapi import APIRouter, Depends

from classboard.api.deps import get_store
from classboard.schemas.conflict import ConflictReport
from classboard.schemas.timetable import ScheduleEntry
from classboard.services.conflict_service import ConflictService
from classboard.services.store import SqlSnapshotStore

router = APIRouter()


@router.get("", response_model=ConflictReport)
def audit_stored_schedule(store: SqlSnapshotStore = Depends(get_store)) -> ConflictReport:
    return ConflictService(store.load_schedule()).detect_conflicts()


@router.post("/detect", response_model=ConflictReport)
def detect_conflicts(payload: list[ScheduleEntry]) -> ConflictReport:
    return ConflictService(payload).detect_conflicts()
