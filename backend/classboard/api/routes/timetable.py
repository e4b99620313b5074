import logging
from collections import Counter

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from classboard.api.deps import get_db, get_store, require_admin
from classboard.core.config import get_settings
from classboard.core.exceptions import (
    DuplicateInitializationError,
    InvalidScheduleError,
    PersistenceError,
    ScheduleConflictError,
)
from classboard.schemas.timetable import (
    EditResponse,
    EntryEditRequest,
    InitializeDayRequest,
    OverviewOut,
    ScheduleEntry,
    Shift,
)
from classboard.services.audit import log_activity
from classboard.services.catalog import shift_for_time
from classboard.services.conflict_service import ConflictService
from classboard.services.locator import build_overview, class_day_entries, school_now, time_of_day_for
from classboard.services.mutation_gate import EditRejected, apply_edit, clear_slot, initialize_day
from classboard.services.store import SqlSnapshotStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _commit_schedule(store: SqlSnapshotStore, entries: list[ScheduleEntry]) -> None:
    if not store.save_schedule(entries):
        raise PersistenceError("schedule")


def _validate_replacement(entries: list[ScheduleEntry]) -> None:
    duplicates = sorted(entry_id for entry_id, count in Counter(entry.id for entry in entries).items() if count > 1)
    if duplicates:
        raise InvalidScheduleError("Entry ids must be unique", details={"duplicateIds": duplicates})

    report = ConflictService(entries).detect_conflicts()
    if report.conflicts:
        raise InvalidScheduleError(
            f"Schedule double-books teachers in {len(report.conflicts)} slot pair(s)",
            details={"conflicts": [conflict.model_dump() for conflict in report.conflicts]},
        )


@router.get("", response_model=list[ScheduleEntry])
def list_entries(store: SqlSnapshotStore = Depends(get_store)) -> list[ScheduleEntry]:
    return store.load_schedule()


@router.put("", response_model=list[ScheduleEntry], dependencies=[Depends(require_admin)])
def replace_entries(
    payload: list[ScheduleEntry],
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[ScheduleEntry]:
    try:
        _validate_replacement(payload)
    except InvalidScheduleError as exc:
        logger.warning("Rejected schedule replacement: %s", exc.message)
        raise

    log_activity(db, action="timetable.replace", entity_type="schedule", details={"entries": len(payload)})
    _commit_schedule(store, payload)
    logger.info("Schedule replaced with %d entries", len(payload))
    return payload


@router.get("/day", response_model=list[ScheduleEntry])
def list_class_day(
    day_of_week: int = Query(alias="dayOfWeek", ge=0, le=6),
    class_name: str = Query(alias="className", min_length=1),
    store: SqlSnapshotStore = Depends(get_store),
) -> list[ScheduleEntry]:
    return class_day_entries(store.load_schedule(), day_of_week, class_name)


@router.get("/overview", response_model=OverviewOut)
def schedule_overview(
    day_of_week: int = Query(alias="dayOfWeek", ge=0, le=6),
    shift: Shift | None = Query(default=None),
    store: SqlSnapshotStore = Depends(get_store),
) -> OverviewOut:
    if shift is None:
        shift = shift_for_time(time_of_day_for(school_now(get_settings().school_timezone)))
    return build_overview(store.load_schedule(), day_of_week, shift)


@router.post(
    "/initialize",
    response_model=list[ScheduleEntry],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def initialize_class_day(
    payload: InitializeDayRequest,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[ScheduleEntry]:
    entries = store.load_schedule()
    try:
        updated = initialize_day(entries, payload.dayOfWeek, payload.className, payload.shift)
    except DuplicateInitializationError:
        logger.warning("Day %s already initialized for %s", payload.dayOfWeek, payload.className)
        raise

    created = updated[len(entries):]
    log_activity(
        db,
        action="timetable.initialize",
        entity_type="class_day",
        entity_id=f"{payload.dayOfWeek}:{payload.className}",
        details={"shift": payload.shift.value, "entries": len(created)},
    )
    _commit_schedule(store, updated)
    logger.info("Initialized %d slots for %s on day %s", len(created), payload.className, payload.dayOfWeek)
    return created


@router.patch("/entries/{entry_id}", response_model=EditResponse, dependencies=[Depends(require_admin)])
def edit_entry(
    entry_id: str,
    payload: EntryEditRequest,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> EditResponse:
    outcome = apply_edit(store.load_schedule(), store.load_registry(), entry_id, payload.field, payload.value)

    if isinstance(outcome, EditRejected):
        conflict = outcome.conflict.model_dump()
        log_activity(db, action="timetable.edit_rejected", entity_type="entry", entity_id=entry_id, details=conflict)
        db.commit()
        logger.warning(
            "Rejected %s edit on %s: %s already teaches %s at %s",
            payload.field.value,
            entry_id,
            conflict["teacherName"],
            conflict["conflictingClass"],
            conflict["conflictingTime"],
        )
        raise ScheduleConflictError(conflict)

    if not outcome.changed:
        return EditResponse(accepted=False)

    log_activity(
        db,
        action="timetable.edit",
        entity_type="entry",
        entity_id=entry_id,
        details={"field": payload.field.value, "value": payload.value, "teacherName": outcome.entry.teacherName},
    )
    _commit_schedule(store, outcome.entries)
    logger.info("Entry %s %s set to %r", entry_id, payload.field.value, payload.value)
    return EditResponse(accepted=True, entry=outcome.entry)


@router.post("/entries/{entry_id}/clear", response_model=EditResponse, dependencies=[Depends(require_admin)])
def clear_entry(
    entry_id: str,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> EditResponse:
    entries = store.load_schedule()
    if not any(entry.id == entry_id for entry in entries):
        return EditResponse(accepted=False)

    updated = clear_slot(entries, entry_id)
    log_activity(db, action="timetable.clear", entity_type="entry", entity_id=entry_id)
    _commit_schedule(store, updated)
    return EditResponse(accepted=True, entry=next(entry for entry in updated if entry.id == entry_id))
