import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from classboard.api.deps import get_db, get_store, require_admin
from classboard.core.exceptions import PersistenceError
from classboard.schemas.registry import RegistrySubject, SubjectCreate, TeacherCreate
from classboard.services import registry as registry_ops
from classboard.services.audit import log_activity
from classboard.services.store import SqlSnapshotStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_subject(registry: list[RegistrySubject], subject: str) -> RegistrySubject:
    match = registry_ops.find_subject(registry, subject)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return match


def _commit_registry(store: SqlSnapshotStore, registry: list[RegistrySubject]) -> None:
    if not store.save_registry(registry):
        raise PersistenceError("registry")


@router.get("", response_model=list[RegistrySubject])
def list_registry(store: SqlSnapshotStore = Depends(get_store)) -> list[RegistrySubject]:
    return store.load_registry()


@router.get("/teachers", response_model=list[str])
def list_teacher_suggestions(
    subject: str | None = Query(default=None),
    store: SqlSnapshotStore = Depends(get_store),
) -> list[str]:
    return registry_ops.teacher_suggestions(store.load_registry(), subject)


@router.post(
    "/subjects",
    response_model=list[RegistrySubject],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_subject(
    payload: SubjectCreate,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[RegistrySubject]:
    registry = store.load_registry()
    if registry_ops.find_subject(registry, payload.subject) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Subject already registered")
    updated = registry_ops.add_subject(registry, payload.subject)
    log_activity(db, action="registry.subject_add", entity_type="subject", entity_id=payload.subject)
    _commit_registry(store, updated)
    logger.info("Registered subject %s", payload.subject)
    return updated


@router.delete("/subjects/{subject}", response_model=list[RegistrySubject], dependencies=[Depends(require_admin)])
def delete_subject(
    subject: str,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[RegistrySubject]:
    registry = store.load_registry()
    match = _require_subject(registry, subject)
    updated = registry_ops.remove_subject(registry, match.subject)
    log_activity(
        db,
        action="registry.subject_remove",
        entity_type="subject",
        entity_id=match.subject,
        details={"teachers": list(match.teachers)},
    )
    _commit_registry(store, updated)
    logger.info("Removed subject %s", match.subject)
    return updated


@router.post(
    "/subjects/{subject}/teachers",
    response_model=list[RegistrySubject],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_subject_teacher(
    subject: str,
    payload: TeacherCreate,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[RegistrySubject]:
    registry = store.load_registry()
    match = _require_subject(registry, subject)
    if payload.teacherName in match.teachers:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Teacher already registered for subject")
    updated = registry_ops.add_teacher(registry, match.subject, payload.teacherName)
    log_activity(
        db,
        action="registry.teacher_add",
        entity_type="subject",
        entity_id=match.subject,
        details={"teacherName": payload.teacherName},
    )
    _commit_registry(store, updated)
    logger.info("Added teacher %s to %s", payload.teacherName, match.subject)
    return updated


@router.delete(
    "/subjects/{subject}/teachers/{teacher_name}",
    response_model=list[RegistrySubject],
    dependencies=[Depends(require_admin)],
)
def remove_subject_teacher(
    subject: str,
    teacher_name: str,
    store: SqlSnapshotStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> list[RegistrySubject]:
    registry = store.load_registry()
    match = _require_subject(registry, subject)
    if teacher_name not in match.teachers:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not registered for subject")
    updated = registry_ops.remove_teacher(registry, match.subject, teacher_name)
    log_activity(
        db,
        action="registry.teacher_remove",
        entity_type="subject",
        entity_id=match.subject,
        details={"teacherName": teacher_name},
    )
    _commit_registry(store, updated)
    logger.info("Removed teacher %s from %s", teacher_name, match.subject)
    return updated
