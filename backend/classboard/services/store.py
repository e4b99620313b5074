from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classboard.models.registry import RegistrySnapshot
from classboard.models.timetable import ScheduleSnapshot
from classboard.schemas.registry import RegistrySubject
from classboard.schemas.timetable import ScheduleEntry
from classboard.services.broadcast_hub import BroadcastHub, SnapshotListener, broadcast_hub

logger = logging.getLogger(__name__)

SCHEDULE_TOPIC = "schedule"
REGISTRY_TOPIC = "registry"

ModelT = TypeVar("ModelT", bound=BaseModel)


class SnapshotStore(Protocol):
    def load_schedule(self) -> list[ScheduleEntry]: ...

    def save_schedule(self, entries: list[ScheduleEntry]) -> bool: ...

    def load_registry(self) -> list[RegistrySubject]: ...

    def save_registry(self, registry: list[RegistrySubject]) -> bool: ...

    def subscribe(self, topic: str, listener: SnapshotListener) -> Callable[[], None]: ...


def _split_rows(model: type[ModelT], payload: list | None) -> tuple[list[ModelT], list]:
    items: list[ModelT] = []
    unreadable: list = []
    for row in payload or []:
        try:
            items.append(model.model_validate(row))
        except ValidationError:
            unreadable.append(row)
    return items, unreadable


def _parse_rows(model: type[ModelT], payload: list | None, topic: str) -> list[ModelT]:
    items, unreadable = _split_rows(model, payload)
    for row in unreadable:
        logger.warning("Ignoring unreadable %s row: %r", topic, row)
    return items


class SqlSnapshotStore:
    """Keeps each collection as one JSON row, replaced wholesale on every save.

    Stored rows that fail validation are hidden from readers but written back
    unchanged on every save, so a mutation never drops them.
    """

    def __init__(self, db: Session, hub: BroadcastHub = broadcast_hub) -> None:
        self.db = db
        self.hub = hub

    def load_schedule(self) -> list[ScheduleEntry]:
        record = self.db.get(ScheduleSnapshot, 1)
        return _parse_rows(ScheduleEntry, record.payload if record else None, SCHEDULE_TOPIC)

    def save_schedule(self, entries: list[ScheduleEntry]) -> bool:
        payload = [entry.model_dump(mode="json") for entry in entries]
        return self._save(ScheduleSnapshot, ScheduleEntry, SCHEDULE_TOPIC, payload)

    def load_registry(self) -> list[RegistrySubject]:
        record = self.db.get(RegistrySnapshot, 1)
        return _parse_rows(RegistrySubject, record.payload if record else None, REGISTRY_TOPIC)

    def save_registry(self, registry: list[RegistrySubject]) -> bool:
        payload = [item.model_dump(mode="json") for item in registry]
        return self._save(RegistrySnapshot, RegistrySubject, REGISTRY_TOPIC, payload)

    def subscribe(self, topic: str, listener: SnapshotListener) -> Callable[[], None]:
        return self.hub.subscribe(topic, listener)

    def _save(
        self,
        model: type[ScheduleSnapshot] | type[RegistrySnapshot],
        schema: type[BaseModel],
        topic: str,
        payload: list,
    ) -> bool:
        try:
            record = self.db.get(model, 1)
            if record is None:
                self.db.add(model(id=1, payload=payload))
            else:
                _, unreadable = _split_rows(schema, record.payload)
                payload = payload + unreadable
                record.payload = payload
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to save %s snapshot", topic)
            return False
        self.hub.broadcast(topic, payload)
        return True
