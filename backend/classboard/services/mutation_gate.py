"""Single choke point for every change to the schedule snapshot.

All functions take the current snapshot and return a new one; nothing here
touches the store. The caller commits the result.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import uuid

from classboard.core.exceptions import DuplicateInitializationError
from classboard.schemas.registry import RegistrySubject
from classboard.schemas.timetable import ConflictInfo, EditableField, ScheduleEntry, Shift
from classboard.services.autofill import resolve_autofill
from classboard.services.catalog import BREAK_SUBJECT, BREAK_TEACHER, slots_for_shift
from classboard.services.conflict_service import conflict_info, find_conflict


@dataclass(frozen=True)
class EditAccepted:
    entries: list[ScheduleEntry]
    # None when the target id was not found and nothing changed.
    entry: ScheduleEntry | None = None

    @property
    def changed(self) -> bool:
        return self.entry is not None


@dataclass(frozen=True)
class EditRejected:
    conflict: ConflictInfo


EditOutcome = EditAccepted | EditRejected


def _new_entry_id() -> str:
    return str(uuid.uuid4())


def apply_edit(
    entries: Iterable[ScheduleEntry],
    registry: Iterable[RegistrySubject],
    entry_id: str,
    field: EditableField | str,
    value: str,
) -> EditOutcome:
    snapshot = list(entries)
    field = EditableField(field)
    current = next((entry for entry in snapshot if entry.id == entry_id), None)
    if current is None:
        return EditAccepted(entries=snapshot)

    updates: dict[str, str] = {field.value: value}

    if field is EditableField.teacher_name and value:
        clash = find_conflict(snapshot, current.dayOfWeek, current.startTime, value, entry_id)
        if clash is not None:
            return EditRejected(conflict=conflict_info(clash, value))

    if field is EditableField.subject:
        inferred = resolve_autofill(value, registry)
        if inferred is not None:
            clash = find_conflict(snapshot, current.dayOfWeek, current.startTime, inferred, entry_id)
            if clash is not None:
                return EditRejected(conflict=conflict_info(clash, inferred))
            updates[EditableField.teacher_name.value] = inferred

    edited = current.model_copy(update=updates)
    return EditAccepted(
        entries=[edited if entry is current else entry for entry in snapshot],
        entry=edited,
    )


def initialize_day(
    entries: Iterable[ScheduleEntry],
    day_of_week: int,
    class_name: str,
    shift: Shift,
    id_factory: Callable[[], str] = _new_entry_id,
) -> list[ScheduleEntry]:
    """Append one entry per catalog slot of ``shift`` for a class and day.

    Raises DuplicateInitializationError, appending nothing, when the class
    already has any entry on that day.
    """
    snapshot = list(entries)
    if any(entry.dayOfWeek == day_of_week and entry.className == class_name for entry in snapshot):
        raise DuplicateInitializationError(day_of_week, class_name)

    created = [
        ScheduleEntry(
            id=id_factory(),
            dayOfWeek=day_of_week,
            startTime=slot.start,
            endTime=slot.end,
            periodName=slot.name,
            className=class_name,
            subject=BREAK_SUBJECT if slot.isBreak else "",
            teacherName=BREAK_TEACHER if slot.isBreak else "",
            isBreak=slot.isBreak,
        )
        for slot in slots_for_shift(shift)
    ]
    return snapshot + created


def clear_slot(entries: Iterable[ScheduleEntry], entry_id: str) -> list[ScheduleEntry]:
    return [
        entry.model_copy(update={"subject": "", "teacherName": ""}) if entry.id == entry_id else entry
        for entry in entries
    ]
