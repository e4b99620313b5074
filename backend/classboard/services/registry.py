"""Subject -> eligible teachers lookup table.

Every operation returns a new list and leaves its input untouched. Unknown
subjects, blank names and duplicates leave the registry as it was.
"""
from __future__ import annotations

from typing import Iterable

from classboard.schemas.registry import RegistrySubject


def _subject_key(name: str) -> str:
    return name.casefold()


def find_subject(registry: Iterable[RegistrySubject], subject: str | None) -> RegistrySubject | None:
    key = _subject_key(subject or "")
    if not key:
        return None
    return next((item for item in registry if _subject_key(item.subject) == key), None)


def add_subject(registry: Iterable[RegistrySubject], subject: str) -> list[RegistrySubject]:
    current = list(registry)
    name = subject.strip()
    if not name or find_subject(current, name) is not None:
        return current
    current.append(RegistrySubject(subject=name, teachers=[]))
    return sorted(current, key=lambda item: (_subject_key(item.subject), item.subject))


def remove_subject(registry: Iterable[RegistrySubject], subject: str) -> list[RegistrySubject]:
    key = _subject_key(subject)
    return [item for item in registry if _subject_key(item.subject) != key]


def add_teacher(registry: Iterable[RegistrySubject], subject: str, teacher_name: str) -> list[RegistrySubject]:
    name = teacher_name.strip()
    key = _subject_key(subject)
    updated: list[RegistrySubject] = []
    for item in registry:
        if name and _subject_key(item.subject) == key and name not in item.teachers:
            item = item.model_copy(update={"teachers": sorted([*item.teachers, name])})
        updated.append(item)
    return updated


def remove_teacher(registry: Iterable[RegistrySubject], subject: str, teacher_name: str) -> list[RegistrySubject]:
    key = _subject_key(subject)
    updated: list[RegistrySubject] = []
    for item in registry:
        if _subject_key(item.subject) == key and teacher_name in item.teachers:
            item = item.model_copy(update={"teachers": [t for t in item.teachers if t != teacher_name]})
        updated.append(item)
    return updated


def all_teachers(registry: Iterable[RegistrySubject]) -> list[str]:
    return sorted({teacher for item in registry for teacher in item.teachers})


def teacher_suggestions(registry: Iterable[RegistrySubject], subject: str | None = None) -> list[str]:
    """Teachers registered for ``subject``, or every known teacher when the subject is unknown."""
    current = list(registry)
    match = find_subject(current, subject)
    if match is not None:
        return list(match.teachers)
    return all_teachers(current)
