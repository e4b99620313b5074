from __future__ import annotations

from typing import Iterable

from classboard.schemas.registry import RegistrySubject
from classboard.services.registry import find_subject


def resolve_autofill(subject: str, registry: Iterable[RegistrySubject]) -> str | None:
    """Infer the teacher for ``subject`` when exactly one is registered.

    Zero or several candidates are ambiguous and yield None. The result is
    not checked for conflicts here.
    """
    match = find_subject(registry, subject)
    if match is None or len(match.teachers) != 1:
        return None
    return match.teachers[0]
