"""Seed a blank week for every fixed class and a small subject registry.

Run:
  PYTHONPATH=backend python scripts/seed_sample_schedule.py
"""

from __future__ import annotations

from classboard.core.exceptions import DuplicateInitializationError
from classboard.db.bootstrap import ensure_runtime_schema
from classboard.db.session import SessionLocal
from classboard.schemas.timetable import Shift
from classboard.services import registry as registry_ops
from classboard.services.catalog import DAYS_OF_WEEK, classes_for_shift
from classboard.services.mutation_gate import initialize_day
from classboard.services.store import SqlSnapshotStore

WEEKDAYS = [day for day in DAYS_OF_WEEK if day <= 5]

SAMPLE_REGISTRY = {
    "Matemática": ["Prof. Ana Souza"],
    "Língua Portuguesa": ["Prof. Carlos Lima", "Prof. Beatriz Rocha"],
    "História": ["Prof. Daniel Alves"],
    "Geografia": ["Prof. Elisa Martins"],
    "Ciências": ["Prof. Fernanda Costa"],
}


def _seed_schedule(store: SqlSnapshotStore) -> int:
    entries = store.load_schedule()
    before = len(entries)
    for shift in Shift:
        for class_name in classes_for_shift(shift):
            for day in WEEKDAYS:
                try:
                    entries = initialize_day(entries, day, class_name, shift)
                except DuplicateInitializationError:
                    continue
    if not store.save_schedule(entries):
        raise SystemExit("Unable to save schedule snapshot")
    return len(entries) - before


def _seed_registry(store: SqlSnapshotStore) -> int:
    registry = store.load_registry()
    before = len(registry)
    for subject, teachers in SAMPLE_REGISTRY.items():
        registry = registry_ops.add_subject(registry, subject)
        for teacher in teachers:
            registry = registry_ops.add_teacher(registry, subject, teacher)
    if not store.save_registry(registry):
        raise SystemExit("Unable to save registry snapshot")
    return len(registry) - before


def main() -> None:
    ensure_runtime_schema()
    with SessionLocal() as session:
        store = SqlSnapshotStore(session)
        created_entries = _seed_schedule(store)
        created_subjects = _seed_registry(store)
    print(f"Created {created_entries} schedule entries and {created_subjects} subjects.")


if __name__ == "__main__":
    main()
