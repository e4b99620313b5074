"""Fixed shift structure of the school day.

Each shift is an ordered, contiguous run of slots. The catalog is static
business data and is not validated at runtime.
"""
from __future__ import annotations

from dataclasses import dataclass

from classboard.schemas.timetable import Shift, TimeSlotDefinition

AFTERNOON_STARTS_AT = "12:30"

BREAK_SUBJECT = "INTERVALO"
BREAK_TEACHER = "-"

DAYS_OF_WEEK: dict[int, str] = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}

MORNING_SLOTS: tuple[TimeSlotDefinition, ...] = (
    TimeSlotDefinition(start="07:20", end="08:10", name="1º Horário"),
    TimeSlotDefinition(start="08:10", end="09:00", name="2º Horário"),
    TimeSlotDefinition(start="09:00", end="09:20", name="Intervalo", isBreak=True),
    TimeSlotDefinition(start="09:20", end="10:10", name="3º Horário"),
    TimeSlotDefinition(start="10:10", end="11:00", name="4º Horário"),
    TimeSlotDefinition(start="11:00", end="12:00", name="5º Horário"),
)

AFTERNOON_SLOTS: tuple[TimeSlotDefinition, ...] = (
    TimeSlotDefinition(start="13:00", end="13:50", name="1º Horário"),
    TimeSlotDefinition(start="13:50", end="14:40", name="2º Horário"),
    TimeSlotDefinition(start="14:40", end="15:30", name="3º Horário"),
    TimeSlotDefinition(start="15:30", end="16:00", name="Intervalo", isBreak=True),
    TimeSlotDefinition(start="16:00", end="16:50", name="4º Horário"),
    TimeSlotDefinition(start="16:50", end="17:40", name="5º Horário"),
    TimeSlotDefinition(start="17:40", end="18:30", name="6º Horário"),
    TimeSlotDefinition(start="18:30", end="19:20", name="7º Horário"),
    TimeSlotDefinition(start="19:20", end="20:00", name="8º Horário"),
)

FIXED_MORNING_CLASSES: tuple[str, ...] = ("6º EFAF", "7º EFAF", "8º EFAF", "9º EFAF")
FIXED_AFTERNOON_CLASSES: tuple[str, ...] = ("1ª Série EM", "2ª Série EM", "3ª Série EM")


@dataclass(frozen=True)
class ClassColumn:
    """A board column and the class-name fragments that feed it."""

    title: str
    match: tuple[str, ...]


MORNING_COLUMNS: tuple[ClassColumn, ...] = (
    ClassColumn(title="6º EFAF", match=("6º efaf", "6º ano")),
    ClassColumn(title="7º EFAF", match=("7º efaf", "7º ano")),
    ClassColumn(title="8º EFAF", match=("8º efaf", "8º ano")),
    ClassColumn(title="9º EFAF", match=("9º efaf", "9º ano")),
)

AFTERNOON_COLUMNS: tuple[ClassColumn, ...] = (
    ClassColumn(title="1ª SÉRIE EM", match=("1ª série", "1ª em", "1a série")),
    ClassColumn(title="2ª SÉRIE EM", match=("2ª série", "2ª em", "2a série")),
    ClassColumn(title="3ª SÉRIE EM", match=("3ª série", "3ª em", "3a série")),
)

_SLOTS_BY_SHIFT = {Shift.morning: MORNING_SLOTS, Shift.afternoon: AFTERNOON_SLOTS}
_CLASSES_BY_SHIFT = {Shift.morning: FIXED_MORNING_CLASSES, Shift.afternoon: FIXED_AFTERNOON_CLASSES}
_COLUMNS_BY_SHIFT = {Shift.morning: MORNING_COLUMNS, Shift.afternoon: AFTERNOON_COLUMNS}


def slots_for_shift(shift: Shift) -> tuple[TimeSlotDefinition, ...]:
    return _SLOTS_BY_SHIFT[Shift(shift)]


def classes_for_shift(shift: Shift) -> tuple[str, ...]:
    return _CLASSES_BY_SHIFT[Shift(shift)]


def columns_for_shift(shift: Shift) -> tuple[ClassColumn, ...]:
    return _COLUMNS_BY_SHIFT[Shift(shift)]


def shift_for_time(time_of_day: str) -> Shift:
    """Strictly before 12:30 is morning; 12:30 onwards is afternoon."""
    if time_of_day < AFTERNOON_STARTS_AT:
        return Shift.morning
    return Shift.afternoon


def all_slots() -> tuple[TimeSlotDefinition, ...]:
    return MORNING_SLOTS + AFTERNOON_SLOTS


def trigger_times() -> frozenset[str]:
    """Every slot boundary across both shifts."""
    slots = all_slots()
    return frozenset(slot.start for slot in slots) | frozenset(slot.end for slot in slots)


def break_end_times() -> frozenset[str]:
    return frozenset(slot.end for slot in all_slots() if slot.isBreak)
