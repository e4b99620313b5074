from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class Shift(str, Enum):
    morning = "MORNING"
    afternoon = "AFTERNOON"


class EditableField(str, Enum):
    subject = "subject"
    teacher_name = "teacherName"


class TimeSlotDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    name: str
    isBreak: bool = False


class ScheduleEntry(BaseModel):
    """One (day, class, slot) assignment. Field names are the interchange format."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    dayOfWeek: int = Field(ge=0, le=6)
    startTime: str
    endTime: str
    periodName: str = ""
    className: str = Field(min_length=1)
    subject: str = ""
    teacherName: str = ""
    isBreak: bool = False

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @field_validator("periodName", "subject", "teacherName", mode="before")
    @classmethod
    def blank_missing_text(cls, value: str | None) -> str:
        return "" if value is None else value

    @field_validator("isBreak", mode="before")
    @classmethod
    def default_missing_break(cls, value: bool | None) -> bool:
        return False if value is None else value


class ConflictInfo(BaseModel):
    conflictingClass: str
    conflictingTime: str
    teacherName: str
    conflictingEntryId: str


class EntryEditRequest(BaseModel):
    field: EditableField
    value: str = Field(default="", max_length=200)


class EditResponse(BaseModel):
    accepted: bool
    entry: ScheduleEntry | None = None


class InitializeDayRequest(BaseModel):
    dayOfWeek: int = Field(ge=0, le=6)
    className: str = Field(min_length=1, max_length=100)
    shift: Shift

    @field_validator("className")
    @classmethod
    def strip_class_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("className must not be blank")
        return stripped


class OverviewCell(BaseModel):
    className: str
    entry: ScheduleEntry | None = None


class OverviewRow(BaseModel):
    slot: TimeSlotDefinition
    cells: list[OverviewCell]


class OverviewOut(BaseModel):
    dayOfWeek: int
    shift: Shift
    rows: list[OverviewRow]
