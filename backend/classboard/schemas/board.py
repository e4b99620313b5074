from pydantic import BaseModel

from classboard.schemas.timetable import ScheduleEntry, Shift


class BoardColumn(BaseModel):
    title: str
    entry: ScheduleEntry | None = None


class BoardOut(BaseModel):
    dayOfWeek: int
    time: str
    shift: Shift
    columns: list[BoardColumn]


class TriggerTimeOut(BaseModel):
    time: str
    endsBreak: bool
