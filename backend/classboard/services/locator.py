"""Resolves which entry is live for each board column at a given instant.

Times are "HH:mm" strings; zero-padding makes lexicographic order equal to
chronological order, so intervals are compared as strings.
"""
from __future__ import annotations

from datetime import datetime
import unicodedata
from typing import Iterable, Sequence
from zoneinfo import ZoneInfo

from classboard.schemas.board import BoardColumn, BoardOut
from classboard.schemas.timetable import OverviewCell, OverviewOut, OverviewRow, ScheduleEntry, Shift
from classboard.services.catalog import classes_for_shift, columns_for_shift, shift_for_time, slots_for_shift


def _fold(value: str | None) -> str:
    return unicodedata.normalize("NFC", value or "").casefold()


def matches_class(class_name: str, matchers: Sequence[str]) -> bool:
    folded = _fold(class_name)
    return any(_fold(fragment) in folded for fragment in matchers if fragment)


def locate(
    entries: Iterable[ScheduleEntry],
    day_of_week: int,
    time_of_day: str,
    matchers: Sequence[str],
) -> ScheduleEntry | None:
    """Return the entry covering ``time_of_day`` on ``day_of_week`` for a class column.

    The interval is half-open: an entry is live from its start time up to,
    but not including, its end time. When several entries qualify the one
    with the earliest start time wins, ties keeping collection order.
    """
    candidates = [
        entry
        for entry in entries
        if entry.dayOfWeek == day_of_week
        and entry.startTime <= time_of_day < entry.endTime
        and matches_class(entry.className, matchers)
    ]
    if not candidates:
        return None
    return sorted(candidates, key=lambda entry: entry.startTime)[0]


def day_of_week_for(moment: datetime) -> int:
    # Sunday is 0, matching ScheduleEntry.dayOfWeek.
    return (moment.weekday() + 1) % 7


def time_of_day_for(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def school_now(timezone_name: str) -> datetime:
    return datetime.now(ZoneInfo(timezone_name))


def build_board(entries: Iterable[ScheduleEntry], moment: datetime) -> BoardOut:
    snapshot = list(entries)
    day = day_of_week_for(moment)
    time_of_day = time_of_day_for(moment)
    shift = shift_for_time(time_of_day)
    columns = [
        BoardColumn(title=column.title, entry=locate(snapshot, day, time_of_day, column.match))
        for column in columns_for_shift(shift)
    ]
    return BoardOut(dayOfWeek=day, time=time_of_day, shift=shift, columns=columns)


def class_day_entries(entries: Iterable[ScheduleEntry], day_of_week: int, class_name: str) -> list[ScheduleEntry]:
    selected = [entry for entry in entries if entry.dayOfWeek == day_of_week and entry.className == class_name]
    return sorted(selected, key=lambda entry: entry.startTime)


def build_overview(entries: Iterable[ScheduleEntry], day_of_week: int, shift: Shift) -> OverviewOut:
    snapshot = [entry for entry in entries if entry.dayOfWeek == day_of_week]
    rows: list[OverviewRow] = []
    for slot in slots_for_shift(shift):
        cells = []
        for class_name in classes_for_shift(shift):
            entry = next(
                (item for item in snapshot if item.className == class_name and item.startTime == slot.start),
                None,
            )
            cells.append(OverviewCell(className=class_name, entry=entry))
        rows.append(OverviewRow(slot=slot, cells=cells))
    return OverviewOut(dayOfWeek=day_of_week, shift=shift, rows=rows)
