from collections import defaultdict
from typing import Iterable, List, Optional

from classboard.schemas.conflict import ConflictDetail, ConflictReport
from classboard.schemas.timetable import ConflictInfo, ScheduleEntry


def find_conflict(
    entries: Iterable[ScheduleEntry],
    day_of_week: int,
    start_time: str,
    teacher_name: str,
    exclude_entry_id: Optional[str],
) -> Optional[ScheduleEntry]:
    """Return the first entry already holding ``teacher_name`` at this day and start time.

    Teacher names are compared exactly. Break entries and the excluded entry
    never count, and an empty teacher name never conflicts.
    """
    if not teacher_name:
        return None
    for entry in entries:
        if (
            entry.dayOfWeek == day_of_week
            and entry.startTime == start_time
            and entry.teacherName == teacher_name
            and not entry.isBreak
            and entry.id != exclude_entry_id
        ):
            return entry
    return None


def conflict_info(conflicting: ScheduleEntry, teacher_name: str) -> ConflictInfo:
    return ConflictInfo(
        conflictingClass=conflicting.className,
        conflictingTime=conflicting.startTime,
        teacherName=teacher_name,
        conflictingEntryId=conflicting.id,
    )


class ConflictService:
    """Audits a whole snapshot for teachers booked twice at the same day and start time."""

    def __init__(self, entries: Iterable[ScheduleEntry]):
        self.entries: List[ScheduleEntry] = list(entries)

    def detect_conflicts(self) -> ConflictReport:
        conflicts: List[ConflictDetail] = []

        buckets: dict[tuple[int, str, str], List[ScheduleEntry]] = defaultdict(list)
        for entry in self.entries:
            if entry.isBreak or not entry.teacherName:
                continue
            buckets[(entry.dayOfWeek, entry.startTime, entry.teacherName)].append(entry)

        for (day, start, teacher), booked in sorted(buckets.items()):
            n = len(booked)
            for i in range(n):
                for j in range(i + 1, n):
                    first, second = booked[i], booked[j]
                    conflicts.append(ConflictDetail(
                        id=f"teacher-{first.id}-{second.id}",
                        conflict_type="teacher_double_booking",
                        description=(
                            f"{teacher} is booked for {first.className} and {second.className} "
                            f"on day {day} at {start}"
                        ),
                        severity="hard",
                        affected_slots=[first.id, second.id],
                    ))

        return ConflictReport(conflicts=conflicts)
