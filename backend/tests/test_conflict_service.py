from factories import make_entry

from classboard.services.conflict_service import ConflictService, conflict_info, find_conflict


def test_finds_teacher_already_booked_at_same_start():
    entries = [make_entry("1", class_name="9A", teacher="Ana")]
    clash = find_conflict(entries, 1, "07:20", "Ana", "2")
    assert clash is not None
    assert clash.className == "9A"


def test_excluded_entry_never_conflicts_with_itself():
    entries = [make_entry("1", teacher="Ana")]
    assert find_conflict(entries, 1, "07:20", "Ana", "1") is None


def test_break_entries_are_exempt():
    entries = [make_entry("1", start="09:00", end="09:20", teacher="Ana", is_break=True)]
    assert find_conflict(entries, 1, "09:00", "Ana", "2") is None


def test_teacher_match_is_exact_and_case_sensitive():
    entries = [make_entry("1", teacher="Ana")]
    assert find_conflict(entries, 1, "07:20", "ana", "2") is None
    assert find_conflict(entries, 1, "07:20", "Ana ", "2") is None


def test_other_day_or_start_does_not_conflict():
    entries = [make_entry("1", teacher="Ana")]
    assert find_conflict(entries, 2, "07:20", "Ana", "2") is None
    assert find_conflict(entries, 1, "08:10", "Ana", "2") is None


def test_empty_teacher_never_conflicts():
    entries = [make_entry("1", teacher="")]
    assert find_conflict(entries, 1, "07:20", "", "2") is None


def test_conflict_info_payload():
    info = conflict_info(make_entry("1", class_name="9A", teacher="Ana"), "Ana")
    assert info.model_dump() == {
        "conflictingClass": "9A",
        "conflictingTime": "07:20",
        "teacherName": "Ana",
        "conflictingEntryId": "1",
    }


def test_audit_reports_every_double_booked_pair():
    entries = [
        make_entry("1", class_name="9A", teacher="Ana"),
        make_entry("2", class_name="9B", teacher="Ana"),
        make_entry("3", class_name="9C", teacher="Ana"),
        make_entry("4", class_name="9D", teacher="Bia"),
        make_entry("5", class_name="9E", teacher="-", is_break=True),
        make_entry("6", class_name="9F", teacher="-", is_break=True),
    ]
    report = ConflictService(entries).detect_conflicts()
    assert len(report.conflicts) == 3
    assert all(c.conflict_type == "teacher_double_booking" for c in report.conflicts)
    assert {frozenset(c.affected_slots) for c in report.conflicts} == {
        frozenset({"1", "2"}),
        frozenset({"1", "3"}),
        frozenset({"2", "3"}),
    }


def test_audit_of_clean_schedule_is_empty():
    entries = [
        make_entry("1", class_name="9A", teacher="Ana"),
        make_entry("2", class_name="9B", teacher="Ana", start="08:10", end="09:00"),
        make_entry("3", class_name="9C", teacher=""),
        make_entry("4", class_name="9D", teacher=""),
    ]
    assert ConflictService(entries).detect_conflicts().conflicts == []
