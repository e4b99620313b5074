from classboard.schemas.timetable import Shift
from classboard.services import catalog


def test_morning_catalog_is_contiguous_with_one_break():
    slots = catalog.slots_for_shift(Shift.morning)
    assert [slot.start for slot in slots] == ["07:20", "08:10", "09:00", "09:20", "10:10", "11:00"]
    assert all(prev.end == nxt.start for prev, nxt in zip(slots, slots[1:]))
    assert [slot.name for slot in slots if slot.isBreak] == ["Intervalo"]


def test_afternoon_catalog_runs_until_eight_pm():
    slots = catalog.slots_for_shift(Shift.afternoon)
    assert len(slots) == 9
    assert slots[0].start == "13:00"
    assert slots[-1].end == "20:00"
    assert [(slot.start, slot.end) for slot in slots if slot.isBreak] == [("15:30", "16:00")]


def test_trigger_times_are_union_of_boundaries():
    triggers = catalog.trigger_times()
    assert "07:20" in triggers
    assert "12:00" in triggers
    assert "20:00" in triggers
    assert "12:30" not in triggers
    # 08:10 is both an end and a start and only counts once.
    assert len(triggers) == len({s.start for s in catalog.all_slots()} | {s.end for s in catalog.all_slots()})


def test_break_end_times():
    assert catalog.break_end_times() == frozenset({"09:20", "16:00"})


def test_shift_threshold_is_half_past_noon():
    assert catalog.shift_for_time("00:00") is Shift.morning
    assert catalog.shift_for_time("12:29") is Shift.morning
    assert catalog.shift_for_time("12:30") is Shift.afternoon
    assert catalog.shift_for_time("23:59") is Shift.afternoon


def test_columns_per_shift():
    assert [c.title for c in catalog.columns_for_shift(Shift.morning)] == ["6º EFAF", "7º EFAF", "8º EFAF", "9º EFAF"]
    assert len(catalog.columns_for_shift(Shift.afternoon)) == 3
    assert catalog.classes_for_shift("AFTERNOON") == ("1ª Série EM", "2ª Série EM", "3ª Série EM")
