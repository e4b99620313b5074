from factories import make_subject

from classboard.services import registry as registry_ops
from classboard.services.autofill import resolve_autofill


def test_resolve_autofill_with_single_teacher_is_case_insensitive():
    registry = [make_subject("Math", "Ana")]
    assert resolve_autofill("Math", registry) == "Ana"
    assert resolve_autofill("math", registry) == "Ana"
    assert resolve_autofill("MATH", registry) == "Ana"


def test_resolve_autofill_is_none_when_ambiguous_or_unknown():
    registry = [make_subject("Math", "Ana", "Bia"), make_subject("Art")]
    assert resolve_autofill("Math", registry) is None
    assert resolve_autofill("Art", registry) is None
    assert resolve_autofill("History", registry) is None
    assert resolve_autofill("", registry) is None


def test_add_subject_dedupes_case_insensitively_and_sorts():
    registry = registry_ops.add_subject([], "Math")
    registry = registry_ops.add_subject(registry, "  art ")
    registry = registry_ops.add_subject(registry, "MATH")
    registry = registry_ops.add_subject(registry, "   ")
    assert [item.subject for item in registry] == ["art", "Math"]
    assert all(item.teachers == [] for item in registry)


def test_add_subject_does_not_mutate_input():
    original = [make_subject("Math")]
    registry_ops.add_subject(original, "Art")
    assert [item.subject for item in original] == ["Math"]


def test_add_teacher_dedupes_exactly_and_sorts():
    registry = [make_subject("Math")]
    registry = registry_ops.add_teacher(registry, "Math", "Carla")
    registry = registry_ops.add_teacher(registry, "math", "Ana")
    registry = registry_ops.add_teacher(registry, "Math", "Ana")
    registry = registry_ops.add_teacher(registry, "Math", "ana")
    assert registry[0].teachers == ["Ana", "Carla", "ana"]


def test_add_teacher_to_unknown_subject_is_noop():
    registry = [make_subject("Math", "Ana")]
    assert registry_ops.add_teacher(registry, "History", "Bia") == registry


def test_remove_subject_drops_its_teachers():
    registry = [make_subject("Art", "Bia"), make_subject("Math", "Ana")]
    updated = registry_ops.remove_subject(registry, "Math")
    assert [item.subject for item in updated] == ["Art"]
    assert registry_ops.all_teachers(updated) == ["Bia"]


def test_remove_teacher_keeps_subject():
    registry = [make_subject("Math", "Ana", "Bia")]
    updated = registry_ops.remove_teacher(registry, "Math", "Ana")
    assert updated == [make_subject("Math", "Bia")]
    emptied = registry_ops.remove_teacher(updated, "Math", "Bia")
    assert emptied == [make_subject("Math")]


def test_teacher_suggestions():
    registry = [make_subject("Art", "Bia", "Ana"), make_subject("Math", "Ana", "Carla")]
    assert registry_ops.teacher_suggestions(registry, "math") == ["Ana", "Carla"]
    assert registry_ops.teacher_suggestions(registry, "History") == ["Ana", "Bia", "Carla"]
    assert registry_ops.teacher_suggestions(registry) == ["Ana", "Bia", "Carla"]
