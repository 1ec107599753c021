"""Unit tests for the habit record (models.py)"""
import pytest

from models import (
    CATEGORIES,
    ID_ALPHABET,
    generate_id,
    habit_from_dict,
    habit_to_dict,
    new_habit,
    toggle_log,
    with_note,
)


def test_generate_id_shape():
    hid = generate_id()

    assert len(hid) == 7
    assert set(hid) <= set(ID_ALPHABET)


def test_generate_id_is_random():
    assert len({generate_id() for _ in range(200)}) == 200


def test_new_habit_starts_empty():
    habit = new_habit("  Meditate ", "", "mindfulness")

    assert habit.name == "Meditate"
    assert habit.description is None
    assert habit.logs == {}
    assert habit.notes == {}
    assert habit.created_at


def test_new_habit_rejects_blank_name():
    with pytest.raises(ValueError):
        new_habit("   ")


def test_new_habit_rejects_unknown_category():
    with pytest.raises(ValueError):
        new_habit("Run", category="fitness")


def test_toggle_log_is_sparse(read_habit):
    """Un-completing removes the key instead of storing False"""
    added = toggle_log(read_habit, "2024-01-02")
    removed = toggle_log(added, "2024-01-02")

    assert added.logs["2024-01-02"] is True
    assert "2024-01-02" not in removed.logs
    assert removed.id == read_habit.id
    assert "2024-01-02" not in read_habit.logs


def test_with_note_sets_and_clears(read_habit):
    noted = with_note(read_habit, "2024-01-02", "  felt sick ")
    cleared = with_note(noted, "2024-01-02", "   ")

    assert noted.notes == {"2024-01-02": "felt sick"}
    assert cleared.notes == {}
    # a note does not mark the day completed
    assert "2024-01-02" not in noted.logs


def test_habit_from_dict_upgrades_missing_notes():
    habit = habit_from_dict(
        {"id": "abc1234", "name": "Walk", "category": "health",
         "created_at": "2024-01-01T00:00:00+00:00", "logs": {"2024-01-01": True}}
    )

    assert habit.notes == {}
    assert habit.description is None
    assert habit.logs == {"2024-01-01": True}


def test_habit_from_dict_drops_false_logs_and_unknown_category():
    habit = habit_from_dict(
        {"id": "x", "name": "Walk", "category": "cardio",
         "logs": {"2024-01-01": True, "2024-01-02": False}, "notes": None}
    )

    assert habit.category == "other"
    assert habit.logs == {"2024-01-01": True}


@pytest.mark.parametrize("raw", [None, [], {"name": "No id"}, {"id": "x", "name": " "}])
def test_habit_from_dict_rejects_unusable_records(raw):
    assert habit_from_dict(raw) is None


def test_dict_round_trip(make_habit):
    habit = make_habit("Code", logs=["2024-02-01"], notes={"2024-02-02": "rest day"},
                       description="One commit")

    assert habit_from_dict(habit_to_dict(habit)) == habit


def test_categories_fixed():
    assert CATEGORIES == ["health", "productivity", "learning", "mindfulness", "other"]


@pytest.mark.parametrize("field_name", ["logs", "notes"])
@pytest.mark.parametrize("bad_value", [["2024-01-01"], "2024-01-01", 7])
def test_habit_from_dict_resets_non_mapping_fields(field_name, bad_value):
    habit = habit_from_dict({"id": "a", "name": "Read", field_name: bad_value})

    assert habit is not None
    assert getattr(habit, field_name) == {}
