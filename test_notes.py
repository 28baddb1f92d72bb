"""Tests for the day-indexed note store."""

from datetime import date

import pytest

from notes import (
    Note,
    NoteValidationError,
    add_note,
    day_key,
    delete_note,
    note_count,
    notes_for,
    parse_day_key,
    update_note,
    validate_title,
)

MAR_1 = date(2024, 3, 1)
MAR_5 = date(2024, 3, 5)
MAR_15 = date(2024, 3, 15)


def test_day_key_is_zero_padded():
    assert day_key(date(2024, 3, 5)) == "2024-03-05"
    assert day_key(date(987, 1, 2)) == "0987-01-02"


def test_parse_day_key():
    assert parse_day_key("2024-03-05") == date(2024, 3, 5)
    assert parse_day_key(" 2024-12-31 ") == date(2024, 12, 31)


@pytest.mark.parametrize("bad", ["", "2024-3-5", "05.03.2024", "2024-02-30", "abcd-ef-gh"])
def test_parse_day_key_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_day_key(bad)


def test_notes_for_missing_day_is_empty():
    assert notes_for({}, MAR_1) == []


def test_add_appends_to_end():
    store = add_note({}, MAR_15, "Standup")
    store = add_note(store, MAR_15, "Meeting")
    assert notes_for(store, MAR_15) == [Note(MAR_15, "Standup"), Note(MAR_15, "Meeting")]
    assert notes_for(store, MAR_15)[-1] == Note(MAR_15, "Meeting")


def test_add_accepts_empty_title():
    store = add_note({}, MAR_1, "")
    assert notes_for(store, MAR_1) == [Note(MAR_1, "")]


def test_operations_do_not_mutate_input():
    empty: dict = {}
    one = add_note(empty, MAR_1, "A")
    assert empty == {}
    two = add_note(one, MAR_1, "B")
    assert notes_for(one, MAR_1) == [Note(MAR_1, "A")]
    delete_note(two, Note(MAR_1, "A"))
    update_note(two, Note(MAR_1, "B"), MAR_5, "B")
    assert notes_for(two, MAR_1) == [Note(MAR_1, "A"), Note(MAR_1, "B")]


def test_add_then_delete_leaves_empty_store():
    store = add_note({}, MAR_15, "Meeting")
    store = delete_note(store, Note(MAR_15, "Meeting"))
    assert store == {}
    assert notes_for(store, MAR_15) == []


def test_delete_keeps_other_notes_in_order():
    store = {}
    for title in ("A", "B", "C"):
        store = add_note(store, MAR_1, title)
    store = delete_note(store, Note(MAR_1, "B"))
    assert [n.title for n in notes_for(store, MAR_1)] == ["A", "C"]


def test_delete_missing_note_is_noop():
    store = add_note({}, MAR_1, "A")
    assert delete_note(store, Note(MAR_1, "Z")) is store
    assert delete_note(store, Note(MAR_5, "A")) is store


def test_delete_removes_only_first_duplicate():
    store = add_note({}, MAR_1, "A")
    store = add_note(store, MAR_1, "B")
    store = add_note(store, MAR_1, "A")
    store = delete_note(store, Note(MAR_1, "A"))
    assert [n.title for n in notes_for(store, MAR_1)] == ["B", "A"]


def test_update_across_days_moves_note():
    store = add_note({}, MAR_1, "A")
    store = update_note(store, Note(MAR_1, "A"), MAR_5, "A")
    assert day_key(MAR_1) not in store
    assert notes_for(store, MAR_5) == [Note(MAR_5, "A")]


def test_update_appends_to_existing_target_day():
    store = add_note({}, MAR_1, "A")
    store = add_note(store, MAR_5, "X")
    store = update_note(store, Note(MAR_1, "A"), MAR_5, "A2")
    assert notes_for(store, MAR_5) == [Note(MAR_5, "X"), Note(MAR_5, "A2")]


def test_update_same_day_moves_note_to_end():
    store = add_note({}, MAR_1, "A")
    store = add_note(store, MAR_1, "B")
    store = update_note(store, Note(MAR_1, "A"), MAR_1, "A!")
    assert [n.title for n in notes_for(store, MAR_1)] == ["B", "A!"]


def test_update_missing_note_is_noop():
    store = add_note({}, MAR_1, "A")
    assert update_note(store, Note(MAR_1, "nope"), MAR_5, "new") is store


def test_update_with_duplicates_replaces_one():
    store = add_note({}, MAR_1, "A")
    store = add_note(store, MAR_1, "A")
    store = update_note(store, Note(MAR_1, "A"), MAR_1, "C")
    assert [n.title for n in notes_for(store, MAR_1)] == ["A", "C"]


def test_note_count():
    store = add_note({}, MAR_1, "A")
    store = add_note(store, MAR_5, "B")
    store = add_note(store, MAR_5, "C")
    assert note_count(store) == 3
    assert note_count({}) == 0


def test_validate_title():
    assert validate_title("  Lunch ") == "Lunch"
    with pytest.raises(NoteValidationError):
        validate_title("   ")
    with pytest.raises(ValueError):
        validate_title("")
