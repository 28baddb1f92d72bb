"""Immutable window state and its transitions.

The window keeps exactly one ``CalendarState`` and swaps it for the value
returned by each transition below; rendering only ever reads it.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import NamedTuple

from calendar_logic import (
    MAX_DATE,
    MIN_DATE,
    SUNDAY,
    Cell,
    clamp_month,
    month_grid,
    step_month,
)
from notes import Note, NoteStore, add_note, delete_note, update_note

logger = logging.getLogger("mini_calendar.state")

CLOSED = "closed"
CREATE = "create"
EDIT = "edit"


class Editor(NamedTuple):
    mode: str = CLOSED
    original: Note | None = None
    form_date: date | None = None
    form_title: str = ""

    @property
    def is_open(self) -> bool:
        return self.mode != CLOSED


class CalendarState(NamedTuple):
    current_month: date
    selected_date: date
    notes: NoteStore
    editor: Editor = Editor()
    min_date: date = MIN_DATE
    max_date: date = MAX_DATE


def initial_state(today: date, min_date: date = MIN_DATE,
                  max_date: date = MAX_DATE) -> CalendarState:
    """Empty store showing today's month, or the nearest month within bounds."""
    return CalendarState(
        current_month=clamp_month(today, min_date, max_date),
        selected_date=today,
        notes={},
        min_date=min_date,
        max_date=max_date,
    )


def visible_cells(state: CalendarState, first_weekday: int = SUNDAY) -> list[Cell]:
    """Return the grid cells for the displayed month."""
    return month_grid(state.current_month, first_weekday)


# ------------------------------------------------------------------
# Navigation / selection
# ------------------------------------------------------------------
def navigate(state: CalendarState, direction: int) -> tuple[CalendarState, bool]:
    """Step the displayed month; ``moved`` is False when clamped at a bound."""
    month, moved = step_month(state.current_month, direction,
                              state.min_date, state.max_date)
    if not moved:
        return state, False
    return state._replace(current_month=month), True


def go_today(state: CalendarState, today: date) -> CalendarState:
    """Select today and show its month, kept within the state's bounds."""
    month = clamp_month(today, state.min_date, state.max_date)
    return state._replace(current_month=month, selected_date=today)


def select(state: CalendarState, d: date) -> CalendarState:
    """Make ``d`` the selected day without changing the displayed month."""
    return state._replace(selected_date=d)


def delete(state: CalendarState, note: Note) -> CalendarState:
    """Delete ``note``; a note that is not in the store is ignored."""
    return state._replace(notes=delete_note(state.notes, note))


# ------------------------------------------------------------------
# Editor:  closed -> create|edit -> closed
# ------------------------------------------------------------------
def open_for_create(state: CalendarState) -> CalendarState:
    """Open an empty editor dated on the selected day."""
    editor = Editor(CREATE, None, state.selected_date, "")
    return state._replace(editor=editor)


def open_for_edit(state: CalendarState, note: Note) -> CalendarState:
    # Snapshot the original so save() knows which entry to replace
    editor = Editor(EDIT, note, note.date, note.title)
    return state._replace(editor=editor)


def cancel(state: CalendarState) -> CalendarState:
    """Close the editor and discard the form."""
    return state._replace(editor=Editor())


def save(state: CalendarState, form_date: date, form_title: str) -> CalendarState:
    """Commit the editor form and close it. No-op while the editor is closed."""
    editor = state.editor
    if not editor.is_open:
        logger.debug("Save ignored, editor is closed")
        return state
    if editor.mode == EDIT:
        store = update_note(state.notes, editor.original, form_date, form_title)
    else:
        store = add_note(state.notes, form_date, form_title)
    return state._replace(notes=store, editor=Editor())
