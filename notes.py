"""Day-indexed note store.

The store is a plain ``dict`` mapping a day key (``YYYY-MM-DD``) to the
insertion-ordered list of notes on that day. Every operation here returns a
new store and leaves its input untouched; a key only exists while its list
is non-empty.

Notes have no surrogate id: a note is identified by its (date, title) value,
so with duplicate notes on one day an update or delete only touches the
first match.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import NamedTuple

logger = logging.getLogger("mini_calendar.notes")


class Note(NamedTuple):
    date: date
    title: str


NoteStore = dict[str, list[Note]]


class NoteValidationError(ValueError):
    """Raised when a note title is rejected by :func:`validate_title`."""


def day_key(d: date) -> str:
    """Return the canonical, zero-padded ``YYYY-MM-DD`` key for ``d``."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_day_key(key: str) -> date:
    """Inverse of :func:`day_key`. Raises ValueError on anything else."""
    text = key.strip()
    parts = text.split("-")
    if len(parts) != 3 or [len(p) for p in parts] != [4, 2, 2] \
            or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected a date as YYYY-MM-DD, got {key!r}")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def validate_title(title: str) -> str:
    """Return ``title`` stripped, or raise NoteValidationError if blank."""
    stripped = title.strip()
    if not stripped:
        raise NoteValidationError("Note title must not be empty")
    return stripped


def notes_for(store: NoteStore, d: date) -> list[Note]:
    """Return the notes for ``d`` in insertion order (empty if none)."""
    return list(store.get(day_key(d), []))


def note_count(store: NoteStore) -> int:
    """Return the total number of notes across all days."""
    return sum(len(lst) for lst in store.values())


def add_note(store: NoteStore, d: date, title: str) -> NoteStore:
    """Append ``Note(d, title)`` to the end of its day's list."""
    key = day_key(d)
    updated = dict(store)
    updated[key] = [*store.get(key, []), Note(d, title)]
    logger.debug("Added note %r on %s", title, key)
    return updated


def _without(store: NoteStore, note: Note) -> NoteStore | None:
    """Return a copy of ``store`` minus the first match, or None if absent."""
    key = day_key(note.date)
    lst = store.get(key, [])
    try:
        idx = lst.index(note)
    except ValueError:
        return None
    remaining = lst[:idx] + lst[idx + 1:]
    updated = dict(store)
    if remaining:
        updated[key] = remaining
    else:
        del updated[key]
    return updated


def delete_note(store: NoteStore, note: Note) -> NoteStore:
    """Remove the first note equal to ``note``. Missing notes are a no-op."""
    updated = _without(store, note)
    if updated is None:
        logger.debug("Delete ignored, no note %r on %s", note.title, day_key(note.date))
        return store
    logger.debug("Deleted note %r on %s", note.title, day_key(note.date))
    return updated


def update_note(store: NoteStore, old: Note, new_date: date,
                new_title: str) -> NoteStore:
    """Replace ``old`` with ``Note(new_date, new_title)``.

    The old note is removed from its day (dropping the key if that empties
    the list) and the new one is appended to ``new_date``'s list, which may
    be the same day. If ``old`` is not in the store nothing changes.
    """
    updated = _without(store, old)
    if updated is None:
        logger.debug("Update ignored, no note %r on %s", old.title, day_key(old.date))
        return store
    return add_note(updated, new_date, new_title)
