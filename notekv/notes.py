"""Helpers for storing key/value metadata inside Git notes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping

import orjson

from .loggingx import logger

if TYPE_CHECKING:  # pragma: no cover
    from .git_api import NotesBridge


@dataclass
class StoreResult:
    """Outcome of :func:`store_notes`."""

    ref: str
    notes: Dict[str, Any] = field(default_factory=dict)
    commit: str | None = None
    skipped: bool = False


def dump_notes(notes: Mapping[str, Any]) -> str:
    """Serialize *notes* as compact JSON."""

    return orjson.dumps(dict(notes)).decode("utf-8")


def load_notes(body: str) -> Dict[str, Any]:
    """Parse a note body; raises :class:`ValueError` unless it is a JSON object."""

    data = orjson.loads(body)
    if not isinstance(data, dict):
        raise ValueError("note body is not a JSON object")
    return data


def merge_notes(existing: Mapping[str, Any] | None, new: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay *new* onto *existing*; values from *new* win on collision."""

    merged: Dict[str, Any] = dict(existing or {})
    merged.update(new)
    return merged


def store_notes(bridge: "NotesBridge", notes: Mapping[str, Any], ref: str) -> StoreResult:
    """Merge *notes* into the note on the current commit and push it.

    Steps run strictly in order: resolve the commit, fetch the notes ref, read
    the existing note, merge, force-write and push. Errors from resolving,
    writing or pushing propagate to the caller.
    """

    if not notes:
        logger.info("No values provided. Skipping note storage.")
        return StoreResult(ref=ref, skipped=True)

    commit = bridge.resolve_commit()
    bridge.fetch_ref(ref)
    existing = bridge.read_existing(ref, commit)
    merged = merge_notes(existing, notes)
    if existing is not None:
        logger.info("Merged notes: %s", dump_notes(merged))
    bridge.write_note(ref, commit, merged)
    bridge.push_refs()
    return StoreResult(ref=ref, notes=merged, commit=commit)
