import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent))

from notekv.git_api import GitError
from notekv.notes import dump_notes


class FakeBridge:
    """In-memory stand-in for :class:`notekv.git_api.GitNotesBridge`."""

    def __init__(self, commit: str = "abc123", stored: Dict[str, Dict[str, Any]] | None = None) -> None:
        self.commit = commit
        self.stored: Dict[str, Dict[str, Any]] = stored or {}
        self.calls: List[str] = []
        self.fail_on: set[str] = set()
        self.raw: Dict[str, str] = {}

    def _call(self, name: str, *args: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise GitError([name, *args], 1, f"{name} exploded")

    def resolve_commit(self, rev: str = "HEAD") -> str:
        self._call("resolve_commit", rev)
        return self.commit

    def fetch_ref(self, ref: str) -> None:
        self.calls.append("fetch_ref")

    def show_note(self, ref: str, commit: str) -> str | None:
        self.calls.append("show_note")
        if ref in self.raw:
            return self.raw[ref]
        existing = self.stored.get(ref)
        return dump_notes(existing) if existing is not None else None

    def read_existing(self, ref: str, commit: str) -> Dict[str, Any] | None:
        self.calls.append("read_existing")
        existing = self.stored.get(ref)
        return dict(existing) if existing is not None else None

    def write_note(self, ref: str, commit: str, notes: Dict[str, Any]) -> None:
        self._call("write_note", ref, commit)
        self.stored[ref] = dict(notes)

    def push_refs(self) -> None:
        self._call("push_refs")


@pytest.fixture
def fake_bridge() -> FakeBridge:
    return FakeBridge()
