"""Git helper utilities and the notes bridge."""
from __future__ import annotations

import pathlib
import subprocess
from typing import Any, Dict, Iterable, Protocol

from .loggingx import logger
from .notes import dump_notes, load_notes


class GitError(RuntimeError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, args: Iterable[str], returncode: int | None = None, stderr: str = "") -> None:
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Failed to run git {' '.join(self.git_args)}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


def run_git(args: Iterable[str], cwd: pathlib.Path | str | None = None) -> str:
    """Run ``git`` with ``args`` and return its stdout."""

    args = list(args)
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise GitError(args, stderr="git executable not found") from exc
    if proc.returncode != 0:
        raise GitError(args, proc.returncode, proc.stderr)
    return proc.stdout.strip()


class NotesBridge(Protocol):
    """Operations the store pipeline needs from version control."""

    def resolve_commit(self, rev: str = "HEAD") -> str: ...

    def fetch_ref(self, ref: str) -> None: ...

    def show_note(self, ref: str, commit: str) -> str | None: ...

    def read_existing(self, ref: str, commit: str) -> Dict[str, Any] | None: ...

    def write_note(self, ref: str, commit: str, notes: Dict[str, Any]) -> None: ...

    def push_refs(self) -> None: ...


class GitNotesBridge:
    """:class:`NotesBridge` backed by the ``git`` executable."""

    def __init__(self, remote: str = "origin", cwd: pathlib.Path | str | None = None) -> None:
        self.remote = remote
        self.cwd = cwd

    def _git(self, *args: str) -> str:
        return run_git(args, cwd=self.cwd)

    def resolve_commit(self, rev: str = "HEAD") -> str:
        return self._git("rev-parse", rev)

    def fetch_ref(self, ref: str) -> None:
        """Fetch ``refs/notes/<ref>`` from the remote into the local ref.

        The remote ref does not exist before the first push, so failures are
        only reported.
        """

        try:
            self._git("fetch", self.remote, f"refs/notes/{ref}:refs/notes/{ref}")
        except GitError as exc:
            logger.info("Note: %s. This may be normal when adding notes for the first time.", exc)

    def show_note(self, ref: str, commit: str) -> str | None:
        """Return the raw note body on *commit*, or ``None`` when there is none."""

        try:
            return self._git("notes", "--ref", ref, "show", commit)
        except GitError:
            return None

    def read_existing(self, ref: str, commit: str) -> Dict[str, Any] | None:
        """Return the JSON object stored on *commit*, or ``None``.

        ``None`` covers both a missing note and a note that is not a JSON
        object; in the latter case the new note replaces it wholesale.
        """

        body = self.show_note(ref, commit)
        if body is None:
            logger.info("No existing note found. A new note will be created.")
            return None
        logger.info("Existing note found. Preparing to update.")
        if not body:
            return None
        try:
            return load_notes(body)
        except ValueError:
            logger.warning("Failed to parse existing note as JSON. Overwriting with new note.")
            return None

    def write_note(self, ref: str, commit: str, notes: Dict[str, Any]) -> None:
        self._git("notes", "--ref", ref, "add", "-f", "-m", dump_notes(notes), commit)
        logger.info("Note added or updated successfully.")

    def push_refs(self) -> None:
        self._git("push", self.remote, "refs/notes/*", "-f")
