"""Configuration loader for :mod:`notekv`."""
from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import importlib.util
import pathlib
from types import ModuleType

tomllib: ModuleType
if importlib.util.find_spec("tomllib") is not None:  # pragma: no cover - depends on runtime Python version
    tomllib = importlib.import_module("tomllib")
else:  # pragma: no cover - exercised on Python < 3.11
    tomllib = importlib.import_module("tomli")

DEFAULT_NOTES_REF = "notes-kv"
DEFAULT_REMOTE = "origin"
CONFIG_FILENAME = ".notekv.toml"


@dataclass
class NotesConfig:
    """Where notes are stored and pushed."""

    ref: str = DEFAULT_NOTES_REF
    remote: str = DEFAULT_REMOTE


@dataclass
class Config:
    """Complete configuration tree."""

    root: pathlib.Path
    notes: NotesConfig = field(default_factory=NotesConfig)

    def resolve_ref(self, custom_ref: str | None) -> str:
        """Return *custom_ref* when it is non-blank, else the configured ref."""

        if custom_ref and custom_ref.strip():
            return custom_ref.strip()
        return self.notes.ref

    def resolve_remote(self, remote: str | None) -> str:
        if remote and remote.strip():
            return remote.strip()
        return self.notes.remote


def load_config(start: pathlib.Path | None = None) -> Config:
    """Load ``.notekv.toml`` from *start* or its parents.

    If no configuration file is present a :class:`Config` with defaults is
    returned. The ``root`` attribute will reference the directory where the
    configuration file was found, or ``start``/``cwd`` when absent.
    """

    if start is None:
        start = pathlib.Path.cwd()
    cfg_path = _find_config(start)
    root = cfg_path.parent if cfg_path else start
    config = Config(root=root)
    if not cfg_path:
        return config

    with cfg_path.open("rb") as fh:
        data = tomllib.load(fh)

    notes_data = data.get("notes", {})
    config.notes = NotesConfig(
        ref=str(notes_data.get("ref") or config.notes.ref),
        remote=str(notes_data.get("remote") or config.notes.remote),
    )
    return config


def _find_config(start: pathlib.Path) -> pathlib.Path | None:
    """Return the path to ``.notekv.toml`` searching upwards from ``start``."""

    for directory in [start, *start.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
