"""Resolve the metadata to store from inline text or a JSON file."""
from __future__ import annotations

import pathlib
from typing import Any, Dict

import orjson

from .loggingx import logger


class InputError(ValueError):
    """Raised when the supplied values cannot be turned into a metadata map."""


def parse_values(text: str) -> Dict[str, str]:
    """Parse ``key1=value1\\nkey2=value2`` into a dictionary.

    Every line must hold exactly one ``=`` with a non-empty key and value
    around it. A single bad line rejects the whole input.
    """

    pairs = [[part.strip() for part in line.strip().split("=")] for line in text.strip().split("\n")]
    invalid = [
        lineno
        for lineno, pair in enumerate(pairs, start=1)
        if len(pair) != 2 or not pair[0] or not pair[1]
    ]
    if invalid:
        logger.debug("Input: %s", text)
        raise InputError(f"Invalid input format on lines: {', '.join(str(n) for n in invalid)}")
    return {key: value for key, value in pairs}


def read_values_file(path: str | pathlib.Path) -> Dict[str, Any]:
    """Load a JSON object from *path*; field values are kept as-is."""

    path = pathlib.Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise InputError(f"Unable to read values file {path}: {exc.strerror or exc}") from exc
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        raise InputError(f"Values file {path} is not valid JSON: {exc}") from exc

    # Arrays and primitives have no keys to store.
    if not isinstance(data, dict):
        raise InputError("Input must be a JSON object.")
    return data


def read_input(values: str | None, values_file: str | None) -> Dict[str, Any]:
    """Return the metadata map from exactly one of *values* or *values_file*."""

    has_values = bool(values and values.strip())
    has_file = bool(values_file and values_file.strip())

    if has_values and has_file:
        raise InputError("Both values and values_file cannot be provided.")
    if has_values:
        return parse_values(values)  # type: ignore[arg-type]
    if has_file:
        return read_values_file(values_file.strip())  # type: ignore[union-attr]
    raise InputError("Either values or values_file must be provided.")
