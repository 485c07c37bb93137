"""Logging configuration helpers for the notes key/value store."""
from __future__ import annotations

import logging
import os

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    INFO records are printed as plain text; the other levels are prefixed with
    ``::debug::``, ``::warning::`` or ``::error::`` so the runner surfaces them
    as annotations.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def escape_data(message: str) -> str:
    """Escape a workflow command payload so multi-line text stays one annotation."""

    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _make_formatter() -> logging.Formatter:
    if os.environ.get("GITHUB_ACTIONS") == "true":
        return WorkflowCommandFormatter("%(message)s")
    return logging.Formatter("%(levelname)s %(message)s")


logger = logging.getLogger("notekv")

_handler = logging.StreamHandler()
_handler.setFormatter(_make_formatter())
logger.addHandler(_handler)
logger.setLevel(os.environ.get("NOTEKV_LOG", "INFO"))
