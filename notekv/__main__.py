"""Command line interface for the notes key/value store."""
from __future__ import annotations

import json
import sys

import click

from .config import load_config
from .git_api import GitError, GitNotesBridge
from .inputs import InputError, read_input
from .loggingx import logger
from .notes import dump_notes, load_notes, store_notes


@click.group()
def main() -> None:
    """Store key/value metadata in git notes."""


@main.command(help="Merge values into the note on HEAD and push refs/notes/*")
@click.option("--values", envvar="INPUT_VALUES", default="", help="Newline separated key=value pairs")
@click.option("--values-file", envvar="INPUT_VALUES_FILE", default="", help="Path to a JSON object file")
@click.option("--custom-ref", envvar="INPUT_CUSTOM_REF", default="", help="Notes ref to use instead of notes-kv")
@click.option("--remote", envvar="INPUT_REMOTE", default="", help="Remote to fetch from and push to")
def store(values: str, values_file: str, custom_ref: str, remote: str) -> None:
    try:
        config = load_config()
        notes = read_input(values, values_file)
        logger.info("Notes to store: %s", dump_notes(notes))

        ref = config.resolve_ref(custom_ref)
        bridge = GitNotesBridge(remote=config.resolve_remote(remote))
        result = store_notes(bridge, notes, ref)
    except (InputError, GitError) as exc:
        _fail(str(exc))
    except Exception as exc:  # noqa: BLE001 - every failure must mark the run failed
        _fail(f"An unknown error occurred: {exc}")
    else:
        if not result.skipped:
            logger.info("Notes stored successfully.")


@main.command(help="Print the note stored on a revision")
@click.argument("rev", default="HEAD")
@click.option("--custom-ref", envvar="INPUT_CUSTOM_REF", default="", help="Notes ref to read from")
@click.option("--json-out", is_flag=True, default=False, help="Emit JSON instead of key=value lines")
def show(rev: str, custom_ref: str, json_out: bool) -> None:
    config = load_config()
    bridge = GitNotesBridge(remote=config.notes.remote)
    try:
        commit = bridge.resolve_commit(rev)
    except GitError as exc:
        _fail(str(exc))
    ref = config.resolve_ref(custom_ref)
    body = bridge.show_note(ref, commit)
    if body is None:
        logger.info("No note on %s under refs/notes/%s.", rev, ref)
        return
    try:
        notes = load_notes(body)
    except ValueError:
        logger.warning("Note on %s under refs/notes/%s is not a JSON object; printing it as stored.", rev, ref)
        click.echo(body)
        return
    if json_out:
        click.echo(json.dumps(notes, indent=2, sort_keys=True))
    else:
        for key, value in notes.items():
            click.echo(f"{key}={value}")


def _fail(message: str) -> None:
    logger.error(message)
    sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
