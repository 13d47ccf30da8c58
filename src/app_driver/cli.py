"""CLI entry point: click-based commands."""

from __future__ import annotations

import json
import pathlib
import sys
from typing import Optional, Tuple

import click

from app_driver import __version__
from app_driver.core.errors import (
    EXIT_GENERAL_ERROR,
    EXIT_SERIALIZATION_ERROR,
    SerializationException,
)


@click.group()
@click.version_option(__version__, prog_name="app-driver")
def main():
    """Encode, decode and inspect remote wait conditions."""
    pass


# ── init ──────────────────────────────────────────────────────────

@main.command()
@click.option("--path", "config_path", default=None, metavar="FILE", help="Config file to create")
def init(config_path: Optional[str]):
    """Create the default app-driver.json config."""
    from app_driver.config import ConfigStore

    store = ConfigStore(config_path)
    if store.ensure_default():
        click.echo(f"Created {store.path}")
    else:
        click.echo(f"{store.path} already exists")


# ── kinds ─────────────────────────────────────────────────────────

@main.command()
def kinds():
    """List the wait condition kinds understood by the decoder."""
    from app_driver.waits.conditions import CONDITION_NAMES
    from app_driver.waits.documents import ALIASES

    by_name = {name: alias for alias, name in ALIASES.items()}
    for name in CONDITION_NAMES:
        click.echo(f"  {name}  ({by_name.get(name, '-')})")


# ── encode ────────────────────────────────────────────────────────

@main.command()
@click.argument("aliases", nargs=-1)
@click.option("--file", "doc_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML/JSON condition document")
@click.option("--command", "as_command", is_flag=True, help="Wrap in a waitForCondition command")
@click.option("--timeout-ms", default=None, type=click.IntRange(min=0),
              help="Command timeout (with --command)")
def encode(aliases: Tuple[str, ...], doc_path: Optional[str], as_command: bool,
           timeout_ms: Optional[int]):
    """Build a condition and print its wire map.

    ALIASES are condition names or short aliases (see `kinds`); more than
    one is combined in the given order.
    """
    from app_driver.waits.commands import WaitForCondition
    from app_driver.waits.documents import condition_from_aliases, load_condition_document

    if bool(aliases) == bool(doc_path):
        raise click.UsageError("Give either condition aliases or --file, not both")
    try:
        if doc_path:
            condition = load_condition_document(doc_path)
        else:
            condition = condition_from_aliases(aliases)
    except SerializationException as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_SERIALIZATION_ERROR)

    if as_command:
        payload = WaitForCondition(condition, timeout_ms).serialize()
    else:
        payload = condition.serialize()
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


# ── decode ────────────────────────────────────────────────────────

@main.command()
@click.argument("payload")
def decode(payload: str):
    """Decode a wire map and print it as a nested condition document.

    PAYLOAD is JSON text, @FILE, or - for stdin. Command envelopes
    (with a "command" key) are accepted too.
    """
    from app_driver.constants import COMMAND_KEY, TIMEOUT_KEY
    from app_driver.waits.commands import decode_command
    from app_driver.waits.conditions import deserialize_condition
    from app_driver.waits.documents import condition_to_document

    if payload == "-":
        text = click.get_text_stream("stdin").read()
    elif payload.startswith("@"):
        try:
            text = pathlib.Path(payload[1:]).read_text(encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: cannot read {payload[1:]}: {exc}", err=True)
            sys.exit(EXIT_GENERAL_ERROR)
    else:
        text = payload

    try:
        try:
            json_map = json.loads(text)
        except ValueError as exc:
            raise SerializationException(f"Invalid JSON: {exc}") from exc
        if not isinstance(json_map, dict):
            raise SerializationException(f"Expected a JSON object, got {type(json_map).__name__}")
        if COMMAND_KEY in json_map:
            command = decode_command(json_map)
            doc = {COMMAND_KEY: command.kind}
            if command.timeout_ms is not None:
                doc[TIMEOUT_KEY] = command.timeout_ms
            doc.update(condition_to_document(command.condition))
        else:
            doc = condition_to_document(deserialize_condition(json_map))
    except SerializationException as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_SERIALIZATION_ERROR)

    click.echo(json.dumps(doc, indent=2, ensure_ascii=False))
