"""Replybot CLI — command-line interface for chatting and inspecting the learned model."""

from __future__ import annotations

import logging
import sys

import click

from replybot import __version__
from replybot.core.config import ReplybotConfig
from replybot.core.engine import ReplybotEngine, load_catalog
from replybot.core.session import ChatSession
from replybot.intent.catalog import CatalogError
from replybot.memory.store import JsonModelStore


@click.group()
@click.version_option(version=__version__, prog_name="Replybot")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Replybot — rule-based chatbot that learns from its own replies."""
    level = "DEBUG" if verbose else ReplybotConfig().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
def chat() -> None:
    """Start an interactive chat session."""
    config = ReplybotConfig()

    try:
        with ReplybotEngine(config) as engine:
            ChatSession(engine).run()
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("text", nargs=-1, required=True)
def ask(text: tuple[str, ...]) -> None:
    """Answer a single message and remember the reply."""
    config = ReplybotConfig()

    try:
        with ReplybotEngine(config) as engine:
            reply = engine.respond(" ".join(text))
        click.echo(reply)
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--input", "-i", "input_text", default=None, help="Show replies for one input.")
def memory(input_text: str | None) -> None:
    """Show what has been learned so far."""
    config = ReplybotConfig()
    result = JsonModelStore(config.model_path).load()
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)
    table = result.data or {}

    if input_text is not None:
        key = input_text.strip().lower()
        counts = table.get(key)
        if not counts:
            click.echo(f"Nothing learned for '{key}'.")
            return
        for reply, count in sorted(counts.items(), key=lambda kv: -kv[1]):
            click.echo(f"  {count:>4}  {reply}")
        return

    if not table:
        click.echo("No responses learned yet.")
        return

    click.echo(f"Model: {config.model_path}")
    click.echo(f"Inputs: {len(table)}")
    for key, counts in table.items():
        click.echo(f"\n{key!r}")
        click.echo(f"  Replies: {len(counts)}")
        click.echo(f"  Observations (decayed): {sum(counts.values())}")


@main.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
def forget(yes: bool) -> None:
    """Delete the persisted model."""
    config = ReplybotConfig()
    store = JsonModelStore(config.model_path)

    if not yes:
        click.confirm(f"Delete {store.path}?", abort=True)

    try:
        removed = store.delete()
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if removed:
        click.echo(f"Removed {store.path}.")
    else:
        click.echo("No persisted model found.")


@main.command()
def intents() -> None:
    """List intents in evaluation order."""
    config = ReplybotConfig()

    try:
        catalog = load_catalog(config)
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for intent in catalog:
        click.echo(f"{intent.name}  (priority {intent.priority})")
        click.echo(f"  Pattern: {intent.pattern.pattern}")
        click.echo(f"  Responses: {len(intent.responses)}")


if __name__ == "__main__":
    main()
