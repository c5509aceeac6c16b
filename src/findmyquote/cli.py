"""CLI entry point for the quote tool."""

from __future__ import annotations

import logging
import uuid

import click
from rich.console import Console

console = Console()

DEFAULT_SESSION = "default"

CONTINUE_WORDS = {"more", "next", "yes", "another"}
STOP_WORDS = {"no", "stop", "cancel", "quit", "exit"}


@click.group()
@click.version_option(package_name="find-my-quote")
@click.option("--verbose", "-v", is_flag=True, help="Log lookups and session changes.")
def cli(verbose: bool):
    """quote - Find the movie a quote comes from."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# quote env
# ---------------------------------------------------------------------------


@cli.group(invoke_without_command=True)
@click.pass_context
def env(ctx):
    """Show or configure settings.

    Run without arguments to see current status.
    Use `quote env set KEY value` to save a setting to ~/.findmyquote/.env.
    """
    if ctx.invoked_subcommand is not None:
        return

    from findmyquote.config import PERSISTENT_ENV, check_env

    statuses = check_env()
    console.print("Settings:")
    console.print()
    for var, is_set, info in statuses:
        status = "[green]set[/green]" if is_set else f"[dim]default ({info['default']})[/dim]"
        console.print(f"  {var}: {status}")
        console.print(f"    {info['description']}")
        console.print()

    console.print(f"Config file: {PERSISTENT_ENV}", style="dim")


@env.command("set")
@click.argument("key")
@click.argument("value")
def env_set(key: str, value: str):
    """Save a setting to ~/.findmyquote/.env.

    KEY: one of QUODB_API_URL, API_TIMEOUT, FINDMYQUOTE_PAGE_SIZE
    VALUE: the setting value
    """
    from findmyquote.config import VALID_KEYS, save_key

    key = key.upper()
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key: {key}[/red]")
        console.print(f"Valid keys: {', '.join(sorted(VALID_KEYS))}")
        raise SystemExit(1)

    path = save_key(key, value)
    console.print(f"Saved {key} to {path}")


# ---------------------------------------------------------------------------
# quote ask / more / reset
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("phrase")
@click.option("--session", "-s", "session_id", default=DEFAULT_SESSION, help="Session name.")
@click.option("--ssml", is_flag=True, help="Show the spoken SSML instead of the card text.")
def ask(phrase: str, session_id: str, ssml: bool):
    """Look up the movie for a quote.

    PHRASE: the quote, e.g. "I am your father"
    """
    from findmyquote.renderer import render_output
    from findmyquote.session import FileSessionStore
    from findmyquote.skill import FIRST_MOVIE_INTENT, SLOT_PHRASE, QuoteSkill

    try:
        store = FileSessionStore()
        attrs = store.load(session_id)
        output = QuoteSkill().on_intent(
            FIRST_MOVIE_INTENT, {SLOT_PHRASE: phrase}, attrs, session_id=session_id
        )
        store.save(session_id, attrs)
        render_output(output, ssml=ssml)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@cli.command()
@click.option("--session", "-s", "session_id", default=DEFAULT_SESSION, help="Session name.")
@click.option("--ssml", is_flag=True, help="Show the spoken SSML instead of the card text.")
def more(session_id: str, ssml: bool):
    """Read the next movie for the last quote."""
    from findmyquote.renderer import render_output
    from findmyquote.session import FileSessionStore
    from findmyquote.skill import NEXT_MOVIE_INTENT, QuoteSkill

    try:
        store = FileSessionStore()
        attrs = store.load(session_id)
        output = QuoteSkill().on_intent(NEXT_MOVIE_INTENT, {}, attrs, session_id=session_id)
        store.save(session_id, attrs)
        render_output(output, ssml=ssml)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@cli.command()
@click.option("--session", "-s", "session_id", default=DEFAULT_SESSION, help="Session name.")
def reset(session_id: str):
    """Forget the stored search for a session."""
    from findmyquote.session import FileSessionStore

    try:
        if FileSessionStore().clear(session_id):
            console.print(f"Cleared session {session_id}")
        else:
            console.print(f"[yellow]No stored session {session_id}[/yellow]")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# quote chat
# ---------------------------------------------------------------------------


def _utterance_to_intent(utterance: str) -> tuple[str, dict]:
    """Map a typed line to an intent name and its slots."""
    from findmyquote.skill import (
        FIRST_MOVIE_INTENT,
        HELP_INTENT,
        NEXT_MOVIE_INTENT,
        SLOT_PHRASE,
        STOP_INTENT,
    )

    word = utterance.strip().lower().rstrip("?!.")
    if word in CONTINUE_WORDS:
        return NEXT_MOVIE_INTENT, {}
    if word in STOP_WORDS:
        return STOP_INTENT, {}
    if word == "help":
        return HELP_INTENT, {}
    return FIRST_MOVIE_INTENT, {SLOT_PHRASE: utterance.strip()}


@cli.command()
@click.option("--ssml", is_flag=True, help="Show the spoken SSML instead of the card text.")
def chat(ssml: bool):
    """Talk to the skill turn by turn.

    Say a quote to search, "more" for the next movie, "help", or "stop".
    """
    from findmyquote.renderer import render_output
    from findmyquote.skill import QuoteSkill

    try:
        skill = QuoteSkill()
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    session_id = uuid.uuid4().hex
    attrs: dict = {}
    turn = 0

    skill.on_session_started(f"req-{turn}", session_id)
    render_output(skill.on_launch(f"req-{turn}", session_id), ssml=ssml)

    try:
        while True:
            utterance = click.prompt("you", default="", show_default=False)
            if not utterance.strip():
                continue
            turn += 1
            intent, slots = _utterance_to_intent(utterance)
            try:
                output = skill.on_intent(
                    intent, slots, attrs, request_id=f"req-{turn}", session_id=session_id
                )
            except Exception as e:
                console.print(f"[red]Error: {e}[/red]")
                continue
            render_output(output, ssml=ssml)
            if output.should_end_session:
                break
    finally:
        skill.on_session_ended(f"req-{turn}", session_id, attrs)
