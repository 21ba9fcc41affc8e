"""FitBot CLI — Typer + Rich terminal interface.

Commands: chat, plan, serve.
"""

from __future__ import annotations

import asyncio
import logging
import os

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from fitbot import __version__
from fitbot.chat.session import ChatSession
from fitbot.cli_display import ChatRenderer, render_plan
from fitbot.errors import InvalidPlanInput
from fitbot.keys import CHAT_URL_ENV, SUPABASE_KEY_ENV, load_keys_env
from fitbot.planner.generator import generate_plan
from fitbot.schemas.plan import (
    ActivityLevel,
    DietPreference,
    Equipment,
    Gender,
    Goal,
    PlanRequest,
)
from fitbot.settings import load_settings
from fitbot.streaming.transport import ChatTransport

# Load keys from ~/.fitbot/keys.env and .env on startup
load_keys_env()

console = Console()

app = typer.Typer(
    name="fitbot",
    help="AI fitness coach: streaming chat, plan generation, and the API server.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_EXIT_WORDS = {"exit", "quit", ":q"}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"fitbot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug logging.",
    ),
) -> None:
    """FitBot — your AI fitness coach."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ── chat ─────────────────────────────────────────────────────────


@app.command()
def chat(
    url: str = typer.Option(
        None, "--url",
        help=f"Chat endpoint. Defaults to ${CHAT_URL_ENV} or the Supabase function URL.",
    ),
    key: str = typer.Option(
        None, "--key",
        envvar=SUPABASE_KEY_ENV,
        help="Bearer key sent with each request.",
        show_default=False,
    ),
    message: str = typer.Option(
        None, "--message", "-m",
        help="Send one message, print the reply, and exit.",
    ),
) -> None:
    """Chat with FitBot. Replies stream in as they are generated."""
    settings = load_settings()
    endpoint = url or settings.chat.url
    if not endpoint:
        console.print(
            f"[red]No chat endpoint configured.[/red] "
            f"Pass --url or set {CHAT_URL_ENV} / SUPABASE_URL."
        )
        raise typer.Exit(1)

    transport = ChatTransport(
        endpoint,
        key or os.environ.get(SUPABASE_KEY_ENV, ""),
        timeout=settings.chat.timeout,
        chunk_size=settings.chat.chunk_size,
    )
    renderer = ChatRenderer(console)
    session = ChatSession(
        transport,
        greeting=settings.chat.greeting,
        max_line_retries=settings.chat.max_line_retries,
        on_update=renderer.update,
        on_error=renderer.error,
    )

    def _send(text: str) -> bool:
        renderer.start()
        try:
            reply = asyncio.run(session.send(text))
        finally:
            renderer.stop()
        return reply is not None

    if message is not None:
        if not _send(message):
            raise typer.Exit(1)
        return

    renderer.greet(session.messages[0])
    while True:
        try:
            text = Prompt.ask("[bold cyan]You[/bold cyan]", console=console)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if text.strip().lower() in _EXIT_WORDS:
            break
        if not text.strip():
            continue
        _send(text)


# ── plan ─────────────────────────────────────────────────────────


@app.command()
def plan(
    height: float = typer.Option(..., "--height", help="Height in centimetres."),
    weight: float = typer.Option(..., "--weight", help="Weight in kilograms."),
    goal: Goal = typer.Option(Goal.MAINTAIN, "--goal", "-g", help="Training goal."),
    activity: ActivityLevel = typer.Option(
        ActivityLevel.MODERATE, "--activity", "-a", help="Activity level.",
    ),
    diet: list[DietPreference] = typer.Option(
        None, "--diet", "-d", help="Diet preference (repeatable). Defaults to veg.",
    ),
    equipment: list[Equipment] = typer.Option(
        None, "--equipment", "-e", help="Available equipment (repeatable).",
    ),
    name: str = typer.Option("", "--name", help="Name shown on the plan."),
    age: int = typer.Option(None, "--age", help="Age in years."),
    gender: Gender = typer.Option(Gender.MALE, "--gender", help="Gender."),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON."),
) -> None:
    """Generate a personalised fitness plan."""
    request = PlanRequest(
        name=name,
        age=age,
        gender=gender,
        height=height,
        weight=weight,
        activity_level=activity,
        goal=goal,
        diet_preferences=diet or [],
        equipment=equipment or [],
    )
    try:
        result = generate_plan(request)
    except InvalidPlanInput as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    render_plan(console, result, name)


# ── serve ────────────────────────────────────────────────────────


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
) -> None:
    """Run the FitBot HTTP API."""
    try:
        from fitbot.api.app import create_app
    except ImportError:
        console.print(
            "[red]The API server requires extra dependencies.[/red]\n"
            "Install with: [bold]pip install fitbot\\[server][/bold]"
        )
        raise typer.Exit(1)

    import uvicorn

    console.print(f"[green]FitBot API listening on http://{host}:{port}[/green]")
    uvicorn.run(create_app(), host=host, port=port, log_level="warning")


# ── Entry point ──────────────────────────────────────────────────

if __name__ == "__main__":
    app()
