"""Rich rendering helpers for the FitBot CLI."""

from __future__ import annotations

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fitbot.chat.session import ERROR_NOTICE
from fitbot.errors import TransportError
from fitbot.schemas.chat import ChatMessage
from fitbot.schemas.plan import FitnessPlan

_CATEGORY_STYLES: dict[str, str] = {
    "Underweight": "bold yellow",
    "Healthy": "bold green",
    "Overweight": "bold dark_orange",
    "Obese": "bold red",
}


def category_style(category: str) -> str:
    """Rich style for a BMI category label."""
    return _CATEGORY_STYLES.get(category, "white")


def render_plan(console: Console, plan: FitnessPlan, name: str = "") -> None:
    """Print a generated plan: header, exercises, meals, week, notes."""
    title = f"{name}'s Fitness Plan" if name else "Your Fitness Plan"
    header = Text()
    header.append(f"BMI: {plan.bmi} ", style=category_style(plan.category))
    header.append(f"({plan.category})", style=category_style(plan.category))
    console.print(Panel(header, title=f"[bold]{title}[/bold]", border_style="green"))

    lists = Table(show_header=True, show_lines=False, expand=True)
    lists.add_column("Exercise Plan", style="cyan")
    lists.add_column("Diet Plan", style="magenta")
    for index in range(max(len(plan.exercises), len(plan.diet))):
        lists.add_row(
            plan.exercises[index] if index < len(plan.exercises) else "",
            plan.diet[index] if index < len(plan.diet) else "",
        )
    console.print(lists)

    week = Table(title="Weekly Plan", show_lines=True)
    week.add_column("Day", style="bold")
    week.add_column("Focus")
    week.add_column("Duration", justify="right")
    week.add_column("Exercises", style="dim")
    for day in plan.weekly_plan:
        if day.focus == "Rest Day":
            focus = f"[dim]{day.focus}[/dim]"
        elif day.focus == "Active Recovery":
            focus = f"[yellow]{day.focus}[/yellow]"
        else:
            focus = f"[green]{day.focus}[/green]"
        week.add_row(day.day, focus, day.duration, ", ".join(day.exercises))
    console.print(week)

    notes = Text()
    for note in plan.notes:
        notes.append("→ ", style="green")
        notes.append(note + "\n")
    console.print(Panel(notes, title="[bold]Important Notes[/bold]", border_style="blue"))


class ChatRenderer:
    """Live terminal view of one streaming reply.

    Wire update() and error() into ChatSession's callbacks, then wrap
    each send() in start()/stop().
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._live: Live | None = None
        self._text = Text()

    def greet(self, message: ChatMessage) -> None:
        self._console.print(f"[bold green]FitBot:[/bold green] {message.content}")

    def start(self) -> None:
        self._text = Text("Thinking...", style="dim")
        self._live = Live(
            self._renderable(),
            console=self._console,
            refresh_per_second=12,
            transient=False,
        )
        self._live.start()

    def update(self, message: ChatMessage) -> None:
        self._text = Text(message.content)
        if self._live is not None:
            self._live.update(self._renderable())

    def error(self, error: TransportError) -> None:
        self._text = Text("")
        if self._live is not None:
            self._live.update(self._renderable())
        self._console.print(f"[red]Error:[/red] {ERROR_NOTICE}")

    def stop(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def _renderable(self) -> Group:
        label = Text("FitBot: ", style="bold green")
        return Group(label + self._text)
