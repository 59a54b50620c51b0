import asyncio
import logging
import os

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from backend.src.client import TaskListView, TodoApiClient
from backend.src.web.config import config

console = Console()
logger = logging.getLogger(__name__)


def clear_screen():
    os.system("cls" if os.name == "nt" else "clear")


def show_header():
    console.print(
        Panel.fit(
            "[bold cyan]Todo App[/bold cyan]\n"
            "[dim]Stay organized and get things done![/dim]",
            border_style="cyan",
        )
    )


def build_stats_table(view: TaskListView) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, expand=False)
    table.add_column("Total Tasks", justify="center", style="blue")
    table.add_column("Completed", justify="center", style="green")
    table.add_column("Remaining", justify="center", style="dark_orange")
    table.add_row(str(view.total), str(view.completed_count), str(view.remaining))
    return table


def build_task_table(view: TaskListView) -> Table:
    table = Table(title="Your Tasks", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("", justify="center")
    table.add_column("Task")
    table.add_column("Created", style="dim")

    for position, todo in enumerate(view.todos, start=1):
        if todo.completed:
            mark = "[green]✓ Done[/green]"
            text = f"[strike dim]{todo.description}[/strike dim]"
        else:
            mark = "[dim]○[/dim]"
            text = todo.description
        table.add_row(
            str(position),
            mark,
            text,
            todo.created_at.astimezone().strftime("%Y-%m-%d"),
        )
    return table


def render(view: TaskListView):
    show_header()
    console.print(build_stats_table(view))
    console.print()

    if not view.todos:
        console.print(
            Panel(
                "[bold]No tasks yet![/bold]\n[dim]Add your first task to get started.[/dim]",
                border_style="dim",
            )
        )
    else:
        console.print(build_task_table(view))

    if view.last_error:
        console.print(f"[red]{view.last_error}[/red]")


def pick_task(view: TaskListView, action: str):
    """Ask for a row number; None when the list is empty or input is invalid."""
    if not view.todos:
        console.print("[yellow]No tasks to choose from.[/yellow]")
        return None

    raw = Prompt.ask(f"Row number to {action}")
    try:
        position = int(raw)
    except ValueError:
        console.print(f"[red]Not a number: {raw}[/red]")
        return None
    if not 1 <= position <= view.total:
        console.print(f"[red]No row {position}[/red]")
        return None
    return view.todos[position - 1]


async def run_menu(base_url: str, timeout: float = 10.0):
    async with TodoApiClient(base_url, timeout=timeout) as client:
        view = TaskListView(client)
        await view.load()

        while True:
            clear_screen()
            render(view)

            console.print(
                "\n[dim][bold]a[/]: add | [bold]t[/]: toggle | [bold]d[/]: delete | "
                "[bold]r[/]: refresh | [bold]q[/]: quit[/dim]"
            )
            choice = Prompt.ask(
                "Choose",
                choices=["a", "t", "d", "r", "q"],
                default="a",
                show_choices=False,
            )

            if choice == "q":
                break
            if choice == "a":
                description = Prompt.ask("What needs to be done?")
                await view.create(description)
            elif choice == "t":
                todo = pick_task(view, "toggle")
                if todo is not None:
                    await view.toggle(todo)
            elif choice == "d":
                todo = pick_task(view, "delete")
                if todo is not None:
                    await view.delete(todo.id)
            elif choice == "r":
                await view.load()


def main(base_url: str = None):
    asyncio.run(run_menu(base_url or config.api_url, timeout=config.client_timeout))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        console.print("\n[dim]Bye.[/dim]")
