"""Antlion CLI.

Commands:
    antlion eval     — Evaluate an expression in a fresh sandbox
    antlion new      — Provision a sandbox and print its workspace path
    antlion config   — Show effective settings
"""

from __future__ import annotations

import ast
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from antlion.utils import setup_logging

# Initialize logging on import
setup_logging()

app = typer.Typer(
    name="antlion",
    help="Evaluate Python expressions in disposable project sandboxes",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

# --type choices: name -> (result_type, parser)
RESULT_TYPES: dict[str, tuple[object, object]] = {
    "str": (str, None),
    "int": (int, None),
    "float": (float, None),
    "bool": (bool, None),
    "literal": (object, ast.literal_eval),
}


def _error_panel(title: str, exc: Exception) -> None:
    console.print(Panel(Text(str(exc)), title=f"[bold red]{title}[/]", border_style="red"))


# ── antlion eval ──────────────────────────────────────────────


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Python expression, e.g. '2 + 2'"),
    deps: list[str] = typer.Option(None, "--dep", "-d", help="Dependency spec (repeatable)"),
    result_type: str = typer.Option("str", "--type", "-t", help="str|int|float|bool|literal"),
    backend: str = typer.Option(None, "--backend", "-b", help="Build backend: uv|pip"),
    root: Path = typer.Option(None, "--root", help="Base directory for sandboxes"),
    keep: bool = typer.Option(False, "--keep", help="Keep the workspace after evaluating"),
):
    """Evaluate EXPRESSION in a throwaway project and print the result.

    Examples:
        antlion eval "2 + 2" --type int
        antlion eval "httpx.__version__" --dep httpx
    """
    from antlion.backends import get_backend
    from antlion.errors import SandboxError
    from antlion.sandbox import Provisioner

    if result_type not in RESULT_TYPES:
        console.print(f"[red]Unknown type '{result_type}'. Use: {', '.join(RESULT_TYPES)}[/]")
        raise typer.Exit(1)
    target_type, parser = RESULT_TYPES[result_type]

    try:
        provisioner = Provisioner(root=root, backend=get_backend(backend))
    except ValueError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(1)

    try:
        with console.status("[dim]Provisioning sandbox…[/]"):
            sandbox = provisioner.create()
    except SandboxError as exc:
        _error_panel("Provisioning failed", exc)
        raise typer.Exit(1)

    try:
        if deps:
            with console.status(f"[dim]Installing {len(deps)} dependencies…[/]"):
                sandbox.add_dependencies(deps)
        with console.status("[dim]Building and running…[/]"):
            value = sandbox.eval(expression, target_type, parser=parser)
    except SandboxError as exc:
        _error_panel(type(exc).__name__, exc)
        console.print(f"[dim]Workspace kept for inspection: {sandbox.root}[/]")
        raise typer.Exit(1)

    console.print(repr(value), markup=False, soft_wrap=True)
    if keep:
        console.print(f"[dim]Workspace: {sandbox.root}[/]")
    else:
        sandbox.destroy()


# ── antlion new ───────────────────────────────────────────────


@app.command()
def new(
    backend: str = typer.Option(None, "--backend", "-b", help="Build backend: uv|pip"),
    root: Path = typer.Option(None, "--root", help="Base directory for sandboxes"),
):
    """Provision an empty sandbox and print its workspace path."""
    from antlion.backends import get_backend
    from antlion.errors import SandboxError
    from antlion.sandbox import Provisioner

    try:
        sandbox = Provisioner(root=root, backend=get_backend(backend)).create()
    except ValueError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(1)
    except SandboxError as exc:
        _error_panel("Provisioning failed", exc)
        raise typer.Exit(1)

    console.print(str(sandbox.root), markup=False, soft_wrap=True)


# ── antlion config ────────────────────────────────────────────


@app.command()
def config():
    """Show effective settings (from .env and ANTLION_* variables)."""
    from antlion.config import settings

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(Panel(table, title="[bold cyan]Antlion settings[/]", border_style="cyan"))


if __name__ == "__main__":
    app()
