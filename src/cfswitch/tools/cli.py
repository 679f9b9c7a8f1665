"""
Helpers for the two output streams of the CLI: human readable status text goes to stderr, while stdout is reserved
for shell commands that the calling shell evaluates.
"""

from contextlib import contextmanager
from typing import Iterator

from loguru import logger
from rich.console import Console
from rich.markup import escape
import typer

from cfswitch.errors import CfSwitchError


def _console() -> Console:
    return Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


def print_info(message: str) -> None:
    _console().print(message)


def print_success(message: str) -> None:
    _console().print(f"[green]✓[/green] {message}")


def print_warning(message: str) -> None:
    _console().print(f"[yellow]{escape(message)}[/yellow]")


def print_error(message: str, hint: str | None = None) -> None:
    _console().print(f"[bold red]Error:[/bold red] {escape(message)}")
    if hint:
        _console().print(escape(hint))


def emit(command: str) -> None:
    """
    Write a shell command to stdout, to be evaluated by the calling shell.
    """

    typer.echo(command)


@contextmanager
def error_boundary() -> Iterator[None]:
    """
    Report a [CfSwitchError] raised in the block to the user and exit with status code 1.
    """

    try:
        yield
    except CfSwitchError as exc:
        logger.opt(exception=exc).debug("Command failed")
        print_error(exc.message, exc.hint)
        raise typer.Exit(1)
