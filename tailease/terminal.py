"""Interactive terminal handle.

A :class:`Terminal` bundles the Rich console used for every progress line
with the input stream answers are read from.  One terminal is opened per run
by :func:`open_terminal` and closed exactly once on every exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress

from tailease.utils import create_progress, step_label


class TerminalClosedError(RuntimeError):
    """Raised when a closed terminal is asked for input."""


class Terminal:
    """Console output plus an input stream for one scaffolding run.

    Attributes:
        console: Rich console all output is written to.
        closed: ``True`` once :meth:`close` has been called.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or Console(highlight=False)
        self._stream = stream
        self.closed = False

    # -- Input -------------------------------------------------------------

    def ask(self, question: str) -> str:
        """Ask *question* once and return the trimmed answer.

        Raises:
            EOFError: If the input stream is exhausted.
            TerminalClosedError: If the terminal has already been closed.
        """
        if self.closed:
            raise TerminalClosedError("Terminal is closed")

        raw = self.console.input(f"[blue]│ {question}[/blue] ", stream=self._stream)
        # readline() signals end of input with an empty string
        if self._stream is not None and not raw:
            raise EOFError("No more input")
        return raw.strip()

    # -- Output ------------------------------------------------------------

    def banner(self, title: str) -> None:
        self.console.print()
        self.console.print(
            Panel(f"[bold cyan]◆  {title}[/bold cyan]", border_style="cyan", expand=False)
        )
        self.console.print()

    def step(self, step: int, message: str) -> None:
        """Print a numbered step header such as ``◆ 2/6 Installing...``."""
        self.console.print(f"[bold blue]◆ {step_label(step)}[/bold blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Print a green success message."""
        self.console.print(f"[green]✔ {escape(message)}[/green]")

    def error(self, message: str) -> None:
        """Print a red error message."""
        self.console.print(f"[bold red]✖ {escape(message)}[/bold red]")

    def warning(self, message: str) -> None:
        """Print a yellow warning message."""
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def detail(self, text: str, style: str = "dim") -> None:
        """Print raw text, such as captured stderr, without markup parsing."""
        self.console.print(text, style=style, markup=False, highlight=False)

    def line(self, message: str = "") -> None:
        """Print a gutter line; *message* may contain Rich markup."""
        self.console.print(f"[blue]│[/blue] {message}" if message else "")

    def progress(self) -> Progress:
        """Spinner bound to this terminal's console."""
        return create_progress(self.console)

    # -- Lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release the terminal.  Subsequent calls are no-ops."""
        if self.closed:
            return
        self.closed = True
        self.console.show_cursor(True)


@contextmanager
def open_terminal(
    console: Console | None = None,
    stream: TextIO | None = None,
) -> Iterator[Terminal]:
    """Open a :class:`Terminal` and guarantee it is closed on exit."""
    terminal = Terminal(console=console, stream=stream)
    try:
        yield terminal
    finally:
        terminal.close()
