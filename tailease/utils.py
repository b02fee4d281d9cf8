"""Shared utility functions for TailEase.

Provides async command execution, step naming, duration formatting and the
Rich progress factory used by the pipeline.  Terminal printing itself lives on
:class:`tailease.terminal.Terminal` so every run owns its own console.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    capture: bool = True,
) -> tuple[int, str, str]:
    """Run a command asynchronously and wait for it to exit.

    The command is executed directly as an argument vector, never through a
    shell.  There is no timeout: a child that hangs hangs the caller.

    Args:
        cmd: Command and arguments as a list of strings.
        cwd: Working directory for the child process.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams, including stdin).

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.

    Raises:
        FileNotFoundError: If the executable cannot be found.
    """
    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None
    stdin_pipe = asyncio.subprocess.DEVNULL if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=stdin_pipe,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd) if cwd else None,
    )
    stdout_bytes, stderr_bytes = await process.communicate()

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


def format_command(cmd: list[str]) -> str:
    """Render an argument vector the way a user would type it."""
    return " ".join(cmd)


# ---------------------------------------------------------------------------
# Step metadata
# ---------------------------------------------------------------------------


TOTAL_STEPS = 6

STEP_NAMES: dict[int, str] = {
    1: "Creating Vite project",
    2: "Installing base dependencies",
    3: "Adding Tailwind CSS",
    4: "Configuring Vite",
    5: "Setting up CSS",
    6: "Finalizing setup",
}


def step_label(step: int) -> str:
    """Return the ``"n/6"`` label shown in front of a step header."""
    return f"{step}/{TOTAL_STEPS}"


# ---------------------------------------------------------------------------
# Rich progress
# ---------------------------------------------------------------------------


def create_progress(console: Console) -> Progress:
    """Create a Rich spinner configured for pipeline tasks.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(style="blue"),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
