"""TailEase Pipeline Orchestrator.

Implements the six-step Vite + React + Tailwind CSS v4 setup:

Step 1: Create the Vite project with the React template.
Step 2: Install the base dependencies.
Step 3: Install Tailwind CSS and its Vite plugin.
Step 4: Register the Tailwind plugin in ``vite.config.js`` (best effort).
Step 5: Point the CSS entrypoints at Tailwind (best effort).
Step 6: Print the next steps.

The project name is asked for once, synchronously, before the event loop
starts, so Ctrl-C at the prompt interrupts the read itself.  Failures in the
prompt or in steps 1-3 abort the run; failures in steps 4-5 only print a
warning.

Usage::

    tailease
    python -m tailease

or, from Python::

    from tailease import Config, create_project

    project_path = create_project(Config(base_dir=Path("~/code").expanduser()))
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from tailease import __version__
from tailease.config import Config
from tailease.scaffolder import (
    VITE_TAILWIND_RULES,
    patch_file,
    write_css_entrypoints,
)
from tailease.session import Session
from tailease.terminal import Terminal, open_terminal
from tailease.utils import STEP_NAMES, format_command, format_duration, run_command, step_label

BANNER = "Vite + React + Tailwind CSS v4 Setup"
PROMPT_STEP = 0

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a step fails irrecoverably."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        if step == PROMPT_STEP:
            prefix = "Project name"
        else:
            prefix = f"Step {step_label(step)} ({STEP_NAMES.get(step, '?')})"
        super().__init__(f"{prefix}: {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """TailEase Pipeline Orchestrator.

    Attributes:
        config: Run configuration.
        terminal: Interactive handle all prompts and progress go through.
        session: The project being created, set once the name is known.
        state: Bookkeeping of completed steps and warnings.
    """

    def __init__(self, config: Config, terminal: Terminal) -> None:
        self.config = config
        self.terminal = terminal
        self.session: Session | None = None
        self.state: dict[str, Any] = {
            "steps_completed": [],
            "warnings": [],
            "success": False,
        }
        self._started = time.monotonic()

    def execute(self) -> Session:
        """Ask for the project name, then run every step to completion.

        The name is read before :func:`asyncio.run` starts, so a blocking read
        never sits on the event loop's thread.

        Raises:
            PipelineError: If the prompt or one of steps 1-3 fails.
        """
        self.terminal.banner(BANNER)
        project_name = self.prompt_project_name()
        return asyncio.run(self.run(project_name))

    async def run(self, project_name: str) -> Session:
        """Execute steps 1-6 for *project_name*.

        Returns:
            The session describing the created project.

        Raises:
            PipelineError: If one of steps 1-3 fails.
        """
        self._started = time.monotonic()
        self.session = Session.create(project_name, self.config.base_dir)
        self.state["project_name"] = self.session.project_name
        self.state["project_path"] = str(self.session.project_path)

        await self.scaffold(self.session.project_name, self.config.base_dir)
        self._complete(1)
        await self.install_dependencies(self.session.project_path)
        self._complete(2)
        await self.install_css_framework(self.session.project_path)
        self._complete(3)

        if await self.patch_build_config(self.session.project_path):
            self._complete(4)
        if await self.write_css_entrypoints(self.session.project_path):
            self._complete(5)

        await self.finish()
        self._complete(6)

        self.state["success"] = True
        return self.session

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------

    def prompt_project_name(self) -> str:
        """Ask for the project name until a non-empty answer is given."""
        while True:
            try:
                answer = self.terminal.ask("Project name:")
            except EOFError as exc:
                raise PipelineError(PROMPT_STEP, "input ended before a name was given") from exc
            if answer:
                return answer
            self.terminal.error("Project name cannot be empty")

    # ------------------------------------------------------------------
    # Step 1: generator
    # ------------------------------------------------------------------

    async def scaffold(self, project_name: str, base_dir: Path) -> Path:
        """Run the Vite generator in *base_dir* with the terminal attached.

        The generator may ask its own questions, so its I/O is inherited
        rather than captured and no spinner is drawn over it.
        """
        self.terminal.step(1, "Creating Vite project...")
        cmd = self.config.scaffold_command(project_name)
        self.terminal.line(
            f"Scaffolding project with Vite [dim]({escape(format_command(cmd))})[/dim]"
        )

        try:
            returncode, _, _ = await run_command(cmd, cwd=base_dir, capture=False)
        except OSError as exc:
            self.terminal.error("Failed to create Vite project")
            raise PipelineError(1, f"could not run {cmd[0]}: {exc}") from exc

        if returncode != 0:
            self.terminal.error("Failed to create Vite project")
            raise PipelineError(1, f"Command failed with code {returncode}")

        project_path = Path(base_dir).resolve() / project_name
        self.terminal.success(f"Project created at: {project_path}")
        return project_path

    # ------------------------------------------------------------------
    # Steps 2-3: package manager
    # ------------------------------------------------------------------

    async def install_dependencies(self, path: Path) -> None:
        """Install the generated project's dependencies."""
        self.terminal.step(2, "Installing base dependencies...")
        await self._run_install(
            2,
            self.config.install_command(),
            path,
            spinner="Installing React + Vite dependencies",
            failure="Failed to install dependencies",
        )
        self.terminal.success("Base dependencies installed")

    async def install_css_framework(self, path: Path) -> None:
        """Add Tailwind CSS and its Vite plugin to the project."""
        self.terminal.step(3, "Adding Tailwind CSS...")
        await self._run_install(
            3,
            self.config.add_packages_command(),
            path,
            spinner="Installing Tailwind CSS v4",
            failure="Failed to install Tailwind",
        )
        self.terminal.success("Tailwind CSS installed")

    async def _run_install(
        self,
        step: int,
        cmd: list[str],
        cwd: Path,
        spinner: str,
        failure: str,
    ) -> None:
        with self.terminal.progress() as progress:
            progress.add_task(spinner, total=None)
            try:
                returncode, _, stderr = await run_command(cmd, cwd=cwd)
            except OSError as exc:
                self.terminal.error(failure)
                raise PipelineError(step, f"could not run {format_command(cmd)}: {exc}") from exc

        if returncode == 0:
            return

        self.terminal.error(failure)
        if stderr:
            self.terminal.detail(stderr[-2000:])
        raise PipelineError(step, f"Command failed with code {returncode}")

    # ------------------------------------------------------------------
    # Step 4: vite.config.js
    # ------------------------------------------------------------------

    async def patch_build_config(self, path: Path) -> bool:
        """Register the Tailwind plugin in the bundler config.

        Returns:
            ``True`` if the config is now patched, ``False`` if a warning was
            printed instead.
        """
        self.terminal.step(4, "Configuring Vite...")
        config_path = self.config.build_config_path(path)

        try:
            with self.terminal.progress() as progress:
                progress.add_task(f"Updating {self.config.build_config}", total=None)
                changed = await patch_file(config_path, VITE_TAILWIND_RULES)
        except (OSError, ValueError) as exc:
            self.terminal.error("Couldn't auto-configure Vite")
            self._warn(4, f"Manually add Tailwind to {self.config.build_config}", exc)
            return False

        if changed:
            self.terminal.success("Vite configured for Tailwind")
        else:
            self.terminal.success("Vite already configured for Tailwind")
        return True

    # ------------------------------------------------------------------
    # Step 5: stylesheets
    # ------------------------------------------------------------------

    async def write_css_entrypoints(self, path: Path) -> bool:
        """Overwrite every CSS entrypoint with the Tailwind import.

        Returns:
            ``True`` on success, ``False`` if a warning was printed instead.
        """
        self.terminal.step(5, "Setting up CSS...")

        try:
            with self.terminal.progress() as progress:
                progress.add_task("Configuring CSS files", total=None)
                await write_css_entrypoints(self.config.css_entrypoint_paths(path))
        except OSError as exc:
            self.terminal.error("Couldn't configure CSS files")
            self._warn(5, 'Manually add @import "tailwindcss" to CSS files', exc)
            return False

        self.terminal.success("CSS files configured")
        return True

    # ------------------------------------------------------------------
    # Step 6: completion
    # ------------------------------------------------------------------

    async def finish(self) -> None:
        """Print the next-step instructions."""
        self.terminal.step(6, "Finalizing setup...")
        if self.config.finalize_delay:
            await asyncio.sleep(self.config.finalize_delay)

        project_name = self.session.project_name if self.session else "<project>"
        self.state["duration"] = format_duration(time.monotonic() - self._started)
        self.terminal.console.print()
        self.terminal.console.print(
            f"[bold green]◆  Setup complete![/bold green] [dim]({self.state['duration']})[/dim]"
        )
        self.terminal.line("Next steps:")
        self.terminal.line(f"cd {escape(project_name)}")
        self.terminal.line(escape(self.config.dev_command()))
        self.terminal.console.print()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _complete(self, step: int) -> None:
        self.state["steps_completed"].append(step)

    def _warn(self, step: int, instruction: str, exc: Exception) -> None:
        self.terminal.warning(instruction)
        self.state["warnings"].append(
            {"step": step, "message": instruction, "error": str(exc)}
        )


# ---------------------------------------------------------------------------
# Library entry point
# ---------------------------------------------------------------------------


def create_project(
    config: Config | None = None,
    terminal: Terminal | None = None,
) -> Path:
    """Run the full setup and return the created project's path.

    Starts its own event loop, so it must not be called from inside one.
    A terminal passed in by the caller stays open afterwards; otherwise one is
    opened for the run and closed before returning.

    Raises:
        PipelineError: If the prompt or one of steps 1-3 fails.
    """
    config = config or Config()
    if terminal is not None:
        return Pipeline(config, terminal).execute().project_path

    with open_terminal() as owned:
        session = Pipeline(config, owned).execute()
    return session.project_path


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run_cli(config: Config, terminal: Terminal) -> int:
    """Drive one run on *terminal* and translate the outcome to an exit code.

    The terminal is closed before returning, whatever the outcome.
    """
    try:
        Pipeline(config, terminal).execute()
    except PipelineError as exc:
        terminal.error("Setup failed")
        terminal.detail(str(exc), style="red")
        return 1
    except KeyboardInterrupt:
        terminal.console.print()
        terminal.error("Setup cancelled")
        return 130
    finally:
        terminal.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``tailease`` and ``python -m tailease``."""
    parser = argparse.ArgumentParser(
        prog="tailease",
        description="Create a Vite + React project with Tailwind CSS v4 preconfigured.",
        epilog=(
            "The project is created in the current directory. Set "
            "TAILEASE_BASE_DIR or TAILEASE_PACKAGE_MANAGER to change the defaults."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args(argv)

    with open_terminal() as terminal:
        try:
            config = Config.from_env()
        except (ValidationError, ValueError) as exc:
            terminal.error(f"Invalid configuration: {exc}")
            sys.exit(1)
        code = run_cli(config, terminal)

    sys.exit(code)


if __name__ == "__main__":
    main()
