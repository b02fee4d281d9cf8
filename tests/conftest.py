"""Shared pytest fixtures for the TailEase test suite.

Provides reusable fixtures for:
- Captured-output terminals with scripted answers
- Test configurations rooted in a temporary directory
- Generated-project trees as the Vite generator leaves them
- A fake ``run_command`` that records invocations instead of spawning npm
"""

from __future__ import annotations

import io
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from tailease.config import Config
from tailease.terminal import Terminal


# ---------------------------------------------------------------------------
# Generated project content
# ---------------------------------------------------------------------------

VITE_CONFIG_JS = textwrap.dedent(
    """\
    import { defineConfig } from 'vite'
    import react from '@vitejs/plugin-react'

    // https://vite.dev/config/
    export default defineConfig({
      plugins: [react()],
    })
    """
)

INDEX_CSS = ":root {\n  font-family: system-ui, Avenir, Helvetica, Arial, sans-serif;\n}\n"
APP_CSS = "#root {\n  max-width: 1280px;\n  margin: 0 auto;\n}\n"


def write_generated_project(project_dir: Path, vite_config: str | None = VITE_CONFIG_JS) -> Path:
    """Create the files the Vite React template would have produced."""
    (project_dir / "src").mkdir(parents=True, exist_ok=True)
    (project_dir / "src" / "index.css").write_text(INDEX_CSS, encoding="utf-8")
    (project_dir / "src" / "App.css").write_text(APP_CSS, encoding="utf-8")
    if vite_config is not None:
        (project_dir / "vite.config.js").write_text(vite_config, encoding="utf-8")
    return project_dir


@pytest.fixture
def vite_config_text() -> str:
    """``vite.config.js`` exactly as the React template generates it."""
    return VITE_CONFIG_JS


@pytest.fixture
def generated_project(tmp_path: Path) -> Path:
    """A ``demo`` project directory populated like a fresh Vite project."""
    return write_generated_project(tmp_path / "demo")


# ---------------------------------------------------------------------------
# Configuration & terminal
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted at tmp_path with no completion delay."""
    return Config(base_dir=tmp_path, finalize_delay=0)


@pytest.fixture
def make_terminal() -> Callable[..., Terminal]:
    """Factory for terminals that read scripted answers and record output.

    Usage::

        terminal = make_terminal("demo\\n")
        ...
        assert "cd demo" in terminal.console.file.getvalue()
    """

    def _make(answers: str = "") -> Terminal:
        console = Console(
            file=io.StringIO(),
            width=200,
            force_terminal=False,
            color_system=None,
            highlight=False,
        )
        return Terminal(console=console, stream=io.StringIO(answers))

    return _make


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


class FakeRunner:
    """Stand-in for ``tailease.pipeline.run_command``.

    Records every call.  ``npm create`` materialises a generated project in
    the requested working directory.  ``returncodes`` maps a command key
    (``"create"``, ``"install"`` or ``"install tailwindcss"``) to the exit
    code it should report.
    """

    def __init__(self, vite_config: str | None = VITE_CONFIG_JS) -> None:
        self.calls: list[dict[str, Any]] = []
        self.returncodes: dict[str, int] = {}
        self.vite_config = vite_config

    @staticmethod
    def key(cmd: list[str]) -> str:
        if cmd[1] == "install" and len(cmd) > 2:
            return f"install {cmd[2]}"
        return cmd[1]

    async def __call__(
        self,
        cmd: list[str],
        cwd: str | Path | None = None,
        capture: bool = True,
    ) -> tuple[int, str, str]:
        self.calls.append({"cmd": list(cmd), "cwd": Path(cwd) if cwd else None, "capture": capture})
        code = self.returncodes.get(self.key(cmd), 0)
        if code == 0 and cmd[1] == "create":
            write_generated_project(Path(cwd) / cmd[3], self.vite_config)
        stderr = "npm ERR! code E404" if code else ""
        return code, "", stderr

    @property
    def commands(self) -> list[list[str]]:
        return [c["cmd"] for c in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
