"""TailEase -- Vite + React + Tailwind CSS v4 project setup.

Quick usage::

    from tailease import Config, create_project

    project_path = create_project(Config())
"""

__version__ = "1.0.0"

from tailease.config import Config  # noqa: E402
from tailease.pipeline import Pipeline, PipelineError, create_project  # noqa: E402
from tailease.session import Session  # noqa: E402
from tailease.terminal import Terminal, open_terminal  # noqa: E402

__all__ = [
    "Config",
    "Pipeline",
    "PipelineError",
    "Session",
    "Terminal",
    "__version__",
    "create_project",
    "open_terminal",
]
