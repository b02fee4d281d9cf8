"""TailEase configuration.

Centralised, typed configuration for a scaffolding run.  All settings use a
Pydantic v2 model so they are validated at construction time and can be
overridden from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Config(BaseModel):
    """Global TailEase configuration.

    Instances are created once by the CLI entry point (or by a library
    caller) and then passed through the rest of the pipeline.
    """

    base_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory in which the project folder is created",
    )
    package_manager: str = Field(default="npm", min_length=1)
    scaffold_package: str = Field(default="vite@latest", min_length=1)
    template: str = Field(default="react", min_length=1)
    css_packages: list[str] = Field(
        default_factory=lambda: ["tailwindcss", "@tailwindcss/vite"],
        min_length=1,
    )
    build_config: str = Field(default="vite.config.js", min_length=1)
    css_entrypoints: list[str] = Field(
        default_factory=lambda: ["src/index.css", "src/App.css"],
    )
    finalize_delay: float = Field(
        default=0.5, ge=0, description="Pause in seconds before the completion banner"
    )

    @field_validator("css_packages")
    @classmethod
    def _strip_packages(cls, value: list[str]) -> list[str]:
        packages = [p.strip() for p in value if p.strip()]
        if not packages:
            raise ValueError("css_packages must name at least one package")
        return packages

    # ------------------------------------------------------------------
    # Command builders
    # ------------------------------------------------------------------

    def scaffold_command(self, project_name: str) -> list[str]:
        """``npm create vite@latest <name> -- --template react``."""
        return [
            self.package_manager,
            "create",
            self.scaffold_package,
            project_name,
            "--",
            "--template",
            self.template,
        ]

    def install_command(self) -> list[str]:
        """``npm install``."""
        return [self.package_manager, "install"]

    def add_packages_command(self) -> list[str]:
        """``npm install tailwindcss @tailwindcss/vite``."""
        return [self.package_manager, "install", *self.css_packages]

    def dev_command(self) -> str:
        """The command shown to the user for starting the dev server."""
        return f"{self.package_manager} run dev"

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def build_config_path(self, project_path: Path) -> Path:
        """Path to the bundler config inside a generated project."""
        return project_path / self.build_config

    def css_entrypoint_paths(self, project_path: Path) -> list[Path]:
        """Paths of every stylesheet that is overwritten with the import directive."""
        return [project_path / entry for entry in self.css_entrypoints]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TAILEASE_BASE_DIR, TAILEASE_PACKAGE_MANAGER,
            TAILEASE_SCAFFOLD_PACKAGE, TAILEASE_TEMPLATE,
            TAILEASE_CSS_PACKAGES, TAILEASE_BUILD_CONFIG,
            TAILEASE_FINALIZE_DELAY.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TAILEASE_BASE_DIR"):
            kwargs["base_dir"] = Path(os.environ["TAILEASE_BASE_DIR"])
        if os.environ.get("TAILEASE_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["TAILEASE_PACKAGE_MANAGER"]
        if os.environ.get("TAILEASE_SCAFFOLD_PACKAGE"):
            kwargs["scaffold_package"] = os.environ["TAILEASE_SCAFFOLD_PACKAGE"]
        if os.environ.get("TAILEASE_TEMPLATE"):
            kwargs["template"] = os.environ["TAILEASE_TEMPLATE"]
        if os.environ.get("TAILEASE_CSS_PACKAGES"):
            kwargs["css_packages"] = os.environ["TAILEASE_CSS_PACKAGES"].split(",")
        if os.environ.get("TAILEASE_BUILD_CONFIG"):
            kwargs["build_config"] = os.environ["TAILEASE_BUILD_CONFIG"]
        if os.environ.get("TAILEASE_FINALIZE_DELAY"):
            kwargs["finalize_delay"] = float(os.environ["TAILEASE_FINALIZE_DELAY"])

        return cls(**kwargs)
