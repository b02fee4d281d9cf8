"""Unit tests for Config (tailease.config).

Tests cover:
- Defaults and validation
- Command builders (scaffold, install, add packages, dev hint)
- Derived paths
- from_env overrides
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from tailease.config import Config


# ---------------------------------------------------------------------------
# Defaults & validation
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.base_dir == Path.cwd()
        assert config.package_manager == "npm"
        assert config.scaffold_package == "vite@latest"
        assert config.template == "react"
        assert config.css_packages == ["tailwindcss", "@tailwindcss/vite"]
        assert config.build_config == "vite.config.js"
        assert config.css_entrypoints == ["src/index.css", "src/App.css"]
        assert config.finalize_delay == 0.5

    @pytest.mark.unit
    def test_empty_package_manager_rejected(self):
        with pytest.raises(ValidationError):
            Config(package_manager="")

    @pytest.mark.unit
    def test_empty_template_rejected(self):
        with pytest.raises(ValidationError):
            Config(template="")

    @pytest.mark.unit
    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Config(finalize_delay=-1)

    @pytest.mark.unit
    def test_css_packages_stripped(self):
        config = Config(css_packages=[" tailwindcss ", "", "@tailwindcss/vite"])
        assert config.css_packages == ["tailwindcss", "@tailwindcss/vite"]

    @pytest.mark.unit
    def test_blank_css_packages_rejected(self):
        with pytest.raises(ValidationError):
            Config(css_packages=[" ", ""])


# ---------------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------------


class TestCommands:
    @pytest.mark.unit
    def test_scaffold_command(self):
        assert Config().scaffold_command("demo") == [
            "npm", "create", "vite@latest", "demo", "--", "--template", "react",
        ]

    @pytest.mark.unit
    def test_scaffold_command_keeps_name_as_single_argument(self):
        cmd = Config().scaffold_command("my app; rm -rf /")
        assert cmd[3] == "my app; rm -rf /"

    @pytest.mark.unit
    def test_install_command(self):
        assert Config().install_command() == ["npm", "install"]

    @pytest.mark.unit
    def test_add_packages_command(self):
        assert Config().add_packages_command() == [
            "npm", "install", "tailwindcss", "@tailwindcss/vite",
        ]

    @pytest.mark.unit
    def test_custom_package_manager(self):
        config = Config(package_manager="pnpm", template="react-ts")
        assert config.scaffold_command("x")[0] == "pnpm"
        assert config.scaffold_command("x")[-1] == "react-ts"
        assert config.dev_command() == "pnpm run dev"

    @pytest.mark.unit
    def test_dev_command(self):
        assert Config().dev_command() == "npm run dev"


# ---------------------------------------------------------------------------
# Derived paths
# ---------------------------------------------------------------------------


class TestDerivedPaths:
    @pytest.mark.unit
    def test_build_config_path(self, tmp_path: Path):
        assert Config().build_config_path(tmp_path) == tmp_path / "vite.config.js"

    @pytest.mark.unit
    def test_css_entrypoint_paths(self, tmp_path: Path):
        assert Config().css_entrypoint_paths(tmp_path) == [
            tmp_path / "src" / "index.css",
            tmp_path / "src" / "App.css",
        ]


# ---------------------------------------------------------------------------
# from_env
# ---------------------------------------------------------------------------


class TestFromEnv:
    @pytest.mark.unit
    def test_no_env_gives_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = Config.from_env()
        assert config.package_manager == "npm"
        assert config.finalize_delay == 0.5

    @pytest.mark.unit
    def test_overrides(self, tmp_path: Path):
        env = {
            "TAILEASE_BASE_DIR": str(tmp_path),
            "TAILEASE_PACKAGE_MANAGER": "pnpm",
            "TAILEASE_SCAFFOLD_PACKAGE": "vite@6",
            "TAILEASE_TEMPLATE": "react-ts",
            "TAILEASE_CSS_PACKAGES": "tailwindcss, @tailwindcss/vite ,daisyui",
            "TAILEASE_BUILD_CONFIG": "vite.config.ts",
            "TAILEASE_FINALIZE_DELAY": "0",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()

        assert config.base_dir == tmp_path
        assert config.package_manager == "pnpm"
        assert config.scaffold_package == "vite@6"
        assert config.template == "react-ts"
        assert config.css_packages == ["tailwindcss", "@tailwindcss/vite", "daisyui"]
        assert config.build_config == "vite.config.ts"
        assert config.finalize_delay == 0.0

    @pytest.mark.unit
    def test_invalid_delay_raises(self):
        with patch.dict("os.environ", {"TAILEASE_FINALIZE_DELAY": "soon"}, clear=True):
            with pytest.raises(ValueError):
                Config.from_env()
