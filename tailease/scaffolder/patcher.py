"""Idempotent text-transform rules for generated config files.

Each rule inspects the file content and either returns it unchanged (the edit
is already present) or returns a new string with exactly one insertion.
Rules never guess: when the text they anchor on is missing or ambiguous they
raise :class:`ConfigPatchError` and the caller decides what to do.

Quick usage::

    from tailease.scaffolder.patcher import VITE_TAILWIND_RULES, apply_rules

    patched, changed = apply_rules(source, VITE_TAILWIND_RULES)
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

REACT_PLUGIN_IMPORT = "import react from '@vitejs/plugin-react'"
TAILWIND_PLUGIN_IMPORT = "import tailwindcss from '@tailwindcss/vite'"
TAILWIND_PLUGIN_CALL = "tailwindcss()"


class ConfigPatchError(ValueError):
    """Raised when a rule cannot be applied to the given text."""

    def __init__(self, rule: str, message: str) -> None:
        self.rule = rule
        super().__init__(f"{rule}: {message}")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class PatchRule(BaseModel):
    """Base class for a single named text edit."""

    model_config = ConfigDict(frozen=True)

    name: str

    def is_applied(self, text: str) -> bool:
        raise NotImplementedError

    def insert(self, text: str) -> str:
        raise NotImplementedError

    def apply(self, text: str) -> tuple[str, bool]:
        """Return ``(new_text, changed)``."""
        if self.is_applied(text):
            return text, False
        return self.insert(text), True


class InsertImportRule(PatchRule):
    """Insert an import line directly after an existing anchor line."""

    name: str = "insert-import"
    anchor: str = Field(..., min_length=1)
    line: str = Field(..., min_length=1)

    def is_applied(self, text: str) -> bool:
        return self.line in text

    def insert(self, text: str) -> str:
        if self.anchor not in text:
            raise ConfigPatchError(self.name, f"anchor not found: {self.anchor!r}")
        return text.replace(self.anchor, f"{self.anchor}\n{self.line}", 1)


class InsertArrayEntryRule(PatchRule):
    """Insert an entry as the first element of a ``<key>: [...]`` literal.

    The key must occur exactly once; several matches cannot be told
    apart reliably and are rejected.
    """

    name: str = "insert-array-entry"
    key: str = Field(..., min_length=1)
    entry: str = Field(..., min_length=1)
    marker: str = Field(..., min_length=1)
    indent: str = "    "

    def is_applied(self, text: str) -> bool:
        return self.marker in text

    def insert(self, text: str) -> str:
        pattern = re.compile(rf"{re.escape(self.key)}:\s*\[")
        matches = list(pattern.finditer(text))
        if not matches:
            raise ConfigPatchError(self.name, f"no '{self.key}: [' array found")
        if len(matches) > 1:
            raise ConfigPatchError(
                self.name,
                f"found {len(matches)} '{self.key}: [' arrays, expected exactly one",
            )

        match = matches[0]
        replacement = f"{self.key}: [\n{self.indent}{self.entry},"
        return text[: match.start()] + replacement + text[match.end() :]


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------


VITE_TAILWIND_RULES: tuple[PatchRule, ...] = (
    InsertImportRule(
        name="tailwind-import",
        anchor=REACT_PLUGIN_IMPORT,
        line=TAILWIND_PLUGIN_IMPORT,
    ),
    InsertArrayEntryRule(
        name="tailwind-plugin",
        key="plugins",
        entry=TAILWIND_PLUGIN_CALL,
        marker=TAILWIND_PLUGIN_CALL,
    ),
)


def apply_rules(text: str, rules: Sequence[PatchRule]) -> tuple[str, list[str]]:
    """Apply *rules* in order.

    Returns:
        The transformed text and the names of the rules that changed it.

    Raises:
        ConfigPatchError: If any rule cannot be applied.  No partial result
            is returned in that case.
    """
    changed: list[str] = []
    for rule in rules:
        text, did_change = rule.apply(text)
        if did_change:
            changed.append(rule.name)
    return text, changed


async def patch_file(path: Path, rules: Sequence[PatchRule]) -> list[str]:
    """Apply *rules* to the file at *path*, writing it back only on change.

    Returns:
        Names of the rules that changed the file (empty when already patched).

    Raises:
        OSError: If the file cannot be read or written.
        ConfigPatchError: If a rule cannot be applied.
    """
    original = await asyncio.to_thread(path.read_text, encoding="utf-8")
    patched, changed = apply_rules(original, rules)
    if changed:
        await asyncio.to_thread(path.write_text, patched, encoding="utf-8")
    return changed
