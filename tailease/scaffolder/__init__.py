"""TailEase scaffolder helpers -- config patching and stylesheet setup.

Quick usage::

    from tailease.scaffolder import VITE_TAILWIND_RULES, patch_file, write_css_entrypoints

    changed = await patch_file(project / "vite.config.js", VITE_TAILWIND_RULES)
    await write_css_entrypoints([project / "src" / "index.css"])
"""

from tailease.scaffolder.css import CSS_IMPORT, write_css_entrypoints
from tailease.scaffolder.patcher import (
    VITE_TAILWIND_RULES,
    ConfigPatchError,
    InsertArrayEntryRule,
    InsertImportRule,
    PatchRule,
    apply_rules,
    patch_file,
)

__all__ = [
    "CSS_IMPORT",
    "ConfigPatchError",
    "InsertArrayEntryRule",
    "InsertImportRule",
    "PatchRule",
    "VITE_TAILWIND_RULES",
    "apply_rules",
    "patch_file",
    "write_css_entrypoints",
]
