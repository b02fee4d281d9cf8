"""Stylesheet entrypoint writer."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

CSS_IMPORT = '@import "tailwindcss";\n'


async def _overwrite(path: Path, content: str) -> Path:
    await asyncio.to_thread(path.write_text, content, encoding="utf-8")
    return path


async def write_css_entrypoints(paths: Iterable[Path], content: str = CSS_IMPORT) -> list[Path]:
    """Replace the content of every stylesheet in *paths* with *content*.

    The writes are independent and run concurrently.  Parent directories are
    not created; a missing ``src/`` means the project was not generated as
    expected.

    Returns:
        The written paths, in the order given.

    Raises:
        OSError: The first write failure.  Other writes may still have
            completed.
    """
    return list(await asyncio.gather(*(_overwrite(Path(p), content) for p in paths)))
