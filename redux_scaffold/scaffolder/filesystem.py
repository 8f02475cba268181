"""Filesystem access used by the materializer.

The scaffolder never reads, deletes or renames files.  It only needs to know
whether a path exists, create directories and write brand-new files.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    async def exists(self, path: Path) -> bool: ...

    async def is_dir(self, path: Path) -> bool: ...

    async def make_dirs(self, path: Path) -> None: ...

    async def write_new(self, path: Path, content: str) -> None: ...


class LocalFileSystem:
    """``FileSystem`` backed by ``pathlib``, run off the event loop."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.exists)

    async def is_dir(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_dir)

    async def make_dirs(self, path: Path) -> None:
        """Create *path* and any missing parents.  Existing directories are fine."""
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)

    async def write_new(self, path: Path, content: str) -> None:
        """Write *content* to a file that must not exist yet.

        Raises:
            FileExistsError: If *path* already exists.
        """
        await asyncio.to_thread(_write_exclusive, path, content)


def _write_exclusive(path: Path, content: str) -> None:
    with path.open("x", encoding="utf-8") as fh:
        fh.write(content)
