"""Writing a ``LayoutPlan`` to disk without clobbering existing files.

Directories are created one after another, and all of them exist before the
first file write starts.  File writes then run concurrently and independently:
each one reports a tagged ``FileOutcome`` instead of raising, and the overall
``GenerationResult`` succeeds only if every outcome did.

A failing file does not stop its siblings, so a failed generation may leave
some files behind.  Nothing is rolled back.  With ``preflight=True`` every
target is checked for a collision before anything is written, which keeps a
collision from producing a partial feature.

The existence check is not atomic with respect to other writers.  Runs are
expected to be serialised by the person invoking them; ``LocalFileSystem``
additionally creates files in exclusive mode so a file appearing after the
check is reported as a collision rather than overwritten.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .filesystem import FileSystem, LocalFileSystem
from .planner import FileSpec, LayoutPlan


class ErrorKind(str, Enum):
    COLLISION = "collision"
    IO = "io"


class GenerationError(BaseModel):
    """Why a single directory or file could not be created."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    path: Path
    message: str


class FileOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    error: Optional[GenerationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GenerationResult(BaseModel):
    """Aggregated outcome of materialising one plan.

    ``error`` is the first failure in plan order.  ``outcomes`` holds one
    entry per planned file that was attempted.
    """

    model_config = ConfigDict(frozen=True)

    error: Optional[GenerationError] = None
    outcomes: tuple[FileOutcome, ...] = Field(default=())

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def written(self) -> list[Path]:
        return [o.path for o in self.outcomes if o.ok]

    @property
    def failures(self) -> list[GenerationError]:
        return [o.error for o in self.outcomes if o.error is not None]

    @classmethod
    def from_outcomes(cls, outcomes: list[FileOutcome]) -> "GenerationResult":
        first = next((o.error for o in outcomes if o.error is not None), None)
        return cls(error=first, outcomes=tuple(outcomes))


def _collision(path: Path) -> GenerationError:
    return GenerationError(
        kind=ErrorKind.COLLISION,
        path=path,
        message=f"{path.name} already exists",
    )


def _io_error(path: Path, exc: OSError) -> GenerationError:
    return GenerationError(
        kind=ErrorKind.IO,
        path=path,
        message=f"{path.name}: {exc.strerror or exc}",
    )


class Materializer:
    """Creates the directories and files of a ``LayoutPlan``."""

    def __init__(self, fs: FileSystem | None = None, *, preflight: bool = False) -> None:
        self.fs = fs or LocalFileSystem()
        self.preflight = preflight

    async def materialize(self, plan: LayoutPlan) -> GenerationResult:
        for directory in plan.directory_paths():
            try:
                await self.fs.make_dirs(directory)
            except OSError as exc:
                return GenerationResult(error=_io_error(directory, exc))

        if self.preflight:
            collisions = await self._find_collisions(plan)
            if collisions:
                return GenerationResult.from_outcomes(collisions)

        outcomes = await asyncio.gather(
            *(self._write(plan.file_path(spec), spec) for spec in plan.files)
        )
        return GenerationResult.from_outcomes(list(outcomes))

    async def _find_collisions(self, plan: LayoutPlan) -> list[FileOutcome]:
        paths = [plan.file_path(spec) for spec in plan.files]
        exists = await asyncio.gather(*(self.fs.exists(p) for p in paths))
        return [
            FileOutcome(path=p, error=_collision(p))
            for p, present in zip(paths, exists)
            if present
        ]

    async def _write(self, path: Path, spec: FileSpec) -> FileOutcome:
        try:
            if await self.fs.exists(path):
                return FileOutcome(path=path, error=_collision(path))
            await self.fs.write_new(path, spec.content)
        except FileExistsError:
            return FileOutcome(path=path, error=_collision(path))
        except OSError as exc:
            return FileOutcome(path=path, error=_io_error(path, exc))
        return FileOutcome(path=path)
