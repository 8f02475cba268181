"""Shared pytest fixtures for the scaffolder test suite.

Provides reusable fixtures for:
- Temporary target directories
- Default and customised generation configs
- Derived feature names
- A recording notifier and an in-memory filesystem fake
"""

from __future__ import annotations

from pathlib import Path

import pytest

from redux_scaffold.config import GenerationConfig
from redux_scaffold.naming import FeatureNames
from redux_scaffold.scaffolder.templates import TemplateSet


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Existing directory that features are generated into."""
    target = tmp_path / "feat"
    target.mkdir()
    yield target


# ---------------------------------------------------------------------------
# Config & names
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> GenerationConfig:
    return GenerationConfig()


@pytest.fixture
def no_exports_config() -> GenerationConfig:
    """Client scenario: ``Widget`` suffix, no widget suffix on the connector, no barrels."""
    return GenerationConfig.model_validate(
        {
            "business": {"generateExports": False},
            "client": {
                "generateExports": False,
                "widget": {"suffix": "Widget"},
                "connector": {"includeWidgetSuffix": False},
            },
        }
    )


@pytest.fixture
def user_profile(default_config: GenerationConfig) -> FeatureNames:
    return FeatureNames.derive("user profile", default_config)


@pytest.fixture
def templates() -> TemplateSet:
    return TemplateSet()


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------

class RecordingNotifier:
    """Notifier that keeps every message instead of printing it."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class MemoryFileSystem:
    """In-memory ``FileSystem`` that records the order of operations.

    Paths listed in ``fail_writes`` or ``fail_dirs`` raise ``OSError`` with
    a fixed message when written or created.
    """

    def __init__(self) -> None:
        self.dirs: set[Path] = set()
        self.files: dict[Path, str] = {}
        self.log: list[tuple[str, Path]] = []
        self.fail_writes: set[Path] = set()
        self.fail_dirs: set[Path] = set()

    async def exists(self, path: Path) -> bool:
        return path in self.files or path in self.dirs

    async def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    async def make_dirs(self, path: Path) -> None:
        if path in self.fail_dirs:
            raise PermissionError(13, "Permission denied")
        self.log.append(("mkdir", path))
        for p in (path, *path.parents):
            self.dirs.add(p)

    async def write_new(self, path: Path, content: str) -> None:
        if path in self.fail_writes:
            raise OSError(28, "No space left on device")
        if path in self.files:
            raise FileExistsError(17, "File exists")
        self.log.append(("write", path))
        self.files[path] = content


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    fs = MemoryFileSystem()
    fs.dirs.add(Path("/work"))
    return fs
