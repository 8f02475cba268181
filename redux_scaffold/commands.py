"""Feature generation commands.

Two entry points per feature type:

* ``generate_business_feature`` / ``generate_client_feature`` validate their
  input, derive names, plan and materialise the feature, and return the
  ``GenerationResult``.  Invalid input raises ``InvalidInputError`` before
  anything touches the filesystem.
* ``new_business_feature`` / ``new_client_feature`` wrap the above for
  interactive use: whatever happens, exactly one message reaches the
  ``Notifier``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from .config import GenerationConfig
from .naming import FeatureNames, to_snake
from .scaffolder.filesystem import FileSystem, LocalFileSystem
from .scaffolder.materializer import GenerationResult, Materializer
from .scaffolder.planner import FeatureType, LayoutConflictError, plan_feature
from .scaffolder.templates import TemplateSet
from .utils import print_error, print_success

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

EMPTY_NAME_MESSAGE = "The feature name must not be empty"
INVALID_DIRECTORY_MESSAGE = "Please select a valid directory"


class ScaffoldError(Exception):
    """Base class for scaffolder errors."""


class InvalidInputError(ScaffoldError):
    """Raised when the feature name or target directory is unusable."""


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Writes notifications to the shared Rich console."""

    def info(self, message: str) -> None:
        print_success(message)

    def error(self, message: str) -> None:
        print_error(message)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


async def _validate(
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    fs: FileSystem,
) -> tuple[str, Path]:
    if feature_name is None or not feature_name.strip():
        raise InvalidInputError(EMPTY_NAME_MESSAGE)
    name = feature_name.strip()
    if not to_snake(name):
        raise InvalidInputError(f"{name!r} contains no letters or digits")

    if target_directory is None or str(target_directory) == "":
        raise InvalidInputError(INVALID_DIRECTORY_MESSAGE)
    target = Path(target_directory)
    if not await fs.is_dir(target):
        raise InvalidInputError(INVALID_DIRECTORY_MESSAGE)
    return name, target


async def _generate(
    feature_type: FeatureType,
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig],
    fs: Optional[FileSystem],
    preflight: bool,
    templates: Optional[TemplateSet],
) -> GenerationResult:
    fs = fs or LocalFileSystem()
    config = config or GenerationConfig()
    name, target = await _validate(feature_name, target_directory, fs)

    names = FeatureNames.derive(name, config)
    try:
        plan = plan_feature(feature_type, names, config, target, templates)
    except LayoutConflictError as exc:
        raise InvalidInputError(str(exc)) from exc
    return await Materializer(fs, preflight=preflight).materialize(plan)


async def generate_business_feature(
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig] = None,
    *,
    fs: Optional[FileSystem] = None,
    preflight: bool = False,
    templates: Optional[TemplateSet] = None,
) -> GenerationResult:
    """Generate ``<target>/<snake>/{actions/, models/<snake>_state.dart, <snake>.dart}``.

    Raises:
        InvalidInputError: If the name is blank or the target is not an
            existing directory.
    """
    return await _generate(
        FeatureType.BUSINESS, feature_name, target_directory, config, fs, preflight, templates
    )


async def generate_client_feature(
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig] = None,
    *,
    fs: Optional[FileSystem] = None,
    preflight: bool = False,
    templates: Optional[TemplateSet] = None,
) -> GenerationResult:
    """Generate the widget, connector, view-model, factory and barrel files.

    Raises:
        InvalidInputError: If the name is blank, the target is not an
            existing directory, or the config maps two files to one path.
    """
    return await _generate(
        FeatureType.CLIENT, feature_name, target_directory, config, fs, preflight, templates
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def success_message(feature_type: FeatureType, feature_name: str) -> str:
    noun = "feature" if feature_type is FeatureType.BUSINESS else "Feature"
    return f"Successfully Generated {to_snake(feature_name)} {noun}"


async def _run_command(
    feature_type: FeatureType,
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig],
    notifier: Optional[Notifier],
    fs: Optional[FileSystem],
    preflight: bool,
) -> Optional[GenerationResult]:
    notifier = notifier or ConsoleNotifier()
    generate = (
        generate_business_feature
        if feature_type is FeatureType.BUSINESS
        else generate_client_feature
    )
    try:
        result = await generate(
            feature_name, target_directory, config, fs=fs, preflight=preflight
        )
    except InvalidInputError as exc:
        notifier.error(str(exc))
        return None
    except OSError as exc:
        notifier.error(f"Error: {exc}")
        return None

    if result.ok:
        notifier.info(success_message(feature_type, (feature_name or "").strip()))
    else:
        notifier.error(f"Error: {result.error.message}")
    return result


async def new_business_feature(
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig] = None,
    notifier: Optional[Notifier] = None,
    *,
    fs: Optional[FileSystem] = None,
    preflight: bool = False,
) -> Optional[GenerationResult]:
    """Generate a business feature and report the outcome to *notifier*.

    Returns the ``GenerationResult``, or ``None`` when the input was rejected.
    """
    return await _run_command(
        FeatureType.BUSINESS, feature_name, target_directory, config, notifier, fs, preflight
    )


async def new_client_feature(
    feature_name: Optional[str],
    target_directory: Optional[str | Path],
    config: Optional[GenerationConfig] = None,
    notifier: Optional[Notifier] = None,
    *,
    fs: Optional[FileSystem] = None,
    preflight: bool = False,
) -> Optional[GenerationResult]:
    """Generate a client feature and report the outcome to *notifier*."""
    return await _run_command(
        FeatureType.CLIENT, feature_name, target_directory, config, notifier, fs, preflight
    )
