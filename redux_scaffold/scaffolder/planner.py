"""Layout planning: which directories and files a feature consists of."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..config import ACTIONS_DIRECTORY, MODELS_DIRECTORY, GenerationConfig
from ..naming import FeatureNames
from .templates import TemplateSet

DART_EXTENSION = ".dart"


class FeatureType(str, Enum):
    BUSINESS = "business"
    CLIENT = "client"


class LayoutConflictError(ValueError):
    """Raised when two planned files would be written to the same path."""


class FileSpec(BaseModel):
    """A rendered file and where it goes, relative to the target directory."""

    model_config = ConfigDict(frozen=True)

    relative_path: Path
    content: str


class LayoutPlan(BaseModel):
    """Everything one generation will create.

    ``directories`` are relative to ``target_directory`` and are created in
    order, all of them before any file in ``files`` is written.
    """

    model_config = ConfigDict(frozen=True)

    target_directory: Path
    directories: tuple[Path, ...] = Field(default=())
    files: tuple[FileSpec, ...] = Field(default=())

    def directory_paths(self) -> list[Path]:
        return [self.target_directory / d for d in self.directories]

    def file_path(self, spec: FileSpec) -> Path:
        return self.target_directory / spec.relative_path


def _dart(stem: str) -> str:
    return f"{stem}{DART_EXTENSION}"


def _check_unique(files: list[FileSpec]) -> None:
    seen: set[Path] = set()
    for spec in files:
        if spec.relative_path in seen:
            raise LayoutConflictError(
                f"{spec.relative_path.name} would be generated twice; "
                "set client.widget.suffix or disable client.generateExports"
            )
        seen.add(spec.relative_path)


def plan_business_feature(
    names: FeatureNames,
    config: GenerationConfig,
    target_directory: Path,
    templates: TemplateSet,
) -> LayoutPlan:
    """Plan the state/actions bundle.

    The ``actions`` directory is always created even though nothing is
    written into it yet; it is where the feature's actions are expected to
    live.
    """
    business = config.business
    feature_dir = Path(names.snake)

    files = [
        FileSpec(
            relative_path=feature_dir / MODELS_DIRECTORY / _dart(names.state_file),
            content=templates.render_state(names, freezed=business.state.generate_freezed),
        )
    ]
    if business.generate_exports:
        files.append(
            FileSpec(
                relative_path=feature_dir / _dart(names.barrel_file),
                content=templates.render_business_exports(names),
            )
        )

    return LayoutPlan(
        target_directory=target_directory,
        directories=(
            feature_dir,
            feature_dir / ACTIONS_DIRECTORY,
            feature_dir / MODELS_DIRECTORY,
        ),
        files=tuple(files),
    )


def plan_client_feature(
    names: FeatureNames,
    config: GenerationConfig,
    target_directory: Path,
    templates: TemplateSet,
) -> LayoutPlan:
    """Plan the widget/connector/view-model bundle.

    Raises:
        LayoutConflictError: If two files share a path, which happens when the
            widget suffix is empty and the barrel is enabled.
    """
    client = config.client
    state = config.business.state
    feature_dir = Path(names.snake)

    files = [
        FileSpec(
            relative_path=feature_dir / _dart(names.widget_file),
            content=templates.render_widget(names),
        ),
        FileSpec(
            relative_path=feature_dir / _dart(names.connector_file),
            content=templates.render_connector(names, state.name, state.import_path),
        ),
        FileSpec(
            relative_path=feature_dir / _dart(names.view_model_file),
            content=templates.render_view_model(
                names,
                client.view_model.base_name,
                client.view_model.import_path,
            ),
        ),
        FileSpec(
            relative_path=feature_dir / _dart(names.view_model_factory_file),
            content=templates.render_view_model_factory(
                names,
                client.view_model_factory.base_name,
                client.view_model_factory.import_path,
                client.view_model_factory.include_state,
                state.name,
                state.import_path,
            ),
        ),
    ]
    if client.generate_exports:
        files.append(
            FileSpec(
                relative_path=feature_dir / _dart(names.barrel_file),
                content=templates.render_client_exports(names),
            )
        )
    _check_unique(files)

    return LayoutPlan(
        target_directory=target_directory,
        directories=(feature_dir,),
        files=tuple(files),
    )


def plan_feature(
    feature_type: FeatureType,
    names: FeatureNames,
    config: GenerationConfig,
    target_directory: Path,
    templates: TemplateSet | None = None,
) -> LayoutPlan:
    templates = templates or TemplateSet()
    if FeatureType(feature_type) is FeatureType.BUSINESS:
        return plan_business_feature(names, config, target_directory, templates)
    return plan_client_feature(names, config, target_directory, templates)
