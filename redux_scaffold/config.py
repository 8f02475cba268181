"""Scaffolder configuration.

Typed, immutable generation options. All settings use Pydantic v2 models so
that a settings document can be validated at construction time and every
option always resolves to a value: an explicit override if one is present,
otherwise the built-in default below.

Settings keys are the camelCase dotted paths used by the editor extension
(``business.state.generateFreezed``, ``client.widget.suffix``, ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# async_redux constants
# ---------------------------------------------------------------------------

FRAMEWORK_IMPORT_PATH = "package:async_redux/async_redux.dart"
ACTIONS_DIRECTORY = "actions"
MODELS_DIRECTORY = "models"
ACTION_BASE_NAME = "ReduxAction"
STATE_NAME = "AppState"
WIDGET_SUFFIX = "Widget"
VIEW_MODEL_BASE_NAME = "Vm"
VIEW_MODEL_FACTORY_BASE_NAME = "VmFactory"

# Section prefix under which the options live in an editor settings file.
SETTINGS_SECTION = "asyncRedux"


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Business layer
# ---------------------------------------------------------------------------


class StateConfig(_Options):
    """Application state class referenced by generated code."""

    name: str = Field(default=STATE_NAME, min_length=1)
    import_path: str = Field(default="", alias="importPath")
    generate_freezed: bool = Field(
        default=False,
        alias="generateFreezed",
        description="Emit a freezed immutable state class instead of a plain one",
    )


class ActionConfig(_Options):
    """Base action options. Reserved for the ``actions`` directory."""

    base_name: str = Field(default=ACTION_BASE_NAME, min_length=1, alias="baseName")
    import_path: str = Field(default=FRAMEWORK_IMPORT_PATH, alias="importPath")
    include_state: bool = Field(default=True, alias="includeState")


class BusinessConfig(_Options):
    generate_exports: bool = Field(default=True, alias="generateExports")
    state: StateConfig = Field(default_factory=StateConfig)
    action: ActionConfig = Field(default_factory=ActionConfig)


# ---------------------------------------------------------------------------
# Client layer
# ---------------------------------------------------------------------------


class WidgetConfig(_Options):
    suffix: str = Field(default=WIDGET_SUFFIX)


class ConnectorConfig(_Options):
    suffix: str = Field(default="", description="Appended after ``Connector``")
    include_widget_suffix: bool = Field(default=False, alias="includeWidgetSuffix")


class ViewModelConfig(_Options):
    base_name: str = Field(default=VIEW_MODEL_BASE_NAME, alias="baseName")
    import_path: str = Field(default=FRAMEWORK_IMPORT_PATH, alias="importPath")


class ViewModelFactoryConfig(_Options):
    base_name: str = Field(default=VIEW_MODEL_FACTORY_BASE_NAME, alias="baseName")
    import_path: str = Field(default=FRAMEWORK_IMPORT_PATH, alias="importPath")
    include_state: bool = Field(default=True, alias="includeState")


class ClientConfig(_Options):
    generate_exports: bool = Field(default=True, alias="generateExports")
    widget: WidgetConfig = Field(default_factory=WidgetConfig)
    connector: ConnectorConfig = Field(default_factory=ConnectorConfig)
    view_model: ViewModelConfig = Field(default_factory=ViewModelConfig, alias="viewModel")
    view_model_factory: ViewModelFactoryConfig = Field(
        default_factory=ViewModelFactoryConfig, alias="viewModelFactory"
    )


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class GenerationConfig(_Options):
    """Every option the generator reads, resolved once per invocation.

    Instances are created at the command boundary (from a ``SettingsStore``
    or directly in code) and passed down to the planner and templates.
    Nothing below the command layer looks configuration up on its own.
    """

    business: BusinessConfig = Field(default_factory=BusinessConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    @classmethod
    def resolve(cls, lookup: Callable[[str], Any]) -> "GenerationConfig":
        """Build a config from a key-path resolver.

        *lookup* receives dotted settings keys such as
        ``"business.state.generateFreezed"`` and returns ``None`` when the key
        is unset, in which case the built-in default applies.
        """
        return cls.model_validate(_collect(cls, lookup, prefix=""))

    @classmethod
    def keys(cls) -> list[str]:
        """Return every dotted settings key the generator understands."""
        return _leaf_keys(cls, prefix="")


def _settings_key(name: str, field: Any) -> str:
    return field.alias or name


def _collect(model: type[BaseModel], lookup: Callable[[str], Any], prefix: str) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        key = _settings_key(name, field)
        path = f"{prefix}{key}"
        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            values[key] = _collect(annotation, lookup, prefix=f"{path}.")
            continue
        value = lookup(path)
        if value is not None:
            values[key] = value
    return values


def _leaf_keys(model: type[BaseModel], prefix: str) -> list[str]:
    keys: list[str] = []
    for name, field in model.model_fields.items():
        path = f"{prefix}{_settings_key(name, field)}"
        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            keys.extend(_leaf_keys(annotation, prefix=f"{path}."))
        else:
            keys.append(path)
    return keys


# ---------------------------------------------------------------------------
# Settings store
# ---------------------------------------------------------------------------


class SettingsStore:
    """Key-path resolver over a JSON settings document.

    Both shapes are accepted and may be mixed::

        {"business": {"state": {"generateFreezed": true}}}
        {"asyncRedux.business.state.generateFreezed": true}

    Flat keys may carry the ``asyncRedux.`` section prefix, as they do in an
    editor ``settings.json``.  Flat keys win over nested ones.
    """

    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self._nested: dict[str, Any] = {}
        self._flat: dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key == SETTINGS_SECTION and isinstance(value, dict):
                self._nested.update(value)
            elif "." in key:
                self._flat.update(_flatten(_strip_section(key), value))
            else:
                self._nested[key] = value

    def get(self, key: str) -> Any:
        """Return the value stored under dotted *key*, or ``None`` if unset."""
        if key in self._flat:
            return self._flat[key]
        node: Any = self._nested
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def with_overrides(self, overrides: dict[str, Any]) -> "SettingsStore":
        """Return a new store where *overrides* (dotted keys) take precedence."""
        merged = SettingsStore()
        merged._nested = dict(self._nested)
        merged._flat = dict(self._flat)
        for key, value in overrides.items():
            merged._flat.update(_flatten(_strip_section(key), value))
        return merged

    def to_config(self) -> GenerationConfig:
        """Resolve every option against this store."""
        return GenerationConfig.resolve(self.get)

    @classmethod
    def load(cls, path: Path) -> "SettingsStore":
        """Load a settings document from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the document is not a JSON object.
        """
        raw = Path(path).read_text(encoding="utf-8")
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a JSON object: {path}")
        return cls(data)


def _flatten(key: str, value: Any) -> dict[str, Any]:
    """Expand ``{"business.state": {"name": "X"}}`` to its dotted leaf keys."""
    if not isinstance(value, dict):
        return {key: value}
    leaves: dict[str, Any] = {}
    for child, child_value in value.items():
        leaves.update(_flatten(f"{key}.{child}", child_value))
    return leaves


def _strip_section(key: str) -> str:
    prefix = f"{SETTINGS_SECTION}."
    return key[len(prefix):] if key.startswith(prefix) else key
