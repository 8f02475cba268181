"""Feature naming.

The only place where identifiers and filenames are derived from a feature
name.  Templates, the layout planner and the command layer all read names
from a :class:`FeatureNames` instance instead of converting case themselves,
so that every cross reference between generated files agrees.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .config import GenerationConfig

_WORD_SPLIT = re.compile(r"[\W_]+")


def _words(name: str) -> list[str]:
    return [w for w in _WORD_SPLIT.split(name.lower()) if w]


def to_snake(name: str) -> str:
    """Convert ``User Profile`` or ``user-profile`` to ``user_profile``.

    The input is lower-cased first, so ``UserProfile`` becomes
    ``userprofile``: word boundaries come from separators only.
    """
    return "_".join(_words(name))


def to_pascal(name: str) -> str:
    """Convert ``user profile`` or ``user_profile`` to ``UserProfile``."""
    return "".join(w[0].upper() + w[1:] for w in _words(name))


def with_suffix(base: str, suffix: str, include: bool) -> str:
    """Return ``base + suffix`` when *include* is set, else *base*."""
    return f"{base}{suffix}" if include else base


def package_imports(*paths: str) -> list[str]:
    """Return the non-empty import paths in order, each at most once.

    An empty configured path means the type lives next to the generated
    files, which import each other by bare filename anyway.
    """
    seen: list[str] = []
    for path in paths:
        if path and path not in seen:
            seen.append(path)
    return seen


@dataclass(frozen=True)
class FeatureNames:
    """Every name derived from one feature name.

    File attributes are stems without the ``.dart`` extension.
    """

    raw: str
    snake: str
    pascal: str
    state_class: str
    widget_class: str
    connector_class: str
    view_model_class: str
    view_model_factory_class: str
    state_file: str
    barrel_file: str
    widget_file: str
    connector_file: str
    view_model_file: str
    view_model_factory_file: str

    @property
    def lower(self) -> str:
        return self.raw.lower()

    @classmethod
    def derive(cls, feature_name: str, config: GenerationConfig) -> "FeatureNames":
        snake = to_snake(feature_name)
        pascal = to_pascal(feature_name)
        widget_suffix = config.client.widget.suffix
        connector = config.client.connector

        connector_class = with_suffix(pascal, widget_suffix, connector.include_widget_suffix)
        connector_class += f"Connector{connector.suffix}"

        return cls(
            raw=feature_name,
            snake=snake,
            pascal=pascal,
            state_class=f"{pascal}State",
            widget_class=f"{pascal}{widget_suffix}",
            connector_class=connector_class,
            view_model_class=f"{pascal}ViewModel",
            view_model_factory_class=f"{pascal}ViewModelFactory",
            state_file=f"{snake}_state",
            barrel_file=snake,
            widget_file="_".join(_words(f"{snake} {widget_suffix}")),
            connector_file=f"{snake}_page_connector",
            view_model_file=f"{snake}_view_model",
            view_model_factory_file=f"{snake}_view_model_factory",
        )
