"""Jinja2 template rendering for feature scaffolding.

Provides the TemplateSet class which loads the bundled ``.dart.j2`` templates
from the ``redux_scaffold/scaffolder/templates/`` directory and renders one
file body per artifact kind.  Renderers receive a ``FeatureNames`` instance
and primitive option values only; they never touch the target filesystem and
never derive names themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..config import FRAMEWORK_IMPORT_PATH, MODELS_DIRECTORY
from ..naming import FeatureNames, package_imports


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateSet
# ---------------------------------------------------------------------------


class TemplateSet:
    """Renders the Dart files of a business or client feature.

    Every rendered body ends with exactly one trailing newline.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"connector.dart.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return _single_trailing_newline(template.render(**context))

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template names."""
        if not self.template_dir.is_dir():
            return []
        return sorted(p.name for p in self.template_dir.glob("*.j2"))

    # -- Business layer ----------------------------------------------------

    def render_state(self, names: FeatureNames, freezed: bool) -> str:
        """Render the feature state class, plain or freezed."""
        template = "state_freezed.dart.j2" if freezed else "state_default.dart.j2"
        return self.render(template, {"names": names})

    def render_business_exports(self, names: FeatureNames) -> str:
        return self.render(
            "business_exports.dart.j2",
            {"names": names, "models_directory": MODELS_DIRECTORY},
        )

    # -- Client layer ------------------------------------------------------

    def render_widget(self, names: FeatureNames) -> str:
        return self.render("widget.dart.j2", {"names": names})

    def render_connector(
        self,
        names: FeatureNames,
        state_name: str,
        state_import_path: str,
    ) -> str:
        """Render the ``StoreConnector`` wrapper.

        The state import is skipped when it is empty or is the framework
        import itself.
        """
        return self.render(
            "connector.dart.j2",
            {
                "names": names,
                "state_name": state_name,
                "package_imports": package_imports(FRAMEWORK_IMPORT_PATH, state_import_path),
                "feature_imports": [
                    names.view_model_file,
                    names.view_model_factory_file,
                    names.widget_file,
                ],
            },
        )

    def render_view_model(
        self,
        names: FeatureNames,
        base_name: str,
        import_path: str,
    ) -> str:
        return self.render(
            "view_model.dart.j2",
            {
                "names": names,
                "base_name": base_name,
                "package_imports": package_imports(import_path),
            },
        )

    def render_view_model_factory(
        self,
        names: FeatureNames,
        base_name: str,
        import_path: str,
        include_state: bool,
        state_name: str,
        state_import_path: str,
    ) -> str:
        """Render the view-model factory.

        With *include_state* the factory is parameterised over the state
        type and its connector, and imports both.
        """
        if include_state:
            imports = package_imports(import_path, state_import_path)
            feature_imports = [names.connector_file, names.view_model_file]
        else:
            imports = package_imports(import_path)
            feature_imports = [names.view_model_file]
        return self.render(
            "view_model_factory.dart.j2",
            {
                "names": names,
                "base_name": base_name,
                "include_state": include_state,
                "state_name": state_name,
                "package_imports": imports,
                "feature_imports": feature_imports,
            },
        )

    def render_client_exports(self, names: FeatureNames) -> str:
        return self.render("client_exports.dart.j2", {"names": names})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _single_trailing_newline(text: str) -> str:
    return text.rstrip("\n") + "\n"
