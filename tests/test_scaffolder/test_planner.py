"""Tests for feature layout planning (redux_scaffold.scaffolder.planner).

Covers:
- Business directories (feature, actions, models) and state/barrel files
- Client files and the optional barrel
- Cross-file naming consistency between connector and its siblings
- Config values flowing into the rendered content
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from redux_scaffold.config import GenerationConfig
from redux_scaffold.naming import FeatureNames
from redux_scaffold.scaffolder.planner import (
    FeatureType,
    LayoutConflictError,
    LayoutPlan,
    plan_feature,
)


pytestmark = pytest.mark.unit

TARGET = Path("/tmp/feat")


def _config(**sections) -> GenerationConfig:
    return GenerationConfig.model_validate(sections)


def _plan(feature_type: FeatureType, config: GenerationConfig, name: str = "user profile") -> LayoutPlan:
    return plan_feature(feature_type, FeatureNames.derive(name, config), config, TARGET)


def _paths(plan: LayoutPlan) -> list[str]:
    return [str(spec.relative_path) for spec in plan.files]


class TestBusinessPlan:
    def test_directories(self, default_config):
        plan = _plan(FeatureType.BUSINESS, default_config)
        assert plan.directory_paths() == [
            TARGET / "user_profile",
            TARGET / "user_profile" / "actions",
            TARGET / "user_profile" / "models",
        ]

    def test_files_with_exports(self, default_config):
        plan = _plan(FeatureType.BUSINESS, default_config)
        assert _paths(plan) == [
            "user_profile/models/user_profile_state.dart",
            "user_profile/user_profile.dart",
        ]

    @pytest.mark.parametrize("generate_exports", [True, False])
    def test_barrel_iff_generate_exports(self, generate_exports):
        plan = _plan(
            FeatureType.BUSINESS,
            _config(business={"generateExports": generate_exports}),
        )
        assert len(plan.files) == (2 if generate_exports else 1)
        assert plan.files[0].relative_path.name == "user_profile_state.dart"
        assert len(plan.directories) == 3

    def test_freezed_flag_selects_state_kind(self):
        plain = _plan(FeatureType.BUSINESS, GenerationConfig())
        freezed = _plan(FeatureType.BUSINESS, _config(business={"state": {"generateFreezed": True}}))
        assert "copyWith()" in plain.files[0].content
        assert "@freezed" in freezed.files[0].content

    def test_file_path_is_under_target(self, default_config):
        plan = _plan(FeatureType.BUSINESS, default_config)
        assert plan.file_path(plan.files[0]) == (
            TARGET / "user_profile" / "models" / "user_profile_state.dart"
        )


class TestClientPlan:
    def test_directories(self, default_config):
        plan = _plan(FeatureType.CLIENT, default_config)
        assert plan.directory_paths() == [TARGET / "user_profile"]

    def test_files_with_exports(self, default_config):
        plan = _plan(FeatureType.CLIENT, default_config)
        assert _paths(plan) == [
            "user_profile/user_profile_widget.dart",
            "user_profile/user_profile_page_connector.dart",
            "user_profile/user_profile_view_model.dart",
            "user_profile/user_profile_view_model_factory.dart",
            "user_profile/user_profile.dart",
        ]

    def test_scenario_without_exports(self, no_exports_config):
        plan = _plan(FeatureType.CLIENT, no_exports_config)
        assert [spec.relative_path.name for spec in plan.files] == [
            "user_profile_widget.dart",
            "user_profile_page_connector.dart",
            "user_profile_view_model.dart",
            "user_profile_view_model_factory.dart",
        ]
        connector = plan.files[1].content
        assert "class UserProfileConnector extends StatelessWidget" in connector

    def test_empty_widget_suffix_conflicts_with_barrel(self):
        config = _config(client={"widget": {"suffix": ""}})
        with pytest.raises(LayoutConflictError, match="user_profile.dart"):
            _plan(FeatureType.CLIENT, config)

    def test_empty_widget_suffix_without_barrel(self):
        config = _config(client={"widget": {"suffix": ""}, "generateExports": False})
        plan = _plan(FeatureType.CLIENT, config)
        assert plan.files[0].relative_path == Path("user_profile/user_profile.dart")
        assert len({spec.relative_path for spec in plan.files}) == 4

    def test_feature_type_accepts_plain_string(self, default_config):
        names = FeatureNames.derive("user profile", default_config)
        plan = plan_feature("business", names, default_config, TARGET)
        assert len(plan.directories) == 3

    def test_state_config_reaches_connector_and_factory(self):
        config = _config(
            business={"state": {"name": "GlobalState", "importPath": "package:app/state.dart"}}
        )
        plan = _plan(FeatureType.CLIENT, config)
        connector, factory = plan.files[1].content, plan.files[3].content
        assert "StoreConnector<GlobalState, UserProfileViewModel>" in connector
        assert "import 'package:app/state.dart';" in connector
        assert "VmFactory<GlobalState, UserProfileConnector>" in factory
        assert "import 'package:app/state.dart';" in factory


class TestCrossFileNaming:
    @pytest.mark.parametrize(
        "client",
        [
            {},
            {"widget": {"suffix": "Page"}, "connector": {"includeWidgetSuffix": True}},
            {"widget": {"suffix": "View"}, "connector": {"suffix": "Container"}},
        ],
    )
    def test_connector_references_match_siblings(self, client):
        plan = _plan(FeatureType.CLIENT, _config(client={**client, "generateExports": True}), "Order History")
        widget, connector, view_model, factory, barrel = (spec.content for spec in plan.files)
        stems = [spec.relative_path.stem for spec in plan.files]

        imported = re.findall(r"import '([a-z0-9_]+)\.dart';", connector)
        assert imported == [stems[2], stems[3], stems[0]]

        widget_class = re.search(r"class (\w+) extends StatelessWidget", widget).group(1)
        view_model_class = re.search(r"class (\w+)", view_model).group(1)
        factory_class = re.search(r"class (\w+)", factory).group(1)
        connector_class = re.search(r"class (\w+) extends StatelessWidget", connector).group(1)

        assert f"StoreConnector<AppState, {view_model_class}>" in connector
        assert f"vm: () => {factory_class}()" in connector
        assert f"builder: (context, viewModel) => {widget_class}()" in connector
        assert f"<AppState, {connector_class}>" in factory
        assert f"import '{stems[1]}.dart';" in factory
        assert f"export '{stems[1]}.dart';" in barrel
