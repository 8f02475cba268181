"""async_redux feature scaffolder.

Generates the Dart boilerplate of a business feature (state and actions) or a
client feature (widget, connector, view-model and view-model factory) inside
an existing directory, without overwriting files that are already there.

Quick usage::

    from redux_scaffold import GenerationConfig, generate_client_feature

    result = await generate_client_feature("user profile", "lib/client")
    if not result.ok:
        print(result.error.message)
"""

from redux_scaffold.commands import (
    ConsoleNotifier,
    InvalidInputError,
    Notifier,
    ScaffoldError,
    generate_business_feature,
    generate_client_feature,
    new_business_feature,
    new_client_feature,
)
from redux_scaffold.config import GenerationConfig, SettingsStore
from redux_scaffold.naming import FeatureNames, to_pascal, to_snake

__all__ = [
    "ConsoleNotifier",
    "FeatureNames",
    "GenerationConfig",
    "InvalidInputError",
    "Notifier",
    "ScaffoldError",
    "SettingsStore",
    "generate_business_feature",
    "generate_client_feature",
    "new_business_feature",
    "new_client_feature",
    "to_pascal",
    "to_snake",
]
