"""Command-line entry point.

Usage::

    python -m redux_scaffold business "user profile" --target lib/business
    python -m redux_scaffold client "user profile" -t lib/client --set client.generateExports=false
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.prompt import Prompt

from .commands import new_business_feature, new_client_feature
from .config import GenerationConfig, SettingsStore
from .utils import console, print_error, print_summary_table


def _parse_override(item: str) -> tuple[str, Any]:
    """Split ``key=value``; the value is read as JSON when it parses, else kept as text."""
    key, sep, raw = item.partition("=")
    if not sep or not key.strip():
        raise ValueError(f"Invalid override (expected KEY=VALUE): {item}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key.strip(), value


def _load_config(config_path: Optional[str], overrides: list[str]) -> GenerationConfig:
    store = SettingsStore.load(Path(config_path)) if config_path else SettingsStore()
    if overrides:
        store = store.with_overrides(dict(_parse_override(o) for o in overrides))
    return store.to_config()


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``python -m redux_scaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="redux-scaffold",
        description="Generate async_redux business and client feature boilerplate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Settings keys:\n"
            + "\n".join(f"  {key}" for key in GenerationConfig.keys())
        ),
    )
    parser.add_argument("feature_type", choices=["business", "client"])
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Feature name, e.g. 'user profile' (prompted for when omitted)",
    )
    parser.add_argument(
        "--target", "-t",
        default=".",
        help="Existing directory to create the feature in (default: .)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON settings file (nested or dotted asyncRedux.* keys)",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a settings key, e.g. business.state.generateFreezed=true",
    )
    parser.add_argument(
        "--preflight",
        action="store_true",
        help="Check every target file first and write nothing if any exists",
    )

    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config, args.overrides)
    except (OSError, ValueError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return 1

    name = args.name
    if name is None:
        name = Prompt.ask("Feature Name", console=console, default="")

    command = new_business_feature if args.feature_type == "business" else new_client_feature
    result = asyncio.run(command(name, args.target, config, preflight=args.preflight))

    if result is None or not result.ok:
        return 1
    print_summary_table(
        {str(path): "created" for path in result.written},
        title="Generated files",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
