"""Planning, rendering and writing of feature files.

Quick usage::

    from redux_scaffold.scaffolder import FeatureType, Materializer, plan_feature

    plan = plan_feature(FeatureType.CLIENT, names, config, Path("lib/client"))
    result = await Materializer().materialize(plan)
"""

from redux_scaffold.scaffolder.filesystem import FileSystem, LocalFileSystem
from redux_scaffold.scaffolder.materializer import (
    ErrorKind,
    FileOutcome,
    GenerationError,
    GenerationResult,
    Materializer,
)
from redux_scaffold.scaffolder.planner import (
    FeatureType,
    FileSpec,
    LayoutConflictError,
    LayoutPlan,
    plan_feature,
)
from redux_scaffold.scaffolder.templates import TemplateSet

__all__ = [
    "ErrorKind",
    "FeatureType",
    "FileOutcome",
    "FileSpec",
    "FileSystem",
    "GenerationError",
    "GenerationResult",
    "LayoutConflictError",
    "LayoutPlan",
    "LocalFileSystem",
    "Materializer",
    "TemplateSet",
    "plan_feature",
]
