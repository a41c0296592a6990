"""
MultiBuild

Incremental multi-bundle build orchestration with per-group module caches.

Usage:
    from multibuild import MultiBuild, MultiBuildOptions

    build = MultiBuild(
        MultiBuildOptions.create(
            targets=["app", "spec"],
            entry=lambda target: f"src/{target}.js",
            output=write_bundle,
        ),
        bundler=my_bundler,
    )
    await build.run_all()
    await build.changed("/repo/src/util.js")
"""

from multibuild.application import MultiBuild, MultiBuildOptions
from multibuild.common.exceptions import (
    CacheGroupConflictError,
    InvalidConfigurationError,
    MultiBuildError,
    ReentrantRunError,
    TargetBuildError,
)
from multibuild.domain.models import (
    DEFAULT_GROUP,
    BuildFailure,
    BuildSuccess,
    BundleOutput,
    CacheSeed,
    ModuleRecord,
    NamedGroup,
    TargetBuildReport,
    TargetState,
)
from multibuild.infra.bundler import CallableBundler
from multibuild.infra.harness import AsyncTaskHarness

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_GROUP",
    "AsyncTaskHarness",
    "BuildFailure",
    "BuildSuccess",
    "BundleOutput",
    "CacheGroupConflictError",
    "CacheSeed",
    "CallableBundler",
    "InvalidConfigurationError",
    "ModuleRecord",
    "MultiBuild",
    "MultiBuildError",
    "ReentrantRunError",
    "MultiBuildOptions",
    "NamedGroup",
    "TargetBuildError",
    "TargetBuildReport",
    "TargetState",
]
