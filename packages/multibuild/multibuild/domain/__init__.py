"""
MultiBuild Domain

캐시 그룹 / 그룹 캐시 / 의존성 추적 / 태스크 이름.
"""

from multibuild.domain.cache_groups import CacheGroupRegistry
from multibuild.domain.cache_store import GroupCache, GroupCacheStore
from multibuild.domain.dependency_tracker import TargetDependencyTracker
from multibuild.domain.models import (
    DEFAULT_GROUP,
    BuildFailure,
    BuildResult,
    BuildSuccess,
    BundleOutput,
    CacheGroupKey,
    CacheSeed,
    DefaultGroup,
    ModuleRecord,
    NamedGroup,
    TargetBuildReport,
    TargetState,
)
from multibuild.domain.ports import BundlerPort, ErrorHandler, OutputSink, TaskHarnessPort
from multibuild.domain.task_names import TaskNamer

__all__ = [
    "DEFAULT_GROUP",
    "BuildFailure",
    "BuildResult",
    "BuildSuccess",
    "BundleOutput",
    "BundlerPort",
    "CacheGroupKey",
    "CacheGroupRegistry",
    "CacheSeed",
    "DefaultGroup",
    "ErrorHandler",
    "GroupCache",
    "GroupCacheStore",
    "ModuleRecord",
    "NamedGroup",
    "OutputSink",
    "TargetBuildReport",
    "TargetDependencyTracker",
    "TargetState",
    "TaskHarnessPort",
    "TaskNamer",
]
