from multibuild.common.exceptions import (
    BuildError,
    CacheGroupConflictError,
    DuplicateTaskError,
    InvalidConfigurationError,
    MultiBuildError,
    ReentrantRunError,
    TargetBuildError,
    TaskError,
    UnknownTargetError,
    UnknownTaskError,
    ValidationError,
)

__all__ = [
    "BuildError",
    "CacheGroupConflictError",
    "DuplicateTaskError",
    "InvalidConfigurationError",
    "MultiBuildError",
    "ReentrantRunError",
    "TargetBuildError",
    "TaskError",
    "UnknownTargetError",
    "UnknownTaskError",
    "ValidationError",
]
