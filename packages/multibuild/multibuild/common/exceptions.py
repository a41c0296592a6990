"""
MultiBuild Exception Hierarchy

표준화된 예외 계층으로 일관된 에러 처리를 제공합니다.

사용 가이드:
    1. 설정 에러 → 생성 시점에 즉시 발생 (태스크 등록 전)
    2. 빌드 에러 → error_handler가 있으면 위임, 없으면 TargetBuildError로 래핑 후 재발생
    3. 외부 에러 → 커스텀 예외로 래핑

예시:
    try:
        result = await bundler.bundle(entry, cache, options)
    except Exception as e:
        raise TargetBuildError(target, e) from e
"""

from typing import Any


class MultiBuildError(Exception):
    """Base exception for all MultiBuild errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize MultiBuild error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Validation Errors
# ============================================================


class ValidationError(MultiBuildError):
    """Input validation failures."""

    pass


class InvalidConfigurationError(ValidationError):
    """Invalid configuration."""

    pass


class CacheGroupConflictError(InvalidConfigurationError):
    """A target was declared in two different cache groups."""

    def __init__(self, target: str, first_group: str, second_group: str):
        super().__init__(
            f"Target '{target}' is declared in cache groups '{first_group}' and '{second_group}'",
            details={"target": target, "groups": [first_group, second_group]},
        )
        self.target = target
        self.first_group = first_group
        self.second_group = second_group


class UnknownTargetError(ValidationError):
    """Target is not part of the configured target set."""

    def __init__(self, target: str):
        super().__init__(f"Unknown target: {target}", details={"target": target})
        self.target = target


# ============================================================
# Task Errors
# ============================================================


class TaskError(MultiBuildError):
    """Task registration / execution failures."""

    pass


class UnknownTaskError(TaskError):
    """No task registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Task '{name}' is not registered", details={"task": name})
        self.name = name


class DuplicateTaskError(TaskError):
    """A task with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Task '{name}' is already registered", details={"task": name})
        self.name = name


class ReentrantRunError(TaskError):
    """An entry point was called from inside a run of the same orchestrator (e.g. from error_handler)."""

    def __init__(self, entry_point: str):
        super().__init__(
            f"'{entry_point}' called while a run of the same MultiBuild is in progress; "
            "schedule it after the current run returns",
            details={"entry_point": entry_point},
        )
        self.entry_point = entry_point


# ============================================================
# Build Errors
# ============================================================


class BuildError(MultiBuildError):
    """Bundle build failures."""

    pass


class TargetBuildError(BuildError):
    """Build of a single target failed and no error handler was configured."""

    def __init__(self, target: str, error: BaseException):
        super().__init__(
            f"Build of target '{target}' failed: {error}",
            details={"target": target, "error_type": type(error).__name__},
        )
        self.target = target
        self.error = error
