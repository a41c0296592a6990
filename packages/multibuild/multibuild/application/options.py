"""
MultiBuild construction options.

Example:
    options = MultiBuildOptions.create(
        targets=["app", "spec", "vendor"],
        cache_groups={"v": ["vendor"]},
        skip_cache=["spec"],
        entry=lambda target: f"src/{target}/index.js",
        rollup_options={"format": "iife"},
        output=lambda target, bundle: sink.write(bundle),
        error_handler=lambda error: print(error),
    )
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from multibuild.common.exceptions import InvalidConfigurationError
from multibuild.domain.cache_groups import iter_group_spec

# Keys owned by the orchestrator; a caller-supplied value is dropped
RESERVED_BUNDLER_KEYS = frozenset({"entry", "input", "cache"})


class MultiBuildOptions(BaseModel):
    """Validated MultiBuild configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    targets: list[str] = Field(..., min_length=1, description="빌드 대상 타겟 (공백 없는 식별자)")
    cache_groups: list[tuple[str, list[str]]] = Field(
        default_factory=list, description="캐시 그룹 이름 -> 타겟 목록"
    )
    skip_cache: frozenset[str] = Field(default_factory=frozenset, description="항상 빈 캐시로 빌드할 타겟")
    entry: Any = Field(
        ...,
        validation_alias=AliasChoices("entry", "input"),
        description="엔트리 포인트 설정 또는 target -> 설정 함수",
    )
    bundler_options: Mapping[str, Any] | Callable[[str], Mapping[str, Any]] | None = Field(
        default=None,
        validation_alias=AliasChoices("bundler_options", "rollup_options"),
        description="번들러 옵션 또는 target -> 옵션 함수",
    )
    output: Callable[..., Any] | None = Field(default=None, description="(target, BundleOutput) -> 최종 sink")
    error_handler: Callable[..., Any] | None = Field(default=None, description="빌드 에러 핸들러")

    @field_validator("targets")
    @classmethod
    def validate_targets(cls, v: list[str]) -> list[str]:
        """Targets form task names: non-empty, no whitespace, unique"""
        seen: set[str] = set()
        for target in v:
            if not target or any(ch.isspace() for ch in target):
                raise ValueError(f"Invalid target name: {target!r}")
            if target in seen:
                raise ValueError(f"Duplicate target: {target!r}")
            seen.add(target)
        return v

    @field_validator("cache_groups", mode="before")
    @classmethod
    def normalize_cache_groups(cls, v: Any) -> list[tuple[str, list[str]]]:
        return iter_group_spec(v)

    @field_validator("skip_cache", mode="before")
    @classmethod
    def normalize_skip_cache(cls, v: Any) -> frozenset[str]:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            return frozenset([v])
        return frozenset(v)

    @classmethod
    def create(cls, **kwargs: Any) -> "MultiBuildOptions":
        """Build options, surfacing validation failures as InvalidConfigurationError."""
        try:
            return cls.model_validate(kwargs)
        except PydanticValidationError as e:
            raise InvalidConfigurationError(
                "Invalid MultiBuild options",
                details={"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]},
            ) from e

    def entry_for(self, target: str) -> Any:
        return self.entry(target) if callable(self.entry) else self.entry

    def bundler_options_for(self, target: str) -> dict[str, Any]:
        if self.bundler_options is None:
            return {}
        if callable(self.bundler_options):
            options = self.bundler_options(target)
            return dict(options) if options else {}
        return dict(self.bundler_options)
