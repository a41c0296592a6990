"""
MultiBuild Domain Models

- CacheGroupKey: NamedGroup | DefaultGroup (값 기반 동등성, identity sentinel 없음)
- CacheSeed: 번들러에 넘기는 불변 캐시 스냅샷
- BuildSuccess / BuildFailure: 타겟 빌드 결과 (단일 결과 타입)
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class NamedGroup:
    """호출자가 이름을 지정한 캐시 그룹."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DefaultGroup:
    """그룹이 지정되지 않은 타겟들이 공유하는 기본 캐시 그룹."""

    def __str__(self) -> str:
        return "<default>"


DEFAULT_GROUP = DefaultGroup()

CacheGroupKey = NamedGroup | DefaultGroup


@runtime_checkable
class ModuleLike(Protocol):
    """Anything a bundler reports as an included module (only `id` is read)."""

    id: str


@dataclass(frozen=True)
class ModuleRecord:
    """
    Previously compiled module.

    payload is opaque: it is stored and replayed into later builds only to
    seed the bundler's own cache.
    """

    id: str
    payload: Any = None


@dataclass(frozen=True)
class CacheSeed:
    """Immutable snapshot of a group's cached module records."""

    modules: tuple[ModuleLike, ...] = ()

    @classmethod
    def empty(cls) -> "CacheSeed":
        return cls()

    @classmethod
    def of(cls, records: Iterable[ModuleLike]) -> "CacheSeed":
        return cls(modules=tuple(records))

    @property
    def module_ids(self) -> list[str]:
        return [record.id for record in self.modules]

    def __len__(self) -> int:
        return len(self.modules)


@dataclass(frozen=True)
class BundleOutput:
    """번들 결과물 (파일 이름 + 내용)."""

    file_name: str
    contents: bytes = b""


@dataclass(frozen=True)
class BuildSuccess:
    """Bundler finished: included modules plus the generated output."""

    modules: tuple[ModuleLike, ...] = ()
    output: BundleOutput | bytes | str | None = None

    def __post_init__(self):
        # Accept any iterable (list, generator) from adapters
        if not isinstance(self.modules, tuple):
            object.__setattr__(self, "modules", tuple(self.modules))


@dataclass(frozen=True)
class BuildFailure:
    """Bundler reported an error."""

    error: BaseException


BuildResult = BuildSuccess | BuildFailure


class TargetState(str, Enum):
    """타겟 빌드 상태."""

    UNBUILT = "unbuilt"
    BUILDING = "building"
    BUILT = "built"
    FAILED = "failed"


@dataclass
class TargetBuildReport:
    """Result of one target build task."""

    target: str
    group: CacheGroupKey
    state: TargetState
    module_count: int = 0
    duration_ms: float = 0.0
    error: BaseException | None = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.state == TargetState.BUILT
