"""
MultiBuild Ports

외부 협력자(번들러, 태스크 하네스) 인터페이스 정의.

Note:
- 모듈 해석/파싱/코드 생성은 번들러의 몫이다.
- 태스크 실행과 순서 보장은 하네스의 몫이다.
- 이 패키지는 "무엇을, 어떤 순서로" 빌드할지만 결정한다.
"""

from abc import abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from multibuild.domain.models import BuildResult, BundleOutput, CacheSeed

TaskFn = Callable[[], Awaitable[Any]]

# (target, output) -> final sink value, possibly awaitable
OutputSink = Callable[[str, BundleOutput], Any]

# (error) -> None, possibly awaitable
ErrorHandler = Callable[[BaseException], Any]


@runtime_checkable
class BundlerPort(Protocol):
    """
    External bundler.

    Seeding is side-effect free: the orchestrator hands over an immutable
    CacheSeed and nothing happens until `bundle` is awaited.
    """

    @abstractmethod
    async def bundle(self, entry: Any, cache: CacheSeed, options: Mapping[str, Any]) -> BuildResult:
        """
        Build one bundle.

        Args:
            entry: Entry-point configuration for the target
            cache: Previously compiled module records of the target's cache group
            options: Caller-supplied bundler options (without entry / cache)

        Returns:
            BuildSuccess with the included modules and output, or BuildFailure.
            Raising is also allowed and is treated exactly like BuildFailure.
        """
        ...


@runtime_checkable
class TaskHarnessPort(Protocol):
    """
    Named task execution harness.

    run_sequence must not start task n+1 before task n has finished.
    """

    @abstractmethod
    def register(self, name: str, fn: TaskFn) -> None: ...

    @abstractmethod
    def has(self, name: str) -> bool: ...

    @abstractmethod
    async def run(self, name: str) -> Any: ...

    @abstractmethod
    async def run_sequence(self, *names: str) -> list[Any]: ...

    @abstractmethod
    async def run_parallel(self, *names: str) -> list[Any]: ...
