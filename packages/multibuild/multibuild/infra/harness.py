"""
Asyncio Task Harness

이름 붙은 비동기 태스크 레지스트리 + 순차/병렬 실행기.

- run_sequence: 앞 태스크가 끝나야 다음 태스크 시작. 첫 에러에서 중단하고 재발생.
- run_parallel: 모든 태스크를 동시에 시작, 전부 끝날 때까지 기다린 뒤
  인자 순서상 첫 에러를 재발생 (한 태스크의 실패가 다른 태스크를 취소하지 않음).
"""

import asyncio
import time
from typing import Any

from multibuild.common.exceptions import DuplicateTaskError, UnknownTaskError
from multibuild.common.observability import get_logger, log_error
from multibuild.domain.ports import TaskFn

logger = get_logger(__name__)


class AsyncTaskHarness:
    """
    Explicit task registry (no process-wide task namespace).

    Usage:
        harness = AsyncTaskHarness()
        harness.register("js:app", build_app)
        await harness.run_sequence("js:app", "js:spec")
    """

    def __init__(self):
        self._tasks: dict[str, TaskFn] = {}

    def register(self, name: str, fn: TaskFn) -> None:
        if name in self._tasks:
            raise DuplicateTaskError(name)
        self._tasks[name] = fn

    def has(self, name: str) -> bool:
        return name in self._tasks

    @property
    def task_names(self) -> list[str]:
        return list(self._tasks)

    async def run(self, name: str) -> Any:
        fn = self._tasks.get(name)
        if fn is None:
            raise UnknownTaskError(name)

        start = time.perf_counter()
        logger.debug("task_started", task=name)
        try:
            result = await fn()
        except Exception as e:
            log_error(
                logger,
                "task_failed",
                error=e,
                task=name,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        logger.debug("task_finished", task=name, duration_ms=round((time.perf_counter() - start) * 1000, 2))
        return result

    async def run_sequence(self, *names: str) -> list[Any]:
        self._check_registered(names)
        results = []
        for name in names:
            results.append(await self.run(name))
        return results

    async def run_parallel(self, *names: str) -> list[Any]:
        self._check_registered(names)
        outcomes = await asyncio.gather(*(self.run(name) for name in names), return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)

    def _check_registered(self, names: tuple[str, ...]) -> None:
        # Fail before anything starts, not halfway through a sequence
        for name in names:
            if name not in self._tasks:
                raise UnknownTaskError(name)
