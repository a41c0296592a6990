"""
Callable Bundler Adapter

평범한 함수(sync/async)를 BundlerPort로 감싼다.

The wrapped function receives (entry, cache, options) and returns either a
BuildResult or a (modules, output) pair. Sync functions run in a worker thread
so a long bundle never blocks the event loop.
"""

import asyncio
import inspect
from collections.abc import Callable, Mapping
from typing import Any

from multibuild.domain.models import BuildFailure, BuildResult, BuildSuccess, CacheSeed


class CallableBundler:
    """BundlerPort implementation backed by a function."""

    def __init__(self, fn: Callable[[Any, CacheSeed, Mapping[str, Any]], Any]):
        self._fn = fn

    async def bundle(self, entry: Any, cache: CacheSeed, options: Mapping[str, Any]) -> BuildResult:
        if inspect.iscoroutinefunction(self._fn):
            result = await self._fn(entry, cache, options)
        else:
            result = await asyncio.to_thread(self._fn, entry, cache, options)
            if inspect.isawaitable(result):
                result = await result
        return self._to_result(result)

    @staticmethod
    def _to_result(result: Any) -> BuildResult:
        if isinstance(result, BuildSuccess | BuildFailure):
            return result
        if isinstance(result, tuple) and len(result) == 2:
            modules, output = result
            return BuildSuccess(modules=tuple(modules), output=output)
        raise TypeError(
            f"Bundler function must return BuildSuccess, BuildFailure or (modules, output), got {type(result).__name__}"
        )
