"""
MultiBuild Orchestrator

여러 번들 타겟을 빌드하고, 파일이 바뀌면 그 파일에 의존하는 번들만 다시 빌드한다.

    build = MultiBuild(options, bundler)
    await build.run_all()
    ...
    await build.changed("/repo/src/util.js")   # util.js를 포함하는 번들만 재빌드

Architecture:
    MultiBuild ─ register ─→ TaskHarness
        │                      ├─ "js:<target>"          (타겟 빌드)
        │                      └─ "js:group <name>"      (그룹 내 타겟 순차 실행)
        ├─ CacheGroupRegistry  (타겟 → 캐시 그룹)
        ├─ GroupCacheStore     (그룹별 컴파일된 모듈 캐시)
        └─ TargetDependencyTracker (타겟 → 포함 모듈)

Ordering:
    - 같은 캐시 그룹의 빌드는 절대 동시에 실행되지 않는다. 번들러 캐시 시드를
      공유하는 동시 빌드는 안전하지 않고, 앞 빌드가 채운 캐시를 뒤 빌드가 재사용한다.
    - changed()로 선택된 타겟은 그룹과 상관없이 항상 순차 실행.
    - 진입점(run_all, run_all_sequential, changed, changed_many)은 하나씩 실행된다.
      output / error_handler 콜백 안에서 같은 MultiBuild의 진입점을 호출하면
      데드락 대신 ReentrantRunError.
"""

import asyncio
import contextvars
import inspect
import time
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

from multibuild.application.options import RESERVED_BUNDLER_KEYS, MultiBuildOptions
from multibuild.common.exceptions import ReentrantRunError, TargetBuildError, UnknownTargetError
from multibuild.common.observability import get_logger, log_error, log_performance
from multibuild.config.settings import MultiBuildSettings, get_settings
from multibuild.domain.cache_groups import CacheGroupRegistry
from multibuild.domain.cache_store import GroupCacheStore
from multibuild.domain.dependency_tracker import TargetDependencyTracker
from multibuild.domain.models import (
    BuildFailure,
    BundleOutput,
    CacheGroupKey,
    CacheSeed,
    ModuleLike,
    NamedGroup,
    TargetBuildReport,
    TargetState,
)
from multibuild.domain.ports import BundlerPort, TaskHarnessPort
from multibuild.domain.task_names import TaskNamer
from multibuild.infra.harness import AsyncTaskHarness

logger = get_logger(__name__)

# id()s of the orchestrators whose run lock is held by the current task or a task it spawned
_active_runs: contextvars.ContextVar[frozenset[int]] = contextvars.ContextVar(
    "multibuild_active_runs", default=frozenset()
)


class MultiBuild:
    """
    Builds multiple bundles sharing per-group module caches.

    Responsibilities:
    - 타겟별 빌드 태스크 + 캐시 그룹별 집계 태스크 등록
    - 빌드 완료 시 의존성 집합 / 그룹 캐시 갱신
    - 전체 빌드 (그룹 병렬 / 완전 순차), 변경 파일 기반 부분 재빌드
    """

    def __init__(
        self,
        options: MultiBuildOptions | Mapping[str, Any],
        bundler: BundlerPort,
        harness: TaskHarnessPort | None = None,
        settings: MultiBuildSettings | None = None,
    ):
        """
        Args:
            options: MultiBuildOptions or a mapping accepted by MultiBuildOptions.create
            bundler: External bundler
            harness: Task harness to register build tasks with (default: AsyncTaskHarness)
            settings: Task naming / logging settings (default: environment)

        Raises:
            InvalidConfigurationError: Invalid options or a target in two cache groups.
                Raised before any task is registered.
        """
        if not isinstance(options, MultiBuildOptions):
            options = MultiBuildOptions.create(**options)
        settings = settings or get_settings()

        self._options = options
        self._bundler = bundler
        self._harness = harness if harness is not None else AsyncTaskHarness()
        self._names = TaskNamer(settings.tasks.task_prefix)
        self._output_suffix = settings.tasks.output_suffix
        self._slow_build_ms = settings.observability.slow_build_ms

        # Configuration errors surface here, before registration
        self._registry = CacheGroupRegistry(options.targets, options.cache_groups)
        self._cache_store = GroupCacheStore(self._registry)
        self._tracker = TargetDependencyTracker()
        self._states: dict[str, TargetState] = {target: TargetState.UNBUILT for target in self._registry.targets}
        self._skip_cache = frozenset(options.skip_cache) & set(self._registry.targets)

        # One run at a time, so a group never has two builds in flight
        self._run_lock = asyncio.Lock()

        self._register_tasks()

        logger.info(
            "multibuild_registered",
            targets=list(self._registry.targets),
            groups={str(group): list(members) for group, members in self._registry.groups.items()},
            skip_cache=sorted(self._skip_cache),
        )

    # ========================================================================
    # Entry points
    # ========================================================================

    async def run_all(self) -> list[TargetBuildReport]:
        """
        Build every target: cache groups run concurrently, targets within a
        group run one after another.
        """
        async with self._exclusive_run("run_all"):
            results = await self._harness.run_parallel(*self._group_tasks())
        return _flatten(results)

    async def run_all_sequential(self) -> list[TargetBuildReport]:
        """Build every target, one cache group at a time."""
        async with self._exclusive_run("run_all_sequential"):
            results = await self._harness.run_sequence(*self._group_tasks())
        return _flatten(results)

    async def changed(self, path: str) -> list[TargetBuildReport]:
        """
        Rebuild the targets that include `path`, as determined by previous builds.

        Targets whose dependencies are unknown (never built, or last build
        failed) are always rebuilt.
        """
        return await self.changed_many([path])

    async def changed_many(self, paths: Iterable[str]) -> list[TargetBuildReport]:
        """Rebuild the targets affected by any of `paths` (one watcher batch)."""
        paths = list(paths)
        async with self._exclusive_run("changed"):
            affected = self._select_affected(paths)
            if not affected:
                logger.debug("changed_no_affected_targets", paths=paths)
                return []

            logger.info("changed_targets_selected", paths=paths, targets=affected)
            # Always sequential, even across groups
            results = await self._harness.run_sequence(*(self._names.target_task(t) for t in affected))
        return _flatten(results)

    def affected_targets(self, path: str) -> list[str]:
        """Targets `changed(path)` would rebuild, in target order."""
        return self._select_affected([path])

    # ========================================================================
    # Introspection
    # ========================================================================

    @property
    def targets(self) -> tuple[str, ...]:
        return self._registry.targets

    @property
    def groups(self) -> Mapping[CacheGroupKey, tuple[str, ...]]:
        return self._registry.groups

    @property
    def harness(self) -> TaskHarnessPort:
        return self._harness

    def group_of(self, target: str) -> CacheGroupKey:
        return self._registry.group_of(target)

    def state(self, target: str) -> TargetState:
        self._check_target(target)
        return self._states[target]

    def dependencies(self, target: str) -> frozenset[str] | None:
        self._check_target(target)
        return self._tracker.dependencies(target)

    def is_affected(self, target: str, path: str) -> bool:
        self._check_target(target)
        return self._tracker.is_affected(target, path)

    def cache_size(self, group: CacheGroupKey | str) -> int:
        return self._cache_store.size(_group_key(group))

    def cached_module_ids(self, group: CacheGroupKey | str) -> set[str]:
        return self._cache_store.module_ids(_group_key(group))

    def task_for_target(self, target: str) -> str:
        return self._names.target_task(target)

    def task_for_group(self, group: CacheGroupKey | str) -> str:
        return self._names.group_task(_group_key(group))

    @asynccontextmanager
    async def _exclusive_run(self, entry_point: str) -> AsyncIterator[None]:
        # Lock is not reentrant: a callback awaiting an entry point would wait on itself
        if id(self) in _active_runs.get():
            raise ReentrantRunError(entry_point)

        async with self._run_lock:
            token = _active_runs.set(_active_runs.get() | {id(self)})
            try:
                yield
            finally:
                _active_runs.reset(token)

    # ========================================================================
    # Task registration
    # ========================================================================

    def _register_tasks(self) -> None:
        for target in self._registry.targets:
            self._harness.register(self._names.target_task(target), partial(self._build_target, target))

        for group, members in self._registry.groups.items():
            self._harness.register(self._names.group_task(group), partial(self._run_group, members))

    def _group_tasks(self) -> list[str]:
        return [self._names.group_task(group) for group in self._registry.groups]

    async def _run_group(self, members: tuple[str, ...]) -> list[Any]:
        # Sequential: later builds reuse the modules cached by earlier ones
        return await self._harness.run_sequence(*(self._names.target_task(t) for t in members))

    # ========================================================================
    # Target build
    # ========================================================================

    async def _build_target(self, target: str) -> TargetBuildReport:
        group = self._registry.group_of(target)
        skip_cache = target in self._skip_cache

        # Reset in case imports were removed
        self._tracker.reset(target)
        self._states[target] = TargetState.BUILDING
        start = time.perf_counter()

        try:
            entry = self._options.entry_for(target)
            cache = CacheSeed.empty() if skip_cache else self._cache_store.seed_for(target)
            bundler_options = self._bundler_options_for(target)

            logger.info(
                "target_build_started",
                target=target,
                group=str(group),
                cached_modules=len(cache),
                skip_cache=skip_cache,
            )
            result = await self._bundler.bundle(entry, cache, bundler_options)
        except Exception as e:
            result = BuildFailure(error=e)

        if isinstance(result, BuildFailure):
            return await self._fail(target, group, result.error, start)

        try:
            module_ids = self._record_modules(target, result.modules, skip_cache)
            await self._emit_output(target, result.output)
        except Exception as e:
            return await self._fail(target, group, e, start)

        self._tracker.mark_complete(target)
        self._states[target] = TargetState.BUILT
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "target_build_finished",
            target=target,
            group=str(group),
            modules=len(module_ids),
            duration_ms=round(duration_ms, 2),
        )
        if duration_ms > self._slow_build_ms:
            log_performance(logger, "target_build", duration_ms, slow_threshold_ms=self._slow_build_ms, target=target)

        return TargetBuildReport(
            target=target,
            group=group,
            state=TargetState.BUILT,
            module_count=len(module_ids),
            duration_ms=round(duration_ms, 2),
        )

    def _bundler_options_for(self, target: str) -> dict[str, Any]:
        options = self._options.bundler_options_for(target)
        dropped = sorted(RESERVED_BUNDLER_KEYS & options.keys())
        if dropped:
            logger.debug("bundler_options_reserved_keys_dropped", target=target, keys=dropped)
            for key in dropped:
                del options[key]
        return options

    def _record_modules(self, target: str, modules: Iterable[ModuleLike], skip_cache: bool) -> list[str]:
        group = self._registry.group_of(target)
        if not skip_cache and not self._cache_store.has_group(group):
            # The group store entry is committed only once a bundle is reported
            self._cache_store.get_cache(target, init=True)
            logger.debug("group_cache_created", group=str(group), target=target)

        module_ids = []
        for module in modules:
            module_id = module.id
            self._tracker.add(target, module_id)
            if not skip_cache:
                self._cache_store.record_module(group, module_id, module)
            module_ids.append(module_id)
        return module_ids

    async def _emit_output(self, target: str, output: Any) -> None:
        if self._options.output is None:
            return

        if not isinstance(output, BundleOutput):
            if output is None:
                contents = b""
            elif isinstance(output, str):
                contents = output.encode("utf-8")
            else:
                contents = bytes(output)
            output = BundleOutput(file_name=f"{target}{self._output_suffix}", contents=contents)

        sunk = self._options.output(target, output)
        if inspect.isawaitable(sunk):
            await sunk

    async def _fail(
        self,
        target: str,
        group: CacheGroupKey,
        error: BaseException,
        start: float,
    ) -> TargetBuildReport:
        self._states[target] = TargetState.FAILED
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        if self._options.error_handler is None:
            log_error(logger, "target_build_failed", error=error, target=target, duration_ms=duration_ms)
            raise TargetBuildError(target, error) from error

        # Handler keeps a watch loop alive; the task itself completes
        log_error(logger, "target_build_error_handled", error=error, target=target, duration_ms=duration_ms)
        handled = self._options.error_handler(error)
        if inspect.isawaitable(handled):
            await handled

        return TargetBuildReport(
            target=target,
            group=group,
            state=TargetState.FAILED,
            duration_ms=duration_ms,
            error=error,
        )

    # ========================================================================
    # Helpers
    # ========================================================================

    def _select_affected(self, paths: list[str]) -> list[str]:
        return [
            target
            for target in self._registry.targets
            if any(self._tracker.is_affected(target, path) for path in paths)
        ]

    def _check_target(self, target: str) -> None:
        if target not in self._registry:
            raise UnknownTargetError(target)


def _group_key(group: CacheGroupKey | str) -> CacheGroupKey:
    return NamedGroup(group) if isinstance(group, str) else group


def _flatten(results: Iterable[Any]) -> list[TargetBuildReport]:
    reports: list[TargetBuildReport] = []
    for result in results:
        if isinstance(result, TargetBuildReport):
            reports.append(result)
        elif isinstance(result, list | tuple):
            reports.extend(_flatten(result))
    return reports
