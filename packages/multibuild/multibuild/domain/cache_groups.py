"""
Cache Group Registry

타겟을 캐시 그룹으로 분할합니다.

규칙:
- 타겟은 정확히 하나의 그룹에 속한다 (두 그룹에 선언되면 설정 에러)
- 알려지지 않은 타겟은 그룹에서 조용히 제외되고, 비게 된 그룹은 버려진다
- 그룹이 지정되지 않은 타겟은 하나의 기본 그룹으로 (필요할 때만 생성)
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from multibuild.common.exceptions import CacheGroupConflictError, InvalidConfigurationError, UnknownTargetError
from multibuild.common.observability import get_logger
from multibuild.domain.models import DEFAULT_GROUP, CacheGroupKey, NamedGroup

logger = get_logger(__name__)

CacheGroupSpec = Mapping[str, Iterable[str]] | Iterable[tuple[str, Iterable[str]]]


def iter_group_spec(spec: CacheGroupSpec | None) -> list[tuple[str, list[str]]]:
    """
    Normalize a cache group specification into ordered (name, targets) pairs.

    Accepts a mapping of group name -> targets or a sequence of (name, targets)
    pairs. A group name may only appear once.
    """
    if spec is None:
        return []

    items = spec.items() if isinstance(spec, Mapping) else spec
    pairs: list[tuple[str, list[str]]] = []
    seen: set[str] = set()
    for item in items:
        try:
            name, members = item
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(
                "Cache groups must be a mapping or a sequence of (name, targets) pairs",
                details={"item": repr(item)},
            ) from e
        if not isinstance(name, str) or not name:
            raise InvalidConfigurationError("Cache group name must be a non-empty string", details={"name": repr(name)})
        if name in seen:
            raise InvalidConfigurationError(f"Cache group '{name}' is declared twice", details={"group": name})
        if isinstance(members, str):
            # 'vendor' 하나만 적은 경우 문자 단위로 쪼개지지 않도록
            members = [members]
        seen.add(name)
        pairs.append((name, list(members)))
    return pairs


class CacheGroupRegistry:
    """
    Immutable target <-> cache group assignment.

    Usage:
        registry = CacheGroupRegistry(["app", "vendor"], {"v": ["vendor"]})
        registry.group_of("app")     # DefaultGroup()
        registry.group_of("vendor")  # NamedGroup(name="v")
    """

    def __init__(self, targets: Sequence[str], cache_groups: CacheGroupSpec | None = None):
        self._targets: tuple[str, ...] = tuple(targets)
        known = set(self._targets)

        target_to_group: dict[str, CacheGroupKey] = {}
        declared: list[CacheGroupKey] = []

        for name, members in iter_group_spec(cache_groups):
            key = NamedGroup(name)
            valid = [t for t in dict.fromkeys(members) if t in known]
            dropped = [t for t in members if t not in known]
            if dropped:
                logger.debug("cache_group_targets_discarded", group=name, targets=dropped)
            if not valid:
                logger.debug("cache_group_discarded", group=name)
                continue

            for target in valid:
                existing = target_to_group.get(target)
                if existing is not None and existing != key:
                    raise CacheGroupConflictError(target, str(existing), name)
                target_to_group[target] = key
            declared.append(key)

        # 기본 그룹은 필요할 때만 만든다
        for target in self._targets:
            if target not in target_to_group:
                target_to_group[target] = DEFAULT_GROUP
                if DEFAULT_GROUP not in declared:
                    declared.append(DEFAULT_GROUP)

        groups = {key: tuple(t for t in self._targets if target_to_group[t] == key) for key in declared}

        self._target_to_group = MappingProxyType(target_to_group)
        self._groups = MappingProxyType(groups)

    @property
    def targets(self) -> tuple[str, ...]:
        return self._targets

    @property
    def target_to_group(self) -> Mapping[str, CacheGroupKey]:
        return self._target_to_group

    @property
    def groups(self) -> Mapping[CacheGroupKey, tuple[str, ...]]:
        """Group -> member targets, in target order. Groups in registration order."""
        return self._groups

    def group_of(self, target: str) -> CacheGroupKey:
        try:
            return self._target_to_group[target]
        except KeyError:
            raise UnknownTargetError(target) from None

    def members(self, group: CacheGroupKey) -> tuple[str, ...]:
        return self._groups.get(group, ())

    def __contains__(self, target: object) -> bool:
        return target in self._target_to_group

    def __repr__(self) -> str:
        groups = {str(k): list(v) for k, v in self._groups.items()}
        return f"CacheGroupRegistry(groups={groups})"
