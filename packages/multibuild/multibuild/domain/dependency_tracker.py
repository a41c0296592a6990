"""
Target Dependency Tracker

타겟 -> 마지막 번들에 포함된 module id 집합.

빌드 시도마다 reset으로 비워지므로 import가 제거되면 추적에서도 빠진다.
한 번도 빌드에 성공하지 않은 타겟은 "의존성 모름"으로 보고 항상 영향 받음 처리.
"""


class TargetDependencyTracker:
    """Target -> set of module ids of its current bundle."""

    def __init__(self):
        self._dependencies: dict[str, set[str]] = {}
        self._completed: set[str] = set()

    def reset(self, target: str) -> None:
        """Start of a build attempt: empty set, dependencies unknown until it completes."""
        self._dependencies[target] = set()
        self._completed.discard(target)

    def add(self, target: str, module_id: str) -> None:
        self._dependencies.setdefault(target, set()).add(module_id)

    def mark_complete(self, target: str) -> None:
        self._completed.add(target)

    def is_affected(self, target: str, path: str) -> bool:
        if target not in self._completed:
            return True
        return path in self._dependencies.get(target, ())

    def dependencies(self, target: str) -> frozenset[str] | None:
        """Current module ids of a target, or None while they are unknown."""
        if target not in self._completed:
            return None
        return frozenset(self._dependencies.get(target, ()))
