"""
Task name derivation.

    target "app"           -> "js:app"
    group NamedGroup("v")  -> "js:group v"
    DEFAULT_GROUP          -> "js:default group"

Target names never contain whitespace, so group task names cannot collide with
target task names, and every named group task starts with "js:group ".
"""

from multibuild.domain.models import CacheGroupKey, DefaultGroup, NamedGroup


class TaskNamer:
    def __init__(self, prefix: str = "js"):
        self.prefix = prefix

    def target_task(self, target: str) -> str:
        return f"{self.prefix}:{target}"

    def group_task(self, group: CacheGroupKey) -> str:
        if isinstance(group, DefaultGroup):
            return f"{self.prefix}:default group"
        if isinstance(group, NamedGroup):
            return f"{self.prefix}:group {group.name}"
        raise TypeError(f"Not a cache group key: {group!r}")
