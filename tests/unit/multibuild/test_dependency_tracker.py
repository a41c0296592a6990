"""Unit Tests: Target Dependency Tracker"""

from multibuild.domain.dependency_tracker import TargetDependencyTracker


class TestTargetDependencyTracker:
    def test_unknown_target_is_always_affected(self):
        tracker = TargetDependencyTracker()

        assert tracker.is_affected("app", "/src/anything.js")
        assert tracker.dependencies("app") is None

    def test_completed_build_tracks_exact_modules(self):
        tracker = TargetDependencyTracker()
        tracker.reset("app")
        tracker.add("app", "m1")
        tracker.add("app", "m2")
        tracker.mark_complete("app")

        assert tracker.is_affected("app", "m1")
        assert tracker.is_affected("app", "m2")
        assert not tracker.is_affected("app", "m3")
        assert tracker.dependencies("app") == frozenset({"m1", "m2"})

    def test_reset_drops_removed_imports(self):
        tracker = TargetDependencyTracker()
        tracker.reset("app")
        tracker.add("app", "m1")
        tracker.add("app", "m2")
        tracker.mark_complete("app")

        tracker.reset("app")
        tracker.add("app", "m1")
        tracker.mark_complete("app")

        assert not tracker.is_affected("app", "m2")
        assert tracker.is_affected("app", "m1")

    def test_reset_without_completion_is_unknown(self):
        tracker = TargetDependencyTracker()
        tracker.reset("app")
        tracker.add("app", "m1")
        tracker.mark_complete("app")

        # 실패한 재빌드: reset 후 완료되지 않음
        tracker.reset("app")

        assert tracker.is_affected("app", "unrelated.js")
        assert tracker.dependencies("app") is None

    def test_targets_are_independent(self):
        tracker = TargetDependencyTracker()
        for target, module in (("app", "a.js"), ("vendor", "v.js")):
            tracker.reset(target)
            tracker.add(target, module)
            tracker.mark_complete(target)

        assert not tracker.is_affected("app", "v.js")
        assert not tracker.is_affected("vendor", "a.js")
