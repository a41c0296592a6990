"""Unit Tests: Per-Group Cache Store"""

from multibuild.domain.cache_groups import CacheGroupRegistry
from multibuild.domain.cache_store import GroupCacheStore
from multibuild.domain.models import DEFAULT_GROUP, ModuleRecord, NamedGroup


def _store() -> GroupCacheStore:
    return GroupCacheStore(CacheGroupRegistry(["app", "spec", "vendor"], {"v": ["vendor"]}))


class TestGroupCacheStore:
    def test_peek_does_not_persist(self):
        store = _store()

        cache = store.get_cache("app")

        assert len(cache) == 0
        assert not store.has_group(DEFAULT_GROUP)

    def test_init_persists_empty_cache(self):
        store = _store()

        cache = store.get_cache("app", init=True)

        assert store.has_group(DEFAULT_GROUP)
        assert store.get_cache("spec") is cache

    def test_record_is_shared_within_group(self):
        store = _store()
        record = ModuleRecord(id="x.js", payload="ast")

        store.record_module(DEFAULT_GROUP, "x.js", record)

        assert store.seed_for("spec").modules == (record,)
        assert store.seed_for("vendor").modules == ()

    def test_upsert_replaces_record(self):
        store = _store()
        store.record_module(NamedGroup("v"), "x.js", ModuleRecord("x.js", "old"))
        store.record_module(NamedGroup("v"), "x.js", ModuleRecord("x.js", "new"))

        assert store.size(NamedGroup("v")) == 1
        assert store.seed_for("vendor").modules[0].payload == "new"

    def test_seed_is_a_snapshot(self):
        store = _store()
        store.record_module(DEFAULT_GROUP, "a.js", ModuleRecord("a.js"))

        seed = store.seed_for("app")
        store.record_module(DEFAULT_GROUP, "b.js", ModuleRecord("b.js"))

        assert seed.module_ids == ["a.js"]
        assert store.module_ids(DEFAULT_GROUP) == {"a.js", "b.js"}

    def test_no_eviction(self):
        store = _store()
        for i in range(100):
            store.record_module(DEFAULT_GROUP, f"m{i}.js", ModuleRecord(f"m{i}.js"))

        assert store.size(DEFAULT_GROUP) == 100
        assert store.size(NamedGroup("unknown")) == 0
