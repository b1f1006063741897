"""Test the update availability cache and snapshot replacement."""

import threading

from capability_resolver.core.engine import ResolutionEngine
from capability_resolver.model.snapshot import CapabilitySnapshot
from capability_resolver.upgrade.cache import MISSING, NO_UPDATES, UpdateAvailabilityCache
from capability_resolver.upgrade.semver import DiffKind


class TestUpdateAvailabilityCache:
    def setup_method(self):
        """Set up test fixtures."""
        self.cache = UpdateAvailabilityCache()

    def test_key(self):
        """Test the cache key concatenates version and profile."""
        assert UpdateAvailabilityCache.key("1.19.0", "aws") == "1.19.0_aws"

    def test_missing_and_no_updates_are_distinct(self):
        """Test that an empty result is cached as its own sentinel."""
        assert self.cache.get("1.19.0", "aws") is MISSING

        self.cache.set("1.19.0", "aws", None)

        assert self.cache.get("1.19.0", "aws") is NO_UPDATES
        assert "1.19.0_aws" in self.cache
        assert len(self.cache) == 1

    def test_no_updates_is_not_recomputed(self):
        """Test the no updates sentinel prevents recomputation."""
        calls = []

        def compute():
            calls.append(1)
            return None

        assert self.cache.get_or_compute("1.21.2", "aws", compute) is None
        assert self.cache.get_or_compute("1.21.2", "aws", compute) is None
        assert len(calls) == 1

    def test_result_is_reused(self):
        """Test repeated lookups return the same object."""
        result = {DiffKind.PATCH: []}
        calls = []

        def compute():
            calls.append(1)
            return result

        assert self.cache.get_or_compute("1.19.0", "aws", compute) is result
        assert self.cache.get_or_compute("1.19.0", "aws", compute) is result
        assert self.cache.get_or_compute("1.19.0", "gcp", compute) is result
        assert len(calls) == 2

    def test_clear(self):
        """Test clearing drops every entry."""
        self.cache.set("1.19.0", "aws", None)
        self.cache.set("1.20.0", "aws", {})
        self.cache.clear()

        assert len(self.cache) == 0
        assert self.cache.get("1.19.0", "aws") is MISSING

    def test_concurrent_readers_compute_once(self):
        """Test concurrent first lookups compute only once."""
        calls = []
        start = threading.Barrier(8)

        def compute():
            calls.append(1)
            return {DiffKind.MINOR: []}

        def reader():
            start.wait()
            self.cache.get_or_compute("1.19.0", "aws", compute)

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert self.cache.misses == 1


class TestResolutionEngine:
    def test_empty_engine(self):
        """Test an engine without snapshot answers with empty results."""
        engine = ResolutionEngine()
        view = engine.view()

        assert view.graph.regions_with_seed("aws") == []
        assert view.lifecycle.sorted_kubernetes_versions("aws") == []
        assert view.lifecycle.available_kubernetes_updates("1.19.0", "aws") is None

    def test_view_components_share_snapshot(self, engine, snapshot):
        """Test all components of a view read the same snapshot."""
        view = engine.view()

        assert view.snapshot is snapshot
        assert view.graph.snapshot is snapshot
        assert view.lifecycle.graph is view.graph
        assert view.access_restrictions.graph is view.graph
        assert view.workers.graph is view.graph
        assert engine.cache is view.lifecycle.cache

    def test_replace_snapshot_invalidates_updates(self, engine, snapshot_data, now):
        """Test newly published versions become visible after replacement."""
        view = engine.view()
        assert view.lifecycle.available_kubernetes_updates("1.21.2", "aws", now) is None
        assert len(engine.cache) == 1

        snapshot_data["cloudProfiles"][0]["data"]["kubernetes"]["versions"].append(
            {"version": "1.21.5", "classification": "supported"}
        )
        new_view = engine.replace_snapshot(CapabilitySnapshot.from_dict(snapshot_data))

        assert len(view.lifecycle.cache) == 0
        assert engine.view() is new_view
        assert engine.cache is new_view.lifecycle.cache
        assert engine.cache is not view.lifecycle.cache

        updates = new_view.lifecycle.available_kubernetes_updates("1.21.2", "aws", now)
        assert [version.version for version in updates[DiffKind.PATCH]] == ["1.21.5"]

    def test_old_view_stays_consistent(self, engine, snapshot_data, now):
        """Test readers holding an old view keep seeing the old snapshot."""
        old_view = engine.view()
        old_generation = old_view.snapshot.generation

        snapshot_data["cloudProfiles"] = snapshot_data["cloudProfiles"][1:]
        engine.replace_snapshot(CapabilitySnapshot.from_dict(snapshot_data))

        assert old_view.snapshot.generation == old_generation
        assert old_view.graph.cloud_profile_by_name("aws") is not None
        assert engine.view().graph.cloud_profile_by_name("aws") is None
        assert engine.snapshot.generation > old_generation

        # late writes from the old view do not leak into the new cache
        old_view.lifecycle.available_kubernetes_updates("1.19.0", "aws", now)
        assert "1.19.0_aws" not in engine.cache
