"""Test default worker pool generation."""

import random

from capability_resolver.core.workers import DEFAULT_VOLUME_SIZE, WorkerGenerator, default_volume_size
from capability_resolver.upgrade.cri import CriCompatibility, default_cri_name_by_kubernetes_version


class TestDefaultVolumeSize:
    def test_at_least_default(self):
        """Test the default wins over smaller minimums."""
        assert default_volume_size("20Gi") == DEFAULT_VOLUME_SIZE
        assert default_volume_size("50Gi") == DEFAULT_VOLUME_SIZE

    def test_larger_minimum_wins(self):
        """Test sizes are compared by value, not as strings."""
        assert default_volume_size("100Gi") == "100Gi"
        assert default_volume_size("1Ti") == "1Ti"
        assert default_volume_size("9Gi") == DEFAULT_VOLUME_SIZE

    def test_unparsable_minimum(self):
        """Test unparsable minimums fall back to the default."""
        assert default_volume_size("lots") == DEFAULT_VOLUME_SIZE


class TestCriCompatibility:
    def test_preferred_runtime(self):
        """Test the preferred runtime per Kubernetes version."""
        assert default_cri_name_by_kubernetes_version.preferred("1.22.0") == "containerd"
        assert default_cri_name_by_kubernetes_version.preferred("1.21.9") == "docker"
        assert default_cri_name_by_kubernetes_version.preferred("invalid") is None

    def test_choose_from_offered(self):
        """Test the choice is limited to the offered runtimes."""
        assert default_cri_name_by_kubernetes_version(["containerd", "docker"], "1.20.0") == "docker"
        assert default_cri_name_by_kubernetes_version(["containerd", "docker"], "1.23.0") == "containerd"
        assert default_cri_name_by_kubernetes_version(["gvisor"], "1.23.0") == "gvisor"
        assert default_cri_name_by_kubernetes_version([], "1.23.0") is None

    def test_custom_table(self):
        """Test a custom compatibility table."""
        compatibility = CriCompatibility([("1.30.0", "gvisor"), ("0.0.0", "containerd")])
        assert compatibility(["containerd", "gvisor"], "1.30.1") == "gvisor"
        assert compatibility(["containerd", "gvisor"], "1.29.0") == "containerd"


class TestWorkerGenerator:
    def setup_method(self):
        """Set up test fixtures."""
        self.rng = random.Random(42)

    def test_volume_type_resolved(self, graph, now):
        """Test a resolved volume type yields type and size."""
        generator = WorkerGenerator(graph, rng=self.rng)
        worker = generator.generate(["eu-central-1a"], "aws", "eu-central-1", "1.20.0", now)

        assert worker.zones == ["eu-central-1a"]
        assert worker.machine.type == "m5.large"
        assert worker.machine.image.name == "gardenlinux"
        assert worker.machine.image.version == "576.2.0"
        assert worker.volume.type == "gp2"
        assert worker.volume.size == "100Gi"
        assert worker.cri.name == "docker"

    def test_default_volume_size_in_region_without_seed_minimum(self, graph, now):
        """Test the default size applies without a larger seed minimum."""
        worker = WorkerGenerator(graph, rng=self.rng).generate(["us-east-1a"], "aws", "us-east-1", "1.22.0", now)

        assert worker.volume.size == DEFAULT_VOLUME_SIZE
        assert worker.cri.name == "containerd"

    def test_single_random_zone(self, graph, now):
        """Test exactly one of the available zones is picked."""
        zones = ["eu-central-1a", "eu-central-1b"]
        worker = WorkerGenerator(graph, rng=self.rng).generate(zones, "aws", "eu-central-1", "1.20.0", now)

        assert len(worker.zones) == 1
        assert worker.zones[0] in zones

    def test_no_zones(self, graph, now):
        """Test a worker without zone constraint."""
        worker = WorkerGenerator(graph, rng=self.rng).generate([], "aws", "eu-central-1", "1.20.0", now)

        assert worker.zones is None
        assert worker.machine.type == "m5.large"
        assert "zones" not in worker.to_spec()

    def test_fixed_storage_has_no_volume(self, graph, now):
        """Test machine types with fixed storage produce no volume."""
        worker = WorkerGenerator(graph, rng=self.rng).generate(["fra-equ01-a"], "metal", "fra-equ01", "1.22.1", now)

        assert worker.machine.type == "c1-xlarge-x86"
        assert worker.volume is None
        assert "volume" not in worker.to_spec()
        assert worker.cri.name == "containerd"

    def test_no_storage_descriptor_has_size_only(self, graph, now):
        """Test machine types without storage get a sized volume without type."""
        worker = WorkerGenerator(graph, rng=self.rng).generate(["1"], "az", "westeurope", "1.22.1", now)

        assert worker.volume.type is None
        assert worker.volume.size == DEFAULT_VOLUME_SIZE
        assert worker.to_spec()["volume"] == {"size": DEFAULT_VOLUME_SIZE}

    def test_non_fixed_storage_uses_machine_storage_size(self, graph, now):
        """Test machine types with non fixed storage take its size."""
        worker = WorkerGenerator(graph, rng=self.rng).generate(["eu-de-1a"], "os", "eu-de-1", "1.22.1", now)

        assert worker.volume.type is None
        assert worker.volume.size == "64Gi"
        assert worker.machine.image.name is None
        assert worker.cri.name is None

    def test_identity_and_defaults(self, graph, now):
        """Test generated identifiers and replica defaults."""
        generator = WorkerGenerator(graph, rng=self.rng)
        first = generator.generate(["eu-central-1a"], "aws", "eu-central-1", "1.20.0", now)
        second = generator.generate(["eu-central-1a"], "aws", "eu-central-1", "1.20.0", now)

        assert first.id != second.id
        assert first.name.startswith("worker-")
        assert len(first.name) == len("worker-") + 5
        assert first.name[len("worker-")].isalpha()
        assert (first.minimum, first.maximum, first.max_surge) == (1, 2, 1)
        assert first.is_new

    def test_to_spec_omits_transient_fields(self, graph, now):
        """Test serialization drops id and new marker."""
        worker = WorkerGenerator(graph, rng=self.rng).generate(["eu-central-1a"], "aws", "eu-central-1", "1.20.0", now)
        spec = worker.to_spec()

        assert "id" not in spec
        assert "is_new" not in spec
        assert spec["maxSurge"] == 1
        assert spec["machine"]["image"] == {"name": "gardenlinux", "version": "576.2.0"}

    def test_custom_cri_chooser(self, graph, now):
        """Test the runtime chooser can be replaced."""
        generator = WorkerGenerator(graph, cri_chooser=lambda names, version: names[-1], rng=self.rng)
        worker = generator.generate(["eu-central-1a"], "aws", "eu-central-1", "1.20.0", now)

        assert worker.cri.name == "docker"
