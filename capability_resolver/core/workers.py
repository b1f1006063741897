"""Default worker pool generation."""

import random
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..model.shoot import MachineImageRef, Worker, WorkerCri, WorkerMachine, WorkerVolume
from ..upgrade.cri import default_cri_name_by_kubernetes_version
from ..utils.identifiers import new_uid, short_random_string
from ..utils.logger import get_logger
from ..utils.sizes import parse_size
from .graph import CapabilityGraph

logger = get_logger(__name__)

DEFAULT_VOLUME_SIZE = "50Gi"

CriChooser = Callable[[Sequence[str], Optional[str]], Optional[str]]


def default_volume_size(minimum_volume_size: str) -> str:
    """At least 50Gi, or the seed minimum if that is larger."""
    minimum_bytes = parse_size(minimum_volume_size)
    if minimum_bytes is None or minimum_bytes <= parse_size(DEFAULT_VOLUME_SIZE):
        return DEFAULT_VOLUME_SIZE
    return minimum_volume_size


class WorkerGenerator:
    """Builds a new worker pool consistent with a cloud profile."""

    def __init__(
        self,
        graph: CapabilityGraph,
        cri_chooser: CriChooser = default_cri_name_by_kubernetes_version,
        rng: Optional[random.Random] = None,
    ):
        self.graph = graph
        self.cri_chooser = cri_chooser
        self.rng = rng or random.Random()

    def generate(
        self,
        available_zones: Optional[Sequence[str]],
        cloud_profile_name: Optional[str],
        region: Optional[str],
        kubernetes_version: Optional[str],
        now: Optional[datetime] = None,
    ) -> Worker:
        """Generate a worker in a single random zone.

        The worker is marked as new until the caller commits it.
        """
        zones = [self.rng.choice(list(available_zones))] if available_zones else None

        machine_types = self.graph.machine_types(cloud_profile_name, region, zones)
        machine_type = machine_types[0] if machine_types else None
        volume_types = self.graph.volume_types(cloud_profile_name, region, zones)
        volume_type = volume_types[0] if volume_types else None
        machine_image = self.graph.default_machine_image(cloud_profile_name, now)
        volume_size = default_volume_size(self.graph.minimum_volume_size(cloud_profile_name, region))

        image_ref = MachineImageRef()
        cri_names = []
        if machine_image is not None:
            image_ref = MachineImageRef(name=machine_image.name, version=machine_image.version)
            cri_names = [cri.name for cri in machine_image.cri]
        else:
            logger.warning(f"No machine image available for cloud profile {cloud_profile_name}")

        worker = Worker(
            id=new_uid(),
            name=f"worker-{short_random_string(5, self.rng)}",
            minimum=1,
            maximum=2,
            max_surge=1,
            machine=WorkerMachine(type=machine_type.name if machine_type else None, image=image_ref),
            zones=zones,
            cri=WorkerCri(name=self.cri_chooser(cri_names, kubernetes_version)),
            is_new=True,
        )

        if volume_type is not None:
            worker.volume = WorkerVolume(type=volume_type.name, size=volume_size)
        elif machine_type is None or machine_type.storage is None:
            worker.volume = WorkerVolume(size=volume_size)
        elif machine_type.storage.type != "fixed":
            worker.volume = WorkerVolume(size=machine_type.storage.size)

        return worker
