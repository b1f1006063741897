"""Resolution engine owning the current snapshot and the update cache."""

import random
import threading
from dataclasses import dataclass
from typing import Optional

from ..model.config import DashboardConfig
from ..model.snapshot import CapabilitySnapshot
from ..upgrade.cache import UpdateAvailabilityCache
from ..upgrade.cri import default_cri_name_by_kubernetes_version
from ..upgrade.lifecycle import VersionLifecycle
from ..utils.logger import get_logger
from .access_restrictions import AccessRestrictionResolver
from .graph import CapabilityGraph
from .workers import CriChooser, WorkerGenerator

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionView:
    """All query components bound to one snapshot.

    Readers take one view and use it for a whole derivation pass so they
    never mix data from two snapshots.
    """

    snapshot: CapabilitySnapshot
    graph: CapabilityGraph
    lifecycle: VersionLifecycle
    access_restrictions: AccessRestrictionResolver
    workers: WorkerGenerator


class ResolutionEngine:
    """Holds the current capability snapshot and swaps it atomically."""

    def __init__(
        self,
        snapshot: Optional[CapabilitySnapshot] = None,
        config: Optional[DashboardConfig] = None,
        cri_chooser: CriChooser = default_cri_name_by_kubernetes_version,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or DashboardConfig()
        self._cri_chooser = cri_chooser
        self._rng = rng
        self._lock = threading.Lock()
        self._view = self._build_view(snapshot or CapabilitySnapshot())

    def _build_view(self, snapshot: CapabilitySnapshot) -> ResolutionView:
        graph = CapabilityGraph(snapshot, self.config)
        return ResolutionView(
            snapshot=snapshot,
            graph=graph,
            lifecycle=VersionLifecycle(graph, UpdateAvailabilityCache()),
            access_restrictions=AccessRestrictionResolver(graph, self.config),
            workers=WorkerGenerator(graph, cri_chooser=self._cri_chooser, rng=self._rng),
        )

    def view(self) -> ResolutionView:
        """Current view; stays consistent even if a new snapshot arrives."""
        return self._view

    @property
    def cache(self) -> UpdateAvailabilityCache:
        return self._view.lifecycle.cache

    @property
    def snapshot(self) -> CapabilitySnapshot:
        return self._view.snapshot

    def replace_snapshot(self, snapshot: CapabilitySnapshot) -> ResolutionView:
        """Swap in a new snapshot together with a fresh update cache.

        Readers still holding the previous view write into the discarded
        cache, never into the one serving the new snapshot.
        """
        view = self._build_view(snapshot)
        with self._lock:
            previous = self._view
            self._view = view
        previous.lifecycle.cache.clear()
        logger.info(f"Replaced capability snapshot {previous.snapshot.generation} with {snapshot.generation}")
        return view
