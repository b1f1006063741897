"""Memoization of available Kubernetes updates per shoot version and cloud profile."""

import threading
from typing import Callable, Dict, List, Optional

from ..model.classification import ClassifiedVersion
from .semver import DiffKind
from ..utils.logger import get_logger

logger = get_logger(__name__)

UpdateGroups = Dict[DiffKind, List[ClassifiedVersion]]


class _Sentinel:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


MISSING = _Sentinel("MISSING")
NO_UPDATES = _Sentinel("NO_UPDATES")


class UpdateAvailabilityCache:
    """Process lifetime cache of grouped Kubernetes updates.

    Entries are never evicted on their own. The owner must call
    :meth:`clear` whenever the capability snapshot is replaced, otherwise
    newly published versions stay hidden behind stale entries.
    """

    def __init__(self):
        self._entries: Dict[str, object] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(shoot_version: str, cloud_profile_name: str) -> str:
        return f"{shoot_version}_{cloud_profile_name}"

    def get(self, shoot_version: str, cloud_profile_name: str) -> object:
        """Return the cached entry, ``NO_UPDATES`` or ``MISSING``."""
        return self._entries.get(self.key(shoot_version, cloud_profile_name), MISSING)

    def set(self, shoot_version: str, cloud_profile_name: str, updates: Optional[UpdateGroups]):
        with self._lock:
            entry = NO_UPDATES if updates is None else updates
            self._entries[self.key(shoot_version, cloud_profile_name)] = entry

    def get_or_compute(
        self,
        shoot_version: str,
        cloud_profile_name: str,
        compute: Callable[[], Optional[UpdateGroups]],
    ) -> Optional[UpdateGroups]:
        """Return the cached result, computing and storing it on first use."""
        entry = self.get(shoot_version, cloud_profile_name)
        if entry is not MISSING:
            self.hits += 1
            return None if entry is NO_UPDATES else entry

        with self._lock:
            # another writer may have filled the entry meanwhile
            key = self.key(shoot_version, cloud_profile_name)
            entry = self._entries.get(key, MISSING)
            if entry is MISSING:
                self.misses += 1
                updates = compute()
                entry = NO_UPDATES if updates is None else updates
                self._entries[key] = entry
            else:
                self.hits += 1

        return None if entry is NO_UPDATES else entry

    def clear(self):
        """Drop all entries, e.g. after a snapshot replacement."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug(f"Cleared {count} cached Kubernetes update entries")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
