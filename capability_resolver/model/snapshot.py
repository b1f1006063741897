"""Immutable capability graph snapshot."""

import itertools
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml

from .cloud_profile import CloudProfile, Seed
from ..utils.logger import get_logger

logger = get_logger(__name__)

_generation_counter = itertools.count(1)


class CapabilitySnapshot:
    """Point-in-time view of all cloud profiles and seeds.

    A snapshot is never patched. New capability data produces a new
    snapshot with a new ``generation`` which callers swap in as a whole.
    """

    def __init__(self, cloud_profiles: Iterable[CloudProfile] = (), seeds: Iterable[Seed] = ()):
        self._cloud_profiles: Tuple[CloudProfile, ...] = tuple(cloud_profiles)
        self._seeds: Tuple[Seed, ...] = tuple(seeds)
        self._cloud_profiles_by_name: Dict[str, CloudProfile] = {
            profile.name: profile for profile in self._cloud_profiles
        }
        self._seeds_by_name: Dict[str, Seed] = {seed.name: seed for seed in self._seeds}
        self.generation = next(_generation_counter)

    @property
    def cloud_profiles(self) -> Tuple[CloudProfile, ...]:
        return self._cloud_profiles

    @property
    def seeds(self) -> Tuple[Seed, ...]:
        return self._seeds

    def cloud_profile(self, name: Optional[str]) -> Optional[CloudProfile]:
        """Look up a cloud profile by name."""
        if not name:
            return None
        return self._cloud_profiles_by_name.get(name)

    def seed(self, name: Optional[str]) -> Optional[Seed]:
        """Look up a seed by name."""
        if not name:
            return None
        return self._seeds_by_name.get(name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CapabilitySnapshot":
        """Build a snapshot from ``{"cloudProfiles": [...], "seeds": [...]}``."""
        cloud_profiles = [CloudProfile(**item) for item in data.get("cloudProfiles") or []]
        seeds = [Seed(**item) for item in data.get("seeds") or []]
        return cls(cloud_profiles=cloud_profiles, seeds=seeds)

    @classmethod
    def from_file(cls, path: Path) -> "CapabilitySnapshot":
        """Load a snapshot from a YAML or JSON file."""
        with open(path, "r") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        snapshot = cls.from_dict(data or {})
        logger.info(
            f"Loaded snapshot from {path}: {len(snapshot.cloud_profiles)} cloud profiles, "
            f"{len(snapshot.seeds)} seeds"
        )
        return snapshot

    def __repr__(self) -> str:
        return (
            f"CapabilitySnapshot(generation={self.generation}, "
            f"cloud_profiles={len(self._cloud_profiles)}, seeds={len(self._seeds)})"
        )
