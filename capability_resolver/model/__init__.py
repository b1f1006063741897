"""Data models for capability-resolver."""

from .access_restriction import (
    AccessRestrictionDefinition,
    AccessRestrictionSelection,
    DisplayedAccessRestriction,
    OptionDefinition,
    OptionSelection,
)
from .classification import (
    ClassifiedMachineImage,
    ClassifiedVersion,
    ExpirationStatus,
    Severity,
    UNKNOWN_EXPIRED_TIMESTAMP,
    WorkerGroupExpiration,
)
from .cloud_profile import (
    CloudProfile,
    KubernetesVersion,
    MachineImage,
    MachineImageVersion,
    MachineType,
    Region,
    Seed,
    VersionClassification,
    VolumeType,
    Zone,
)
from .config import DashboardConfig, VendorHint, load_config
from .shoot import Project, Shoot, Worker
from .snapshot import CapabilitySnapshot

__all__ = [
    "AccessRestrictionDefinition",
    "AccessRestrictionSelection",
    "DisplayedAccessRestriction",
    "OptionDefinition",
    "OptionSelection",
    "ClassifiedMachineImage",
    "ClassifiedVersion",
    "ExpirationStatus",
    "Severity",
    "UNKNOWN_EXPIRED_TIMESTAMP",
    "WorkerGroupExpiration",
    "CloudProfile",
    "KubernetesVersion",
    "MachineImage",
    "MachineImageVersion",
    "MachineType",
    "Region",
    "Seed",
    "VersionClassification",
    "VolumeType",
    "Zone",
    "DashboardConfig",
    "VendorHint",
    "load_config",
    "Project",
    "Shoot",
    "Worker",
    "CapabilitySnapshot",
]
