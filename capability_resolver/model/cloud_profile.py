"""Cloud profile and seed models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class VersionClassification(str, Enum):
    """Lifecycle classification of a Kubernetes or machine image version."""

    PREVIEW = "preview"
    SUPPORTED = "supported"
    DEPRECATED = "deprecated"


class CapabilityModel(BaseModel):
    """Base class for immutable capability records."""

    class Config:
        populate_by_name = True
        frozen = True


class Zone(CapabilityModel):
    """Availability zone of a region."""

    name: str
    unavailable_machine_types: List[str] = Field(default_factory=list, alias="unavailableMachineTypes")
    unavailable_volume_types: List[str] = Field(default_factory=list, alias="unavailableVolumeTypes")


class Region(CapabilityModel):
    """Region declared by a cloud profile."""

    name: str
    zones: List[Zone] = Field(default_factory=list)
    labels: Dict[str, str] = Field(default_factory=dict)


class Storage(CapabilityModel):
    """Storage descriptor of a machine type."""

    type: Optional[str] = None
    size: Optional[str] = None
    storage_class: Optional[str] = Field(default=None, alias="class")


class MachineType(CapabilityModel):
    """Machine type offered by a cloud profile."""

    name: str
    cpu: Optional[str] = None
    gpu: Optional[str] = None
    memory: Optional[str] = None
    architecture: Optional[str] = None
    usable: Optional[bool] = None
    storage: Optional[Storage] = None

    @property
    def is_usable(self) -> bool:
        """A missing usable flag means the type can be used."""
        return self.usable is not False


class VolumeType(CapabilityModel):
    """Volume type offered by a cloud profile."""

    name: str
    volume_class: Optional[str] = Field(default=None, alias="class")
    usable: Optional[bool] = None

    @property
    def is_usable(self) -> bool:
        return self.usable is not False


class ExpirableVersion(CapabilityModel):
    """Version record carrying a classification and optional expiration date."""

    version: str
    classification: Optional[VersionClassification] = None
    expiration_date: Optional[datetime] = Field(default=None, alias="expirationDate")

    @field_validator("version", mode="before")
    @classmethod
    def _scalar_to_str(cls, value):
        # unquoted YAML versions such as 1.20 load as numbers
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("expiration_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class KubernetesVersion(ExpirableVersion):
    """Kubernetes version offered by a cloud profile."""


class CriEntry(CapabilityModel):
    """Container runtime supported by a machine image version."""

    name: str
    container_runtimes: List[Dict[str, str]] = Field(default_factory=list, alias="containerRuntimes")


class MachineImageVersion(ExpirableVersion):
    """Version of a machine image."""

    cri: List[CriEntry] = Field(default_factory=list)
    architectures: List[str] = Field(default_factory=list)


class MachineImage(CapabilityModel):
    """Machine image with its published versions."""

    name: str
    versions: List[MachineImageVersion] = Field(default_factory=list)


class KubernetesSettings(CapabilityModel):
    """Kubernetes block of a cloud profile."""

    versions: List[KubernetesVersion] = Field(default_factory=list)


class FloatingPool(CapabilityModel):
    """Floating pool constraint (OpenStack)."""

    name: str
    region: Optional[str] = None
    domain: Optional[str] = None
    non_constraining: Optional[bool] = Field(default=None, alias="nonConstraining")


class LoadBalancerProvider(CapabilityModel):
    """Load balancer provider constraint (OpenStack)."""

    name: str
    region: Optional[str] = None


class LoadBalancerClass(CapabilityModel):
    """Load balancer class offered by a provider config."""

    name: str
    floating_subnet_id: Optional[str] = Field(default=None, alias="floatingSubnetID")
    floating_network_id: Optional[str] = Field(default=None, alias="floatingNetworkID")
    subnet_id: Optional[str] = Field(default=None, alias="subnetID")


class LoadBalancerConfig(CapabilityModel):
    classes: List[LoadBalancerClass] = Field(default_factory=list)


class ProviderConstraints(CapabilityModel):
    """Provider specific constraint blocks."""

    floating_pools: List[FloatingPool] = Field(default_factory=list, alias="floatingPools")
    load_balancer_providers: List[LoadBalancerProvider] = Field(
        default_factory=list, alias="loadBalancerProviders"
    )
    load_balancer_config: Optional[LoadBalancerConfig] = Field(default=None, alias="loadBalancerConfig")


class ProviderConfig(CapabilityModel):
    """Provider specific configuration of a cloud profile."""

    constraints: Optional[ProviderConstraints] = None
    firewall_images: Optional[List[str]] = Field(default=None, alias="firewallImages")
    firewall_networks: Optional[Dict[str, Dict[str, str]]] = Field(default=None, alias="firewallNetworks")


class CloudProfileMetadata(CapabilityModel):
    name: str
    cloud_provider_kind: Optional[str] = Field(default=None, alias="cloudProviderKind")
    display_name: Optional[str] = Field(default=None, alias="displayName")


class CloudProfileData(CapabilityModel):
    """Capability payload of a cloud profile."""

    regions: List[Region] = Field(default_factory=list)
    machine_types: List[MachineType] = Field(default_factory=list, alias="machineTypes")
    volume_types: List[VolumeType] = Field(default_factory=list, alias="volumeTypes")
    machine_images: List[MachineImage] = Field(default_factory=list, alias="machineImages")
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    provider_config: Optional[ProviderConfig] = Field(default=None, alias="providerConfig")
    seed_names: Optional[List[str]] = Field(default=None, alias="seedNames")


class CloudProfile(CapabilityModel):
    """Cloud profile as exposed by the capability graph provider."""

    metadata: CloudProfileMetadata
    data: CloudProfileData = Field(default_factory=CloudProfileData)

    @property
    def name(self) -> str:
        """Get cloud profile name."""
        return self.metadata.name

    @property
    def kind(self) -> Optional[str]:
        """Get cloud provider kind."""
        return self.metadata.cloud_provider_kind

    def region(self, name: Optional[str]) -> Optional[Region]:
        """Find a declared region by name."""
        for region in self.data.regions:
            if region.name == name:
                return region
        return None


class SeedVolume(CapabilityModel):
    minimum_size: Optional[str] = Field(default=None, alias="minimumSize")


class SeedMetadata(CapabilityModel):
    name: str
    unreachable: bool = False


class SeedData(CapabilityModel):
    region: Optional[str] = None
    type: Optional[str] = None


class Seed(CapabilityModel):
    """Seed cluster hosting shoot control planes."""

    metadata: SeedMetadata
    data: SeedData = Field(default_factory=SeedData)
    volume: Optional[SeedVolume] = None

    @property
    def name(self) -> str:
        """Get seed name."""
        return self.metadata.name

    @property
    def region(self) -> Optional[str]:
        """Get seed region."""
        return self.data.region
