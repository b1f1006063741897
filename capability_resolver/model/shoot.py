"""Shoot (cluster specification) and worker pool models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResourceMetadata(BaseModel):
    """Kubernetes style object metadata."""

    name: Optional[str] = None
    namespace: Optional[str] = None
    annotations: Dict[str, str] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)


class MachineImageRef(BaseModel):
    """Machine image selected by a worker pool."""

    name: Optional[str] = None
    version: Optional[str] = None


class WorkerMachine(BaseModel):
    type: Optional[str] = None
    image: Optional[MachineImageRef] = None


class WorkerVolume(BaseModel):
    type: Optional[str] = None
    size: Optional[str] = None


class WorkerCri(BaseModel):
    name: Optional[str] = None


class Worker(BaseModel):
    """Worker pool of a shoot."""

    id: Optional[str] = None
    name: str
    minimum: int = 1
    maximum: int = 2
    max_surge: int = Field(default=1, alias="maxSurge")
    machine: WorkerMachine = Field(default_factory=WorkerMachine)
    zones: Optional[List[str]] = None
    cri: Optional[WorkerCri] = None
    volume: Optional[WorkerVolume] = None
    is_new: bool = Field(default=False, exclude=True)

    class Config:
        populate_by_name = True

    def to_spec(self) -> Dict[str, Any]:
        """Serialize as a shoot spec fragment (transient fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class SeedSelector(BaseModel):
    match_labels: Dict[str, str] = Field(default_factory=dict, alias="matchLabels")

    class Config:
        populate_by_name = True


class ShootKubernetes(BaseModel):
    version: Optional[str] = None


class ShootProvider(BaseModel):
    type: Optional[str] = None
    workers: List[Worker] = Field(default_factory=list)


class HibernationSchedule(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None
    location: Optional[str] = None


class ShootHibernation(BaseModel):
    enabled: Optional[bool] = None
    schedules: List[HibernationSchedule] = Field(default_factory=list)


class MaintenanceAutoUpdate(BaseModel):
    kubernetes_version: bool = Field(default=False, alias="kubernetesVersion")
    machine_image_version: bool = Field(default=False, alias="machineImageVersion")

    class Config:
        populate_by_name = True


class ShootMaintenance(BaseModel):
    auto_update: MaintenanceAutoUpdate = Field(default_factory=MaintenanceAutoUpdate, alias="autoUpdate")

    class Config:
        populate_by_name = True


class ShootSpec(BaseModel):
    """Subset of the shoot spec read by the resolution engine."""

    cloud_profile_name: Optional[str] = Field(default=None, alias="cloudProfileName")
    region: Optional[str] = None
    purpose: Optional[str] = None
    kubernetes: ShootKubernetes = Field(default_factory=ShootKubernetes)
    provider: ShootProvider = Field(default_factory=ShootProvider)
    seed_name: Optional[str] = Field(default=None, alias="seedName")
    seed_selector: Optional[SeedSelector] = Field(default=None, alias="seedSelector")
    hibernation: Optional[ShootHibernation] = None
    maintenance: ShootMaintenance = Field(default_factory=ShootMaintenance)

    class Config:
        populate_by_name = True


class Shoot(BaseModel):
    """Cluster specification as delivered by the cluster specification provider."""

    metadata: ResourceMetadata = Field(default_factory=ResourceMetadata)
    spec: ShootSpec = Field(default_factory=ShootSpec)

    @property
    def annotations(self) -> Dict[str, str]:
        """Get shoot annotations."""
        return self.metadata.annotations

    @property
    def seed_selector_labels(self) -> Dict[str, str]:
        """Get the seed selector match labels."""
        if self.spec.seed_selector is None:
            return {}
        return self.spec.seed_selector.match_labels

    @property
    def workers(self) -> List[Worker]:
        return self.spec.provider.workers

    @property
    def kubernetes_version(self) -> Optional[str]:
        return self.spec.kubernetes.version


class Project(BaseModel):
    """Gardener project; only its metadata is consulted."""

    metadata: ResourceMetadata = Field(default_factory=ResourceMetadata)
