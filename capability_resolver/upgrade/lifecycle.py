"""Lifecycle judgments for Kubernetes and machine image versions."""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..model.classification import (
    UNKNOWN_EXPIRED_TIMESTAMP,
    ClassifiedMachineImage,
    ClassifiedVersion,
    ExpirationStatus,
    Severity,
    WorkerGroupExpiration,
)
from ..model.shoot import Worker
from ..utils.logger import get_logger
from . import semver
from .cache import UpdateAvailabilityCache, UpdateGroups
from .classifier import (
    decorate_classification_object,
    first_item_matching_version_classification,
    is_valid_termination_date,
    utc_now,
)

if TYPE_CHECKING:
    from ..core.graph import CapabilityGraph

logger = get_logger(__name__)


def kubernetes_expiration_severity(
    update_path_available: bool, patch_available: bool, auto_patch: bool
) -> Optional[Severity]:
    """Severity of an expiring Kubernetes version.

    ``None`` means there is nothing to report.
    """
    if not update_path_available:
        return Severity.ERROR
    if (not auto_patch and patch_available) or not patch_available:
        return Severity.WARNING
    if auto_patch and patch_available:
        return Severity.INFO
    return None


def machine_image_expiration_severity(update_available: bool, auto_patch: bool) -> Severity:
    if not update_available:
        return Severity.ERROR
    if not auto_patch:
        return Severity.WARNING
    return Severity.INFO


def selected_image_is_not_latest(
    machine_image: ClassifiedMachineImage, machine_images: Sequence[ClassifiedMachineImage]
) -> bool:
    """True when a newer, usable version of the same image is published."""
    return any(
        candidate.name == machine_image.name
        and semver.gt(candidate.version, machine_image.version)
        and not candidate.is_preview
        and not candidate.is_expired
        for candidate in machine_images
    )


class VersionLifecycle:
    """Classifies versions of one capability snapshot and finds update paths."""

    def __init__(self, graph: "CapabilityGraph", cache: Optional[UpdateAvailabilityCache] = None):
        self.graph = graph
        self.cache = cache if cache is not None else UpdateAvailabilityCache()

    # Kubernetes versions

    def kubernetes_versions(
        self, cloud_profile_name: Optional[str], now: Optional[datetime] = None
    ) -> List[ClassifiedVersion]:
        """Valid Kubernetes versions of a profile, in declaration order."""
        profile = self.graph.cloud_profile_by_name(cloud_profile_name)
        if profile is None:
            return []

        now = now or utc_now()
        versions = []
        for version in profile.data.kubernetes.versions:
            if not semver.is_valid(version.version):
                logger.error(f"Skipped Kubernetes version {version.version} as it is not a valid semver version")
                continue
            versions.append(decorate_classification_object(version, now))
        return versions

    def sorted_kubernetes_versions(
        self, cloud_profile_name: Optional[str], now: Optional[datetime] = None
    ) -> List[ClassifiedVersion]:
        return semver.sort_descending(
            self.kubernetes_versions(cloud_profile_name, now), key=lambda item: item.version
        )

    def default_kubernetes_version(
        self, cloud_profile_name: Optional[str], now: Optional[datetime] = None
    ) -> Optional[ClassifiedVersion]:
        return first_item_matching_version_classification(self.sorted_kubernetes_versions(cloud_profile_name, now))

    def is_not_latest_patch(self, kubernetes_version: str, cloud_profile_name: Optional[str]) -> bool:
        """True when a newer, non-preview patch release of the same minor exists.

        Pre-releases of a later patch do not count.
        """
        if not semver.is_valid(kubernetes_version):
            return False

        return any(
            semver.diff_kind(candidate.version, kubernetes_version) == semver.DiffKind.PATCH
            and semver.gt(candidate.version, kubernetes_version)
            and not candidate.is_preview
            for candidate in self.kubernetes_versions(cloud_profile_name)
        )

    def update_path_available(self, kubernetes_version: str, cloud_profile_name: Optional[str]) -> bool:
        """True when a newer patch or a non-preview next minor release exists."""
        if not semver.is_valid(kubernetes_version):
            return False
        if self.is_not_latest_patch(kubernetes_version, cloud_profile_name):
            return True

        next_minor = semver.minor(kubernetes_version) + 1
        return any(
            semver.minor(candidate.version) == next_minor and not candidate.is_preview
            for candidate in self.kubernetes_versions(cloud_profile_name)
        )

    def kubernetes_version_expiration(
        self,
        kubernetes_version: str,
        cloud_profile_name: Optional[str],
        auto_patch: bool,
        now: Optional[datetime] = None,
    ) -> Optional[ExpirationStatus]:
        """Expiration warning for the Kubernetes version of a shoot."""
        now = now or utc_now()
        version = next(
            (
                candidate
                for candidate in self.kubernetes_versions(cloud_profile_name, now)
                if candidate.version == kubernetes_version
            ),
            None,
        )
        if version is None:
            return ExpirationStatus(
                version=kubernetes_version,
                expiration_date=UNKNOWN_EXPIRED_TIMESTAMP,
                is_valid_termination_date=False,
                severity=Severity.WARNING,
            )
        if version.expiration_date is None:
            return None

        severity = kubernetes_expiration_severity(
            update_path_available=self.update_path_available(kubernetes_version, cloud_profile_name),
            patch_available=self.is_not_latest_patch(kubernetes_version, cloud_profile_name),
            auto_patch=auto_patch,
        )
        if severity is None:
            return None

        return ExpirationStatus(
            version=kubernetes_version,
            expiration_date=version.expiration_date,
            is_valid_termination_date=is_valid_termination_date(version.expiration_date, now),
            severity=severity,
        )

    def available_kubernetes_updates(
        self, shoot_version: str, cloud_profile_name: str, now: Optional[datetime] = None
    ) -> Optional[UpdateGroups]:
        """Non-expired newer versions grouped by diff kind, memoized per snapshot."""
        return self.cache.get_or_compute(
            shoot_version,
            cloud_profile_name,
            lambda: self._compute_kubernetes_updates(shoot_version, cloud_profile_name, now),
        )

    def _compute_kubernetes_updates(
        self, shoot_version: str, cloud_profile_name: str, now: Optional[datetime]
    ) -> Optional[UpdateGroups]:
        if not semver.is_valid(shoot_version):
            logger.warning(f"Cannot compute updates for invalid Kubernetes version {shoot_version}")
            return None

        newer_versions = [
            version
            for version in self.kubernetes_versions(cloud_profile_name, now)
            if not version.is_expired and semver.gt(version.version, shoot_version)
        ]
        if not newer_versions:
            return None

        groups: UpdateGroups = {}
        for version in newer_versions:
            groups.setdefault(semver.diff_kind(version.version, shoot_version), []).append(version)
        return groups

    # machine images

    def expiring_worker_groups(
        self,
        workers: Sequence[Worker],
        cloud_profile_name: Optional[str],
        auto_patch: bool,
        now: Optional[datetime] = None,
    ) -> List[WorkerGroupExpiration]:
        """Expiration warnings for worker group machine images.

        Worker groups whose image has no expiration date are omitted.
        """
        now = now or utc_now()
        machine_images = self.graph.machine_images(cloud_profile_name, now)

        result = []
        for worker in workers:
            image_ref = worker.machine.image
            image = None
            if image_ref is not None:
                image = next(
                    (
                        candidate
                        for candidate in machine_images
                        if candidate.name == image_ref.name and candidate.version == image_ref.version
                    ),
                    None,
                )

            if image is None:
                result.append(
                    WorkerGroupExpiration(
                        worker_name=worker.name,
                        name=image_ref.name if image_ref else None,
                        version=image_ref.version if image_ref else None,
                        expiration_date=UNKNOWN_EXPIRED_TIMESTAMP,
                        is_valid_termination_date=False,
                        severity=Severity.WARNING,
                    )
                )
                continue

            if image.expiration_date is None:
                continue

            result.append(
                WorkerGroupExpiration(
                    worker_name=worker.name,
                    name=image.name,
                    version=image.version,
                    expiration_date=image.expiration_date,
                    is_valid_termination_date=is_valid_termination_date(image.expiration_date, now),
                    severity=machine_image_expiration_severity(
                        selected_image_is_not_latest(image, machine_images), auto_patch
                    ),
                    image=image,
                )
            )
        return result
