"""Read-only queries over a capability snapshot."""

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..model.classification import ClassifiedMachineImage
from ..model.cloud_profile import (
    CloudProfile,
    LoadBalancerClass,
    MachineType,
    ProviderConstraints,
    Region,
    Seed,
    VolumeType,
)
from ..model.config import DashboardConfig
from ..model.snapshot import CapabilitySnapshot
from ..upgrade import semver
from ..upgrade.classifier import (
    decorate_classification_object,
    first_item_matching_version_classification,
    utc_now,
)
from ..utils.logger import get_logger
from ..utils.sizes import max_size

logger = get_logger(__name__)

DEFAULT_MINIMUM_VOLUME_SIZE = "20Gi"

SORTED_PROVIDER_KINDS = ["aws", "azure", "gcp", "openstack", "alicloud", "metal", "vsphere", "hcloud"]

# Evaluated in order, first match wins. Every token of a rule must be
# contained in the lower-cased image name.
VENDOR_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("coreos",), "coreos"),
    (("ubuntu",), "ubuntu"),
    (("gardenlinux",), "gardenlinux"),
    (("suse", "jeos"), "suse-jeos"),
    (("suse", "chost"), "suse-chost"),
    (("flatcar",), "flatcar"),
    (("memoryone",), "memoryone"),
    (("vsmp",), "memoryone"),
    (("aws-route53",), "aws-route53"),
    (("azure-dns",), "azure-dns"),
    (("google-clouddns",), "google-clouddns"),
    (("openstack-designate",), "openstack-designate"),
    (("alicloud-dns",), "alicloud-dns"),
    (("cloudflare-dns",), "cloudflare-dns"),
    (("infoblox-dns",), "infoblox-dns"),
    (("netlify-dns",), "netlify-dns"),
]


def vendor_name_from_image_name(image_name: Optional[str]) -> Optional[str]:
    """Derive the vendor of a machine image (or DNS provider) from its name."""
    if not image_name:
        return None

    lower_case_name = image_name.lower()
    for tokens, vendor in VENDOR_RULES:
        if all(token in lower_case_name for token in tokens):
            return vendor
    return None


def _matches_property_or_empty(value: Optional[str], expected: Optional[str]) -> bool:
    """Unset properties match everything."""
    if not value:
        return True
    return value == expected


def _unique(values: Sequence) -> list:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class CapabilityGraph:
    """Navigates cloud profiles, regions, zones and seeds of one snapshot."""

    def __init__(self, snapshot: CapabilitySnapshot, config: Optional[DashboardConfig] = None):
        self.snapshot = snapshot
        self.config = config or DashboardConfig()

    # lookups

    def cloud_profile_by_name(self, name: Optional[str]) -> Optional[CloudProfile]:
        return self.snapshot.cloud_profile(name)

    def seed_by_name(self, name: Optional[str]) -> Optional[Seed]:
        return self.snapshot.seed(name)

    def seeds_by_names(self, names: Sequence[str]) -> List[Seed]:
        """Resolve seed names, skipping unknown seeds."""
        seeds = []
        for name in names:
            seed = self.seed_by_name(name)
            if seed is None:
                logger.debug(f"Seed {name} referenced by cloud profile is unknown")
                continue
            seeds.append(seed)
        return seeds

    def is_seed_unreachable(self, name: str) -> bool:
        seed = self.seed_by_name(name)
        return bool(seed and seed.metadata.unreachable)

    def cloud_profiles_by_provider_kind(self, kind: str) -> List[CloudProfile]:
        profiles = [profile for profile in self.snapshot.cloud_profiles if profile.kind == kind]
        return sorted(profiles, key=lambda profile: profile.name)

    def provider_kinds(self) -> List[str]:
        return _unique([profile.kind for profile in self.snapshot.cloud_profiles])

    def sorted_provider_kinds(self) -> List[str]:
        """Known provider kinds present in the snapshot, in display order."""
        kinds = self.provider_kinds()
        return [kind for kind in SORTED_PROVIDER_KINDS if kind in kinds]

    # regions and zones

    def _region(self, cloud_profile_name: Optional[str], region: Optional[str]) -> Optional[Region]:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None:
            return None
        return profile.region(region)

    def zones(self, cloud_profile_name: Optional[str], region: Optional[str]) -> List[str]:
        region_object = self._region(cloud_profile_name, region)
        if region_object is None:
            return []
        return [zone.name for zone in region_object.zones]

    def region_labels(self, cloud_profile_name: Optional[str], region: Optional[str]) -> Dict[str, str]:
        region_object = self._region(cloud_profile_name, region)
        if region_object is None:
            return {}
        return region_object.labels

    def _is_valid_region(self, profile: CloudProfile) -> Callable[[Optional[str]], bool]:
        def predicate(region: Optional[str]) -> bool:
            if profile.kind == "azure":
                # Azure regions may not be zoned
                return bool(self.zones(profile.name, region))

            if not profile.data.regions:
                return True
            return profile.region(region) is not None

        return predicate

    def regions_with_seed(self, cloud_profile_name: Optional[str]) -> List[str]:
        """Regions of the profile that host at least one of its seeds."""
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None or not profile.data.seed_names:
            return []

        seeds = self.seeds_by_names(profile.data.seed_names)
        unique_seed_regions = _unique([seed.region for seed in seeds if seed.region])
        return [region for region in unique_seed_regions if self._is_valid_region(profile)(region)]

    def regions_without_seed(self, cloud_profile_name: Optional[str]) -> List[str]:
        """Valid regions of the profile without a seed."""
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None:
            return []

        is_valid = self._is_valid_region(profile)
        regions_with_seed = set(self.regions_with_seed(cloud_profile_name))
        regions = _unique([region.name for region in profile.data.regions])
        return [region for region in regions if is_valid(region) and region not in regions_with_seed]

    # machine and volume types

    def _types_for_zones(
        self,
        type_name: str,
        cloud_profile_name: Optional[str],
        region: Optional[str],
        zones: Optional[Sequence[str]],
    ) -> List[Union[MachineType, VolumeType]]:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None:
            return []

        items = list(getattr(profile.data, type_name))
        if not region or zones is None:
            return items

        region_object = profile.region(region)
        region_zones = region_object.zones if region_object else []
        unavailable = set()
        for zone in region_zones:
            if zone.name not in zones:
                continue
            if type_name == "machine_types":
                unavailable.update(zone.unavailable_machine_types)
            else:
                unavailable.update(zone.unavailable_volume_types)

        return [item for item in items if item.is_usable and item.name not in unavailable]

    def machine_types(
        self,
        cloud_profile_name: Optional[str],
        region: Optional[str] = None,
        zones: Optional[Sequence[str]] = None,
    ) -> List[MachineType]:
        """Machine types usable in all of the given zones."""
        return self._types_for_zones("machine_types", cloud_profile_name, region, zones)

    def volume_types(
        self,
        cloud_profile_name: Optional[str],
        region: Optional[str] = None,
        zones: Optional[Sequence[str]] = None,
    ) -> List[VolumeType]:
        """Volume types usable in all of the given zones."""
        return self._types_for_zones("volume_types", cloud_profile_name, region, zones)

    # machine images

    def machine_images(
        self, cloud_profile_name: Optional[str], now: Optional[datetime] = None
    ) -> List[ClassifiedMachineImage]:
        """All valid machine image versions, newest first per image."""
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None:
            return []

        now = now or utc_now()
        result = []
        for machine_image in profile.data.machine_images:
            versions = []
            for version in machine_image.versions:
                if not semver.is_valid(version.version):
                    logger.error(
                        f"Skipped machine image {machine_image.name} as version "
                        f"{version.version} is not a valid semver version"
                    )
                    continue
                versions.append(version)

            vendor_name = vendor_name_from_image_name(machine_image.name)
            vendor_hint = self.config.vendor_hint(vendor_name)
            for version in semver.sort_descending(versions, key=lambda item: item.version):
                result.append(
                    decorate_classification_object(
                        version,
                        now,
                        model=ClassifiedMachineImage,
                        key=f"{machine_image.name}/{version.version}",
                        name=machine_image.name,
                        cri=version.cri,
                        vendor_name=vendor_name,
                        icon=vendor_name,
                        vendor_hint=vendor_hint,
                    )
                )
        return result

    def default_machine_image(
        self, cloud_profile_name: Optional[str], now: Optional[datetime] = None
    ) -> Optional[ClassifiedMachineImage]:
        return first_item_matching_version_classification(self.machine_images(cloud_profile_name, now))

    # volumes

    def minimum_volume_size(self, cloud_profile_name: Optional[str], region: Optional[str]) -> str:
        """Largest minimum volume size of the profile's seeds in the region."""
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None or not profile.data.seed_names:
            return DEFAULT_MINIMUM_VOLUME_SIZE

        sizes = [
            seed.volume.minimum_size
            for seed in self.seeds_by_names(profile.data.seed_names)
            if seed.region == region and seed.volume is not None
        ]
        return max_size(sizes) or DEFAULT_MINIMUM_VOLUME_SIZE

    # provider constraints

    def _constraints(self, cloud_profile_name: Optional[str]) -> Optional[ProviderConstraints]:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None or profile.data.provider_config is None:
            return None
        return profile.data.provider_config.constraints

    def floating_pool_names(
        self,
        cloud_profile_name: Optional[str],
        region: Optional[str],
        secret_domain: Optional[str] = None,
    ) -> List[str]:
        """Floating pools for a region and secret domain.

        Region or domain specific pools take precedence over generic ones
        unless they are marked non-constraining.
        """
        constraints = self._constraints(cloud_profile_name)
        floating_pools = constraints.floating_pools if constraints else []

        available = [
            pool
            for pool in floating_pools
            if _matches_property_or_empty(pool.region, region)
            and _matches_property_or_empty(pool.domain, secret_domain)
        ]

        if any(pool.region and not pool.non_constraining for pool in available):
            available = [pool for pool in available if pool.region == region]
        if any(pool.domain and not pool.non_constraining for pool in available):
            available = [pool for pool in available if pool.domain == secret_domain]

        return _unique([pool.name for pool in available])

    def load_balancer_provider_names(self, cloud_profile_name: Optional[str], region: Optional[str]) -> List[str]:
        constraints = self._constraints(cloud_profile_name)
        providers = constraints.load_balancer_providers if constraints else []

        available = [provider for provider in providers if _matches_property_or_empty(provider.region, region)]
        if any(provider.region for provider in available):
            available = [provider for provider in available if provider.region == region]

        return _unique([provider.name for provider in available])

    def load_balancer_classes(self, cloud_profile_name: Optional[str]) -> Optional[List[LoadBalancerClass]]:
        constraints = self._constraints(cloud_profile_name)
        if constraints is None or constraints.load_balancer_config is None:
            return None
        return constraints.load_balancer_config.classes

    def load_balancer_class_names(self, cloud_profile_name: Optional[str]) -> List[str]:
        classes = self.load_balancer_classes(cloud_profile_name) or []
        return _unique([load_balancer_class.name for load_balancer_class in classes])

    # metal

    def _is_metal(self, cloud_profile_name: Optional[str]) -> bool:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        return profile is not None and profile.kind == "metal"

    def partition_ids(self, cloud_profile_name: Optional[str], region: Optional[str]) -> Optional[List[str]]:
        """Partition IDs equal zone names on metal infrastructure."""
        if not self._is_metal(cloud_profile_name):
            return None
        return self.zones(cloud_profile_name, region)

    def firewall_sizes(
        self,
        cloud_profile_name: Optional[str],
        region: Optional[str],
        zones: Optional[Sequence[str]] = None,
    ) -> Optional[List[MachineType]]:
        """Firewall sizes equal the machine types on metal infrastructure."""
        if not self._is_metal(cloud_profile_name):
            return None
        return self.machine_types(cloud_profile_name, region, zones)

    def firewall_images(self, cloud_profile_name: Optional[str]) -> Optional[List[str]]:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None or profile.data.provider_config is None:
            return None
        return profile.data.provider_config.firewall_images

    def firewall_networks(self, cloud_profile_name: Optional[str], partition_id: Optional[str]) -> List[Dict[str, str]]:
        profile = self.cloud_profile_by_name(cloud_profile_name)
        if profile is None or profile.data.provider_config is None:
            return []

        networks = (profile.data.provider_config.firewall_networks or {}).get(partition_id) or {}
        return [{"key": key, "value": value, "text": f"{key} [{value}]"} for key, value in networks.items()]
