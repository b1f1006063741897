"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from capability_resolver.core.engine import ResolutionEngine
from capability_resolver.core.graph import CapabilityGraph
from capability_resolver.model.config import DashboardConfig
from capability_resolver.model.snapshot import CapabilitySnapshot

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)

EU_ACCESS = "seed.gardener.cloud/eu-access"
EU_ACCESS_ADDONS = "support.gardener.cloud/eu-access-for-cluster-addons"
EU_ACCESS_NODES = "support.gardener.cloud/eu-access-for-cluster-nodes"
OTHER_RESTRICTION = "seed.gardener.cloud/other"


def _aws_profile() -> Dict[str, Any]:
    return {
        "metadata": {"name": "aws", "cloudProviderKind": "aws"},
        "data": {
            "regions": [
                {
                    "name": "eu-central-1",
                    "zones": [
                        {
                            "name": "eu-central-1a",
                            "unavailableMachineTypes": ["m5.xlarge"],
                            "unavailableVolumeTypes": ["io1"],
                        },
                        {"name": "eu-central-1b"},
                    ],
                    "labels": {EU_ACCESS: "true", OTHER_RESTRICTION: "true"},
                },
                {"name": "us-east-1", "zones": [{"name": "us-east-1a"}]},
                {"name": "ap-south-1", "zones": []},
            ],
            "machineTypes": [
                {"name": "m5.large", "cpu": "2", "memory": "8Gi", "usable": True},
                {"name": "m5.xlarge", "cpu": "4", "memory": "16Gi", "usable": True},
                {"name": "m4.old", "cpu": "2", "memory": "8Gi", "usable": False},
            ],
            "volumeTypes": [
                {"name": "gp2", "class": "standard", "usable": True},
                {"name": "io1", "class": "premium", "usable": True},
            ],
            "machineImages": [
                {
                    "name": "gardenlinux",
                    "versions": [
                        {
                            "version": "318.8.0",
                            "classification": "deprecated",
                            "expirationDate": "2024-01-01T00:00:00Z",
                        },
                        {
                            "version": "576.1.0",
                            "classification": "supported",
                            "expirationDate": "2025-01-01T00:00:00Z",
                        },
                        {
                            "version": "576.2.0",
                            "classification": "supported",
                            "cri": [{"name": "containerd"}, {"name": "docker"}],
                        },
                        {"version": "not-a-version", "classification": "supported"},
                        {"version": "577.0.0", "classification": "preview"},
                    ],
                },
                {
                    "name": "suse-chost",
                    "versions": [
                        {
                            "version": "15.2.0",
                            "classification": "deprecated",
                            "expirationDate": "2024-07-01T00:00:00Z",
                            "cri": [{"name": "docker"}],
                        },
                    ],
                },
            ],
            "kubernetes": {
                "versions": [
                    {
                        "version": "1.18.3",
                        "classification": "deprecated",
                        "expirationDate": "2024-01-01T00:00:00Z",
                    },
                    {
                        "version": "1.19.0",
                        "classification": "deprecated",
                        "expirationDate": "2024-12-31T00:00:00Z",
                    },
                    {"version": "1.19.5", "classification": "supported"},
                    {
                        "version": "1.20.0",
                        "classification": "supported",
                        "expirationDate": "2024-09-01T00:00:00Z",
                    },
                    {"version": "1.21.2", "classification": "preview"},
                    {"version": "1.x", "classification": "supported"},
                ]
            },
            "seedNames": ["aws-eu1", "aws-eu2", "aws-us1", "aws-ghost", "missing-seed"],
        },
    }


def _azure_profile() -> Dict[str, Any]:
    return {
        "metadata": {"name": "az", "cloudProviderKind": "azure"},
        "data": {
            "regions": [
                {"name": "westeurope", "zones": [{"name": "1"}, {"name": "2"}, {"name": "3"}]},
                {"name": "northeurope", "zones": []},
                {"name": "eastus", "zones": [{"name": "1"}]},
            ],
            "machineTypes": [{"name": "Standard_A1", "cpu": "1", "memory": "2Gi"}],
            "machineImages": [
                {
                    "name": "ubuntu",
                    "versions": [
                        {"version": "18.4.20200228", "classification": "supported", "cri": [{"name": "docker"}]},
                    ],
                }
            ],
            "kubernetes": {"versions": [{"version": "1.22.1"}]},
            "seedNames": ["az-we", "az-ne"],
        },
    }


def _metal_profile() -> Dict[str, Any]:
    return {
        "metadata": {"name": "metal", "cloudProviderKind": "metal"},
        "data": {
            "regions": [{"name": "fra-equ01", "zones": [{"name": "fra-equ01-a"}]}],
            "machineTypes": [
                {
                    "name": "c1-xlarge-x86",
                    "cpu": "32",
                    "memory": "128Gi",
                    "storage": {"type": "fixed", "size": "1Ti", "class": "local"},
                }
            ],
            "machineImages": [
                {
                    "name": "ubuntu",
                    "versions": [{"version": "20.4.20210616", "cri": [{"name": "containerd"}]}],
                }
            ],
            "kubernetes": {"versions": [{"version": "1.22.1", "classification": "supported"}]},
            "providerConfig": {
                "firewallImages": ["firewall-ubuntu-2.0"],
                "firewallNetworks": {"fra-equ01-a": {"internet": "internet-fra-equ01"}},
            },
        },
    }


def _openstack_profile() -> Dict[str, Any]:
    return {
        "metadata": {"name": "os", "cloudProviderKind": "openstack"},
        "data": {
            "regions": [{"name": "eu-de-1", "zones": [{"name": "eu-de-1a"}]}],
            "machineTypes": [
                {"name": "g.c2m4", "cpu": "2", "memory": "4Gi", "storage": {"type": "default", "size": "64Gi"}}
            ],
            "providerConfig": {
                "constraints": {
                    "floatingPools": [
                        {"name": "fip-generic"},
                        {"name": "fip-eu", "region": "eu-de-1"},
                        {"name": "fip-domain", "domain": "dom1"},
                        {"name": "fip-shared", "region": "eu-de-2", "nonConstraining": True},
                    ],
                    "loadBalancerProviders": [
                        {"name": "octavia"},
                        {"name": "haproxy", "region": "eu-de-1"},
                    ],
                    "loadBalancerConfig": {
                        "classes": [{"name": "default"}, {"name": "internal"}, {"name": "default"}]
                    },
                }
            },
        },
    }


def _seeds():
    return [
        {"metadata": {"name": "aws-eu1"}, "data": {"region": "eu-central-1", "type": "aws"}, "volume": {"minimumSize": "20Gi"}},
        {"metadata": {"name": "aws-eu2"}, "data": {"region": "eu-central-1", "type": "aws"}, "volume": {"minimumSize": "100Gi"}},
        {"metadata": {"name": "aws-us1", "unreachable": True}, "data": {"region": "us-east-1", "type": "aws"}},
        {"metadata": {"name": "aws-ghost"}, "data": {"region": "eu-west-9", "type": "aws"}},
        {"metadata": {"name": "az-we"}, "data": {"region": "westeurope", "type": "azure"}},
        {"metadata": {"name": "az-ne"}, "data": {"region": "northeurope", "type": "azure"}},
    ]


@pytest.fixture
def snapshot_data() -> Dict[str, Any]:
    """Raw capability data as delivered by the graph provider."""
    return {
        "cloudProfiles": [_aws_profile(), _azure_profile(), _metal_profile(), _openstack_profile()],
        "seeds": _seeds(),
    }


@pytest.fixture
def snapshot(snapshot_data) -> CapabilitySnapshot:
    return CapabilitySnapshot.from_dict(snapshot_data)


@pytest.fixture
def dashboard_config() -> DashboardConfig:
    """Operator configuration with vendor hints and access restrictions."""
    return DashboardConfig(
        **{
            "vendorHints": [
                {"type": "warning", "message": "SUSE images are deprecated", "matchNames": ["suse-chost"]}
            ],
            "accessRestriction": {
                "noItemsText": "No access restrictions for ${region} in ${cloudProfile}",
                "items": [
                    {
                        "key": EU_ACCESS,
                        "display": {"visibleIf": True, "title": "EU Access"},
                        "input": {"title": "EU Access only"},
                        "options": [
                            {
                                "key": EU_ACCESS_ADDONS,
                                "display": {"visibleIf": False, "title": "Addons without EU access"},
                                "input": {"inverted": True},
                            },
                            {
                                "key": EU_ACCESS_NODES,
                                "display": {"visibleIf": False, "title": "Nodes without EU access"},
                                "input": {"inverted": True},
                            },
                        ],
                    },
                    {"key": OTHER_RESTRICTION, "display": {"visibleIf": False}},
                    {"key": "seed.gardener.cloud/unlabeled", "display": {"visibleIf": False}},
                ],
            },
            "defaultHibernationSchedule": {
                "evaluation": [{"start": "00 17 * * 1,2,3,4,5"}],
                "development": [{"start": "00 17 * * 1,2,3,4,5"}],
                "production": [],
            },
            "features": {"terminalEnabled": True, "projectTerminalShortcutsEnabled": True},
        }
    )


@pytest.fixture
def graph(snapshot, dashboard_config) -> CapabilityGraph:
    return CapabilityGraph(snapshot, dashboard_config)


@pytest.fixture
def engine(snapshot, dashboard_config) -> ResolutionEngine:
    return ResolutionEngine(snapshot=snapshot, config=dashboard_config)


@pytest.fixture
def now() -> datetime:
    """Fixed point in time for lifecycle decoration."""
    return NOW
