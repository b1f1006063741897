"""Container runtime defaults per Kubernetes version."""

from typing import List, Optional, Sequence, Tuple

from . import semver

# (minimum Kubernetes version, preferred runtime), newest first
DEFAULT_CRI_TABLE: List[Tuple[str, str]] = [
    ("1.22.0", "containerd"),
    ("0.0.0", "docker"),
]


class CriCompatibility:
    """Chooses the default container runtime for a Kubernetes version.

    The preferred runtime is the entry of the first table row whose
    minimum version is not greater than the Kubernetes version. If the
    image does not offer it, the image's first runtime is used.
    """

    def __init__(self, table: Optional[Sequence[Tuple[str, str]]] = None):
        self.table = list(table) if table is not None else list(DEFAULT_CRI_TABLE)

    def preferred(self, kubernetes_version: Optional[str]) -> Optional[str]:
        if not semver.is_valid(kubernetes_version):
            return None
        for minimum_version, cri_name in self.table:
            if semver.compare(kubernetes_version, minimum_version) >= 0:
                return cri_name
        return None

    def __call__(self, cri_names: Sequence[str], kubernetes_version: Optional[str]) -> Optional[str]:
        if not cri_names:
            return None
        preferred = self.preferred(kubernetes_version)
        if preferred in cri_names:
            return preferred
        return cri_names[0]


default_cri_name_by_kubernetes_version = CriCompatibility()
