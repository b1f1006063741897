"""Version ordering, lifecycle classification and update paths."""

from .cache import MISSING, NO_UPDATES, UpdateAvailabilityCache
from .classifier import decorate_classification_object, first_item_matching_version_classification
from .cri import CriCompatibility, default_cri_name_by_kubernetes_version
from .semver import DiffKind

__all__ = [
    "MISSING",
    "NO_UPDATES",
    "UpdateAvailabilityCache",
    "decorate_classification_object",
    "first_item_matching_version_classification",
    "CriCompatibility",
    "default_cri_name_by_kubernetes_version",
    "DiffKind",
]
