"""Derived lifecycle views of versions.

These records are computed from capability data and a point in time.
They are never persisted and must be recomputed when either changes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .cloud_profile import CriEntry, VersionClassification
from .config import VendorHint

UNKNOWN_EXPIRED_TIMESTAMP = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Severity(str, Enum):
    """Operator facing urgency of an expiring version."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ClassifiedVersion(BaseModel):
    """Kubernetes version decorated with lifecycle flags."""

    version: str
    classification: Optional[VersionClassification] = None
    expiration_date: Optional[datetime] = None
    is_preview: bool = False
    is_supported: bool = False
    is_deprecated: bool = False
    is_expired: bool = False
    expiration_date_string: Optional[str] = None


class ClassifiedMachineImage(ClassifiedVersion):
    """One version of a machine image, decorated with vendor and lifecycle data."""

    key: str
    name: str
    cri: List[CriEntry] = Field(default_factory=list)
    vendor_name: Optional[str] = None
    icon: Optional[str] = None
    vendor_hint: Optional[VendorHint] = None


class ExpirationStatus(BaseModel):
    """Expiration warning for a shoot's Kubernetes version."""

    version: Optional[str] = None
    expiration_date: datetime
    is_valid_termination_date: bool
    severity: Severity


class WorkerGroupExpiration(BaseModel):
    """Expiration warning for the machine image of a worker group."""

    worker_name: str
    name: Optional[str] = None
    version: Optional[str] = None
    expiration_date: Optional[datetime] = None
    is_valid_termination_date: bool
    severity: Severity
    image: Optional[ClassifiedMachineImage] = None
