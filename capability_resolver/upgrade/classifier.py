"""Version classification rules shared by Kubernetes versions and machine images."""

from datetime import datetime, timezone
from typing import Any, Optional, Sequence, Type, TypeVar

from ..model.classification import ClassifiedVersion
from ..model.cloud_profile import ExpirableVersion, VersionClassification

V = TypeVar("V", bound=ClassifiedVersion)
T = TypeVar("T")

EXPIRATION_DATE_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_expiration_date(expiration_date: Optional[datetime]) -> Optional[str]:
    if expiration_date is None:
        return None
    return expiration_date.strftime(EXPIRATION_DATE_FORMAT)


def is_expired(expiration_date: Optional[datetime], now: datetime) -> bool:
    return expiration_date is not None and as_utc(now) > as_utc(expiration_date)


def is_valid_termination_date(expiration_date: Optional[datetime], now: datetime) -> bool:
    """A termination date is valid when it lies in the future."""
    return expiration_date is not None and as_utc(expiration_date) > as_utc(now)


def decorate_classification_object(
    record: ExpirableVersion,
    now: datetime,
    model: Type[V] = ClassifiedVersion,
    **extra: Any,
) -> V:
    """Attach lifecycle flags to a raw version record.

    An expired version is never supported, whatever its classification says.
    """
    classification = record.classification
    expired = is_expired(record.expiration_date, now)
    return model(
        version=record.version,
        classification=classification,
        expiration_date=record.expiration_date,
        is_preview=classification == VersionClassification.PREVIEW,
        is_supported=not expired
        and (classification is None or classification == VersionClassification.SUPPORTED),
        is_deprecated=classification == VersionClassification.DEPRECATED,
        is_expired=expired,
        expiration_date_string=format_expiration_date(record.expiration_date),
        **extra,
    )


def first_item_matching_version_classification(items: Sequence[T]) -> Optional[T]:
    """Pick the default version of an already sorted list.

    Returns the first supported item, else the first item without a
    classification, else the first item of the list.
    """
    for item in items:
        if item.classification == VersionClassification.SUPPORTED:
            return item

    for item in items:
        if item.classification is None:
            return item

    return items[0] if items else None
