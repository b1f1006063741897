"""Kubernetes quantity helpers for volume sizes."""

import re
from typing import Iterable, Optional

from .logger import get_logger

logger = get_logger(__name__)

SIZE_PATTERN = re.compile(r"^\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>[KMGTPE]i?|k)?\s*$")

UNIT_FACTORS = {
    None: 1,
    "k": 1000,
    "K": 1000,
    "M": 1000**2,
    "G": 1000**3,
    "T": 1000**4,
    "P": 1000**5,
    "E": 1000**6,
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
    "Ei": 1024**6,
}


def parse_size(value: Optional[str]) -> Optional[int]:
    """Convert a quantity such as ``"50Gi"`` into bytes.

    Returns ``None`` for empty or unparsable values.
    """
    if value is None:
        return None

    match = SIZE_PATTERN.match(str(value))
    if not match:
        logger.warning(f"Could not parse size '{value}'")
        return None

    amount = float(match.group("amount"))
    return int(amount * UNIT_FACTORS[match.group("unit")])


def max_size(sizes: Iterable[Optional[str]]) -> Optional[str]:
    """Return the largest quantity (by byte value) keeping its original spelling."""
    largest = None
    largest_bytes = None
    for size in sizes:
        size_bytes = parse_size(size)
        if size_bytes is None:
            continue
        if largest_bytes is None or size_bytes > largest_bytes:
            largest, largest_bytes = size, size_bytes
    return largest
