"""Semantic version parsing, ordering and diffing.

Only strict semantic versions (``MAJOR.MINOR.PATCH`` with optional
pre-release and build metadata, optionally prefixed with ``v``) are
valid. Callers are expected to filter with :func:`is_valid` before
comparing. The helpers never raise: invalid versions order below every
valid one, diff as ``DiffKind.NONE`` and have no major/minor component.
"""

import re
from enum import Enum
from functools import cmp_to_key, lru_cache
from typing import Callable, List, NamedTuple, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

SEMVER_PATTERN = re.compile(
    r"^[=v]?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class DiffKind(str, Enum):
    """Most significant component in which two versions differ."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PREMAJOR = "premajor"
    PREMINOR = "preminor"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"
    NONE = "none"


class SemVer(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: Tuple[Union[int, str], ...]
    build: Optional[str]


@lru_cache(maxsize=1024)
def parse(version: Optional[str]) -> Optional[SemVer]:
    """Parse a version string, returning ``None`` when it is not valid semver."""
    if not isinstance(version, str):
        return None

    match = SEMVER_PATTERN.match(version.strip())
    if not match:
        return None

    prerelease: Tuple[Union[int, str], ...] = ()
    if match.group("prerelease"):
        prerelease = tuple(
            int(identifier) if identifier.isdigit() else identifier
            for identifier in match.group("prerelease").split(".")
        )

    return SemVer(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=prerelease,
        build=match.group("build"),
    )


def is_valid(version: Optional[str]) -> bool:
    """Check whether a string is a valid semantic version."""
    return parse(version) is not None


def _compare_identifiers(a: Union[int, str], b: Union[int, str]) -> int:
    # numeric identifiers always have lower precedence than alphanumeric ones
    if isinstance(a, int) and isinstance(b, str):
        return -1
    if isinstance(a, str) and isinstance(b, int):
        return 1
    return (a > b) - (a < b)


def _compare_prerelease(a: Tuple[Union[int, str], ...], b: Tuple[Union[int, str], ...]) -> int:
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in zip(a, b):
        result = _compare_identifiers(left, right)
        if result:
            return result
    return (len(a) > len(b)) - (len(a) < len(b))


def compare(a: str, b: str) -> int:
    """Compare by semver precedence: -1, 0 or 1. Build metadata is ignored."""
    left, right = parse(a), parse(b)
    if left is None or right is None:
        return (left is not None) - (right is not None)

    core_left = (left.major, left.minor, left.patch)
    core_right = (right.major, right.minor, right.patch)
    if core_left != core_right:
        return 1 if core_left > core_right else -1
    return _compare_prerelease(left.prerelease, right.prerelease)


def compare_descending(a: str, b: str) -> int:
    """Reverse ordering, newest first."""
    return compare(b, a)


def gt(a: str, b: str) -> bool:
    return compare(a, b) > 0


def diff_kind(a: str, b: str) -> DiffKind:
    """Return the most significant component in which two versions differ.

    When the higher version is a pre-release, a differing core component is
    reported as ``premajor``, ``preminor`` or ``prepatch``.
    """
    left, right = parse(a), parse(b)
    if left is None or right is None:
        return DiffKind.NONE

    higher = left if compare(a, b) >= 0 else right
    pre = bool(higher.prerelease)
    if left.major != right.major:
        return DiffKind.PREMAJOR if pre else DiffKind.MAJOR
    if left.minor != right.minor:
        return DiffKind.PREMINOR if pre else DiffKind.MINOR
    if left.patch != right.patch:
        return DiffKind.PREPATCH if pre else DiffKind.PATCH
    if left.prerelease != right.prerelease:
        return DiffKind.PRERELEASE
    return DiffKind.NONE


def major(version: str) -> Optional[int]:
    parsed = parse(version)
    return parsed.major if parsed else None


def minor(version: str) -> Optional[int]:
    parsed = parse(version)
    return parsed.minor if parsed else None


def sort_descending(items: List[T], key: Callable[[T], str]) -> List[T]:
    """Return a copy of ``items`` sorted newest version first."""
    return sorted(items, key=cmp_to_key(lambda x, y: compare_descending(key(x), key(y))))
