"""Version parsing and bumping utilities.

Versions in .toc files are plain ``major.minor.patch`` strings. Comparison is
numeric per component (``1.10.0`` is higher than ``1.2.3``), never textual.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

import semver

from .models import BumpKind, TocFile, VersionBump

VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")
_LEADING_INT = re.compile(r"\d+")

OnComputed = Callable[[VersionBump, BumpKind], None]


def is_valid_version(version_str: str) -> bool:
    """True for strict three-integer versions such as ``2.0.0``."""
    return VERSION_RE.match(version_str) is not None


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"

    Only the first 3 components are used. A component without leading digits
    counts as 0, so a malformed value found while scanning sorts low instead
    of aborting the run.
    """
    numbers: list[int] = []
    for part in version_str.strip().split(".")[:3]:
        match = _LEADING_INT.match(part)
        numbers.append(int(match.group()) if match else 0)
    while len(numbers) < 3:
        numbers.append(0)
    return semver.Version(*numbers)


def bump(version_str: str, kind: BumpKind = "patch") -> str:
    """Increment one component of a version and return it as a string.

    Examples:
        bump("1.4.2", "major") → "2.0.0"
        bump("1.4.2", "minor") → "1.5.0"
        bump("1.4.2") → "1.4.3"
    """
    current = parse_version(version_str)
    if kind == "major":
        return str(current.bump_major())
    if kind == "minor":
        return str(current.bump_minor())
    return str(current.bump_patch())


def highest(files: Iterable[TocFile]) -> TocFile | None:
    """Return the file carrying the highest version.

    When several files share the maximum the first one wins. Returns None for
    an empty input.
    """
    best: TocFile | None = None
    best_version: semver.Version | None = None
    for f in files:
        version = parse_version(f.version)
        if best_version is None or version > best_version:
            best, best_version = f, version
    return best


def next_version(
    files: Iterable[TocFile],
    kind: BumpKind = "patch",
    on_computed: OnComputed | None = None,
) -> VersionBump | None:
    """Compute the successor of the highest version among ``files``.

    Args:
        files: Files to consider, usually one addon's .toc files.
        kind: Component to increment.
        on_computed: Called with the result before it is returned, so callers
            can show the user what is about to happen.

    Returns:
        VersionBump from the highest current version to the next one, or None
        when ``files`` is empty.
    """
    top = highest(files)
    if top is None:
        return None
    result = VersionBump(old=top.version, new=bump(top.version, kind))
    if on_computed is not None:
        on_computed(result, kind)
    return result
