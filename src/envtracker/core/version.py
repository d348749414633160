"""
Semantic Version Utilities

Provides parsing and next-version resolution for deployment versions
(MAJOR.MINOR.PATCH, no prefix).
"""

import re
from dataclasses import dataclass

from envtracker.domain.errors import InvalidVersionFormatError, InvalidVersionTagError

BUMP_TYPES = ("major", "minor", "patch")
DEFAULT_VERSION = "1.0.0"

_SEMVER_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """Semantic version (MAJOR.MINOR.PATCH)"""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump_major(self) -> "SemanticVersion":
        """Bump major version and reset minor/patch"""
        return SemanticVersion(self.major + 1, 0, 0)

    def bump_minor(self) -> "SemanticVersion":
        """Bump minor version and reset patch"""
        return SemanticVersion(self.major, self.minor + 1, 0)

    def bump_patch(self) -> "SemanticVersion":
        """Bump patch version"""
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    def bump(self, bump_type: str) -> "SemanticVersion":
        if bump_type == "major":
            return self.bump_major()
        if bump_type == "minor":
            return self.bump_minor()
        return self.bump_patch()


BASELINE = SemanticVersion(0, 0, 0)


def is_literal_version(value: str) -> bool:
    """Return True when value is a plain X.Y.Z version string"""
    return _SEMVER_PATTERN.fullmatch(value) is not None


def is_bump_keyword(value: str) -> bool:
    return value.lower() in BUMP_TYPES


def parse_semantic_version(version_str: str) -> SemanticVersion:
    """Parse semantic version string

    Args:
        version_str: Version string (e.g., "0.3.0", "1.2.3")

    Returns:
        SemanticVersion object

    Raises:
        InvalidVersionFormatError: If version string is not three non-negative integers

    Example:
        >>> parse_semantic_version("0.3.0")
        SemanticVersion(major=0, minor=3, patch=0)
    """
    match = _SEMVER_PATTERN.fullmatch(version_str) if version_str else None
    if not match:
        raise InvalidVersionFormatError(
            message=f"Invalid version format: {version_str}. Expected MAJOR.MINOR.PATCH (e.g., 1.0.0)",
            code="invalid_version_format",
        )
    return SemanticVersion(int(match.group(1)), int(match.group(2)), int(match.group(3)))


def validate_version_tag(version_tag: str) -> str:
    """Check a requested tag before any storage or git access

    Returns:
        The tag, unchanged

    Raises:
        InvalidVersionTagError: If the tag is neither a bump keyword nor X.Y.Z
    """
    if not version_tag or not (is_literal_version(version_tag) or is_bump_keyword(version_tag)):
        raise InvalidVersionTagError(
            message=(
                f"Invalid version tag: {version_tag!r}. "
                "Use major, minor, patch or a semantic version (X.Y.Z, e.g., 1.2.3)"
            ),
            code="invalid_version_tag",
        )
    return version_tag


def next_version(current_version: str, version_tag: str, is_first_version: bool = False) -> str:
    """Get the next version for an environment

    Args:
        current_version: Latest stored version (e.g., "1.3.2")
        version_tag: "major", "minor", "patch" (any case) or a literal X.Y.Z
        is_first_version: True when the environment has no record yet; bumps
            then start from 0.0.0 instead of current_version

    Returns:
        Next version string

    Example:
        >>> next_version("1.3.2", "minor")
        "1.4.0"
        >>> next_version("1.0.0", "patch", is_first_version=True)
        "0.0.1"
    """
    validate_version_tag(version_tag)
    if is_literal_version(version_tag):
        return version_tag

    base = BASELINE if is_first_version else parse_semantic_version(current_version)
    return str(base.bump(version_tag.lower()))
