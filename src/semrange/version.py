# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from semrange.version import compare_versions, parse, sort_versions, valid, Version
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, NamedTuple, Tuple, Union

from ._structures import Infinity, InfinityType

__all__ = [
    "VERSION_PATTERN",
    "InvalidVersion",
    "Version",
    "compare_versions",
    "parse",
    "sort_versions",
    "valid",
]

PrereleaseIdentifier = Union[int, str]
PrereleaseType = Tuple[PrereleaseIdentifier, ...]
BuildType = Tuple[str, ...]
PrereleaseKey = Union[InfinityType, Tuple[Tuple[int, int, str], ...]]
CmpKey = Tuple[int, int, int, PrereleaseKey]
VersionComparisonMethod = Callable[[CmpKey, CmpKey], bool]

MAX_LENGTH = 256


class _Version(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: PrereleaseType
    build: BuildType


def parse(version: str) -> Version:
    """Parse the given version string.

    >>> parse('1.0.0-rc.1')
    <Version('1.0.0-rc.1')>

    :param version: The version string to parse.
    :raises InvalidVersion: When the version string is not a valid version.
    """
    return Version(version)


class InvalidVersion(ValueError):
    """Raised when a version string is not a valid semantic version.

    >>> Version("invalid")
    Traceback (most recent call last):
        ...
    semrange.version.InvalidVersion: Invalid version: 'invalid'
    """


# Numeric identifiers may not carry leading zeros, alphanumeric ones need at
# least one non-digit character.
_NUMERIC_IDENTIFIER = r"0|[1-9][0-9]*"
_PRERELEASE_IDENTIFIER = rf"(?:{_NUMERIC_IDENTIFIER}|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_IDENTIFIER = r"[0-9a-zA-Z-]+"

VERSION_PATTERN = rf"""
    v?
    (?P<major>{_NUMERIC_IDENTIFIER})
    \.
    (?P<minor>{_NUMERIC_IDENTIFIER})
    \.
    (?P<patch>{_NUMERIC_IDENTIFIER})
    (?:
        -
        (?P<prerelease>
            {_PRERELEASE_IDENTIFIER}
            (?:\.{_PRERELEASE_IDENTIFIER})*
        )
    )?
    (?:
        \+
        (?P<build>{_BUILD_IDENTIFIER}(?:\.{_BUILD_IDENTIFIER})*)
    )?
"""
"""
A string containing the regular expression used to match a valid version.

The pattern is not anchored at either end, and is intended for embedding in
larger expressions (for example, matching a version number as part of a file
name). The regular expression should be compiled with the ``re.VERBOSE`` flag.
"""


class Version:
    """This class abstracts handling of a project's versions.

    A :class:`Version` instance is comparison aware and can be compared and
    sorted using the standard Python interfaces. Build metadata is kept for
    display but never takes part in comparison or hashing.

    >>> v1 = Version("1.0.0-alpha")
    >>> v2 = Version("1.0.0")
    >>> v1
    <Version('1.0.0-alpha')>
    >>> v1 < v2
    True
    >>> v1 == v2
    False
    >>> Version("1.0.0+build.5") == v2
    True
    """

    _regex = re.compile(r"^\s*" + VERSION_PATTERN + r"\s*$", re.VERBOSE)
    _key: CmpKey

    def __init__(self, version: str) -> None:
        """Initialize a Version object.

        :param version:
            The string representation of a version which will be parsed and
            normalized before use.
        :raises InvalidVersion:
            If the ``version`` does not conform to the semantic versioning
            grammar, an :exc:`InvalidVersion` exception will be raised.
        """
        if not isinstance(version, str):
            raise InvalidVersion(f"Invalid version: {version!r}")
        if len(version) > MAX_LENGTH:
            raise InvalidVersion(
                f"Invalid version: longer than {MAX_LENGTH} characters"
            )

        # Validate the version and parse it into pieces
        match = self._regex.search(version)
        if not match:
            raise InvalidVersion(f"Invalid version: {version!r}")

        # Store the parsed out pieces of the version
        self._version = _Version(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=_parse_prerelease(match.group("prerelease")),
            build=_parse_build(match.group("build")),
        )

        # Generate a key which will be used for sorting
        self._key = _cmpkey(
            self._version.major,
            self._version.minor,
            self._version.patch,
            self._version.prerelease,
        )

    def __repr__(self) -> str:
        """A representation of the Version that shows all internal state.

        >>> Version('1.0.0')
        <Version('1.0.0')>
        """
        return f"<Version('{self}')>"

    def __str__(self) -> str:
        """A string representation of the version that can be round-tripped.

        >>> str(Version("v1.0.0-a.1+build.2"))
        '1.0.0-a.1+build.2'
        """
        parts = [self.public]

        # Build metadata
        if self._version.build:
            parts.append("+" + ".".join(self._version.build))

        return "".join(parts)

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s < o)

    def __le__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s <= o)

    def __eq__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s == o)

    def __ge__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s >= o)

    def __gt__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s > o)

    def __ne__(self, other: object) -> bool:
        return self._compare(other, lambda s, o: s != o)

    def _compare(self, other: object, method: VersionComparisonMethod) -> Any:
        if not isinstance(other, Version):
            return NotImplemented

        return method(self._key, other._key)

    @property
    def major(self) -> int:
        """The first item of the release segment.

        >>> Version("1.2.3").major
        1
        """
        return self._version.major

    @property
    def minor(self) -> int:
        """The second item of the release segment.

        >>> Version("1.2.3").minor
        2
        """
        return self._version.minor

    @property
    def patch(self) -> int:
        """The third item of the release segment.

        >>> Version("1.2.3").patch
        3
        """
        return self._version.patch

    @property
    def prerelease(self) -> PrereleaseType:
        """The prerelease identifiers of the version.

        Numeric identifiers are returned as integers.

        >>> Version("1.2.3").prerelease
        ()
        >>> Version("1.2.3-beta.4").prerelease
        ('beta', 4)
        """
        return self._version.prerelease

    @property
    def build(self) -> BuildType:
        """The build metadata identifiers of the version.

        >>> Version("1.2.3+exp.sha.5114f85").build
        ('exp', 'sha', '5114f85')
        """
        return self._version.build

    @property
    def public(self) -> str:
        """The public portion of the version, without build metadata.

        >>> Version("1.2.3-rc.1+abc").public
        '1.2.3-rc.1'
        """
        parts = [self.base_version]

        # Pre-release
        if self._version.prerelease:
            parts.append("-" + ".".join(str(x) for x in self._version.prerelease))

        return "".join(parts)

    @property
    def base_version(self) -> str:
        """The "base version" of the version.

        >>> Version("1.2.3-rc.1+abc").base_version
        '1.2.3'
        """
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def release(self) -> tuple[int, int, int]:
        """The ``(major, minor, patch)`` triple of the version."""
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        """Whether this version is a pre-release.

        >>> Version("1.2.3").is_prerelease
        False
        >>> Version("1.2.3-0").is_prerelease
        True
        """
        return bool(self._version.prerelease)


def _parse_prerelease(prerelease: str | None) -> PrereleaseType:
    """
    Takes a string like alpha.1.beta and turns it into ("alpha", 1, "beta").
    """
    if prerelease is None:
        return ()
    return tuple(
        int(part) if part.isdigit() else part for part in prerelease.split(".")
    )


def _parse_build(build: str | None) -> BuildType:
    if build is None:
        return ()
    return tuple(build.split("."))


def _cmpkey(
    major: int,
    minor: int,
    patch: int,
    prerelease: PrereleaseType,
) -> CmpKey:
    # Versions without a pre-release should sort after those with one.
    if not prerelease:
        _prerelease: PrereleaseKey = Infinity
    else:
        # - Numeric identifiers sort before alpha numeric ones
        # - Numeric identifiers sort numerically
        # - Alpha numeric identifiers sort lexicographically by code point
        # - Shorter sequences sort before longer ones when the prefixes
        #   match exactly
        _prerelease = tuple(
            (0, i, "") if isinstance(i, int) else (1, 0, i) for i in prerelease
        )

    return major, minor, patch, _prerelease


def compare_versions(left: Version | str, right: Version | str) -> int:
    """Compare two versions, returning ``-1``, ``0`` or ``1``.

    >>> compare_versions("1.0.0", "2.0.0")
    -1
    >>> compare_versions("1.0.0+a", "1.0.0+b")
    0
    """
    if not isinstance(left, Version):
        left = Version(left)
    if not isinstance(right, Version):
        right = Version(right)

    if left == right:
        return 0
    return -1 if left < right else 1


def valid(version: Version | str) -> str | None:
    """Return the canonical public form of ``version``, or ``None``.

    >>> valid("v1.2.3+build")
    '1.2.3'
    >>> valid("1.2") is None
    True
    """
    if isinstance(version, Version):
        return version.public
    try:
        return Version(version).public
    except InvalidVersion:
        return None


def sort_versions(
    versions: Iterable[Version | str], *, reverse: bool = False
) -> list[Version]:
    """Parse and sort ``versions`` in ascending (or descending) order."""
    parsed = (v if isinstance(v, Version) else Version(v) for v in versions)
    return sorted(parsed, reverse=reverse)
