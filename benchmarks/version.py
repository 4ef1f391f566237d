from __future__ import annotations

from semrange.version import InvalidVersion, Version, sort_versions

from . import add_attributes

VERSIONS = [
    "0.0.0",
    "0.1.0",
    "1.0.0",
    "1.2.3",
    "v1.2.3",
    "10.20.30",
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-0.3.7",
    "1.0.0-x.7.z.92",
    "1.0.0-alpha+001",
    "1.0.0+20130313144700",
    "1.0.0-beta+exp.sha.5114f85",
    "2.0.0-rc.1+build.123",
    "999999999.999999999.999999999",
    "1.2",
    "01.2.3",
    "1.2.3-",
    "not a version",
]


def valid_version(v: str) -> Version | None:
    try:
        return Version(v)
    except InvalidVersion:
        return None


class TimeVersionParsingSuite:
    @add_attributes(pretty_name="Version constructor")
    def time_constructor(self) -> None:
        for v in VERSIONS:
            try:
                Version(v)
            except InvalidVersion:  # noqa: PERF203
                pass


class TimeVersionSuite:
    def setup(self) -> None:
        self.versions = [ver for v in VERSIONS if (ver := valid_version(v))]

    def time_str(self) -> None:
        for version in self.versions:
            str(version)

    def time_hash(self) -> None:
        for version in self.versions:
            hash(version)

    @add_attributes(pretty_name="sort_versions")
    def time_sort(self) -> None:
        sort_versions(self.versions)
