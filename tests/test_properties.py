# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""Property based tests for version ordering and range operations."""

from __future__ import annotations

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from semrange.ranges import (
    Options,
    Range,
    intersects,
    max_satisfying,
    satisfies,
    valid_range,
)
from semrange.version import Version, compare_versions, sort_versions

numbers = st.integers(min_value=0, max_value=12)
alphanumeric = st.builds(
    str.__add__,
    st.sampled_from(string.ascii_lowercase),
    st.text(alphabet=string.ascii_lowercase + string.digits + "-", max_size=5),
)
prerelease_identifiers = st.one_of(numbers.map(str), alphanumeric)
build_identifiers = st.text(
    alphabet=string.ascii_letters + string.digits + "-", min_size=1, max_size=5
)
wildcards = st.sampled_from(["x", "X", "*"])


@st.composite
def version_strings(draw, prerelease: bool = True, build: bool = True) -> str:
    text = f"{draw(numbers)}.{draw(numbers)}.{draw(numbers)}"
    if prerelease and draw(st.booleans()):
        identifiers = draw(st.lists(prerelease_identifiers, min_size=1, max_size=3))
        text += "-" + ".".join(identifiers)
    if build and draw(st.booleans()):
        identifiers = draw(st.lists(build_identifiers, min_size=1, max_size=2))
        text += "+" + ".".join(identifiers)
    return text


versions = version_strings().map(Version)


@st.composite
def partials(draw) -> str:
    """A version where trailing segments may be missing or wildcards."""
    length = draw(st.integers(min_value=1, max_value=3))
    parts = []
    for _ in range(length):
        if parts and parts[-1] in ("x", "X", "*"):
            parts.append(draw(wildcards))
        else:
            parts.append(draw(st.one_of(numbers.map(str), wildcards)))
    text = ".".join(parts)
    if length == 3 and all(p.isdigit() for p in parts) and draw(st.booleans()):
        text += "-" + draw(prerelease_identifiers)
    return text


@st.composite
def comparator_sets(draw) -> str:
    if draw(st.integers(min_value=0, max_value=4)) == 0:
        return f"{draw(partials())} - {draw(partials())}"
    prefixes = st.sampled_from(["", "=", ">", ">=", "<", "<=", "~", "~>", "^"])
    simple = st.builds(lambda prefix, partial: prefix + partial, prefixes, partials())
    return " ".join(draw(st.lists(simple, min_size=0, max_size=3)))


ranges = st.lists(comparator_sets(), min_size=1, max_size=3).map(" || ".join)


@given(versions, versions)
def test_ordering_is_total(left, right):
    assert [left < right, left == right, left > right].count(True) == 1


@given(versions, versions)
def test_compare_versions_is_antisymmetric(left, right):
    assert compare_versions(left, right) == -compare_versions(right, left)


@given(versions, versions, versions)
def test_ordering_is_transitive(a, b, c):
    if a <= b and b <= c:
        assert a <= c


@given(versions)
def test_str_round_trips(version):
    assert Version(str(version)) == version
    assert str(Version(str(version))) == str(version)


@given(version_strings(build=False), build_identifiers)
def test_build_metadata_is_ignored(version, build):
    assert Version(version) == Version(f"{version}+{build}")
    assert hash(Version(version)) == hash(Version(f"{version}+{build}"))


@given(st.lists(versions, max_size=10))
def test_sort_versions_is_ordered(items):
    ordered = sort_versions(items)
    assert all(a <= b for a, b in zip(ordered, ordered[1:]))
    assert sorted(ordered, reverse=True) == sort_versions(items, reverse=True)


@given(ranges)
def test_canonical_range_is_stable(text):
    canonical = valid_range(text)
    assert canonical is not None
    assert valid_range(canonical) == canonical
    assert Range(canonical) == Range(text)


@given(versions, versions)
def test_satisfies_agrees_with_ordering(version, bound):
    options = Options(include_prerelease=True)
    assert satisfies(version, f">={bound}", options) is (version >= bound)
    assert satisfies(version, f"<{bound}", options) is (version < bound)
    assert satisfies(version, str(bound), options) is (version == bound)


@given(version_strings(prerelease=False), ranges)
def test_prerelease_option_only_widens(version, text):
    if satisfies(version, text):
        assert satisfies(version, text, {"include_prerelease": True})


@given(ranges, ranges)
def test_intersects_is_commutative(left, right):
    assert intersects(left, right) is intersects(right, left)


@given(versions, ranges, ranges)
def test_shared_version_means_intersection(version, left, right):
    if satisfies(version, left) and satisfies(version, right):
        assert intersects(left, right)


@settings(max_examples=50)
@given(st.lists(versions, max_size=8), ranges)
def test_max_satisfying_is_maximal(items, text):
    found = max_satisfying(items, text)
    matching = [v for v in items if satisfies(v, text)]
    if found is None:
        assert matching == []
    else:
        assert found in matching
        assert all(v <= found for v in matching)


@given(version_strings(build=False), ranges)
def test_single_version_hyphen_range_acts_as_pin(version, text):
    hyphen = f"{version} - {version}"
    assert intersects(hyphen, text) is intersects(version, text)
    assert intersects(hyphen, text, {"include_prerelease": True}) is intersects(
        version, text, {"include_prerelease": True}
    )
