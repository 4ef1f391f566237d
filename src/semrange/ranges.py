# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from semrange.ranges import (
        Comparator, Range, intersects, max_satisfying, min_satisfying,
        min_version, satisfies, to_comparators, valid_range,
    )
    from semrange.version import Version
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
import re
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from ._parser import Constraint, format_version, parse_comparator_set
from ._tokenizer import ParserSyntaxError
from .version import VERSION_PATTERN, InvalidVersion, Version

__all__ = [
    "Comparator",
    "ComparatorSet",
    "InvalidComparator",
    "Options",
    "Range",
    "filter_versions",
    "intersects",
    "max_satisfying",
    "min_satisfying",
    "min_version",
    "satisfies",
    "to_comparators",
    "valid_range",
]

logger = logging.getLogger(__name__)

UnparsedVersion = Union[Version, str]
UnparsedVersionVar = TypeVar("UnparsedVersionVar", bound=UnparsedVersion)
CallableOperator = Callable[[Version, Version], bool]
OptionsLike = Union["Options", Mapping[str, Any], None]


@dataclasses.dataclass(frozen=True)
class Options:
    """Knobs shared by every range operation.

    :param include_prerelease:
        Let pre-release versions satisfy ranges that do not mention a
        pre-release of the same ``major.minor.patch``.
    """

    include_prerelease: bool = False


_DEFAULT_OPTIONS = Options()


def _coerce_options(options: object) -> Options:
    # Mappings may use either the Python or the JavaScript spelling; any other
    # value means "use the defaults".
    if isinstance(options, Options):
        return options
    if isinstance(options, Mapping):
        value = options.get("include_prerelease", options.get("includePrerelease"))
        return Options(include_prerelease=bool(value))
    return _DEFAULT_OPTIONS


def _coerce_version(version: UnparsedVersion) -> Version:
    if not isinstance(version, Version):
        version = Version(version)
    return version


class InvalidComparator(ValueError):
    """
    Raised when attempting to create a :class:`Comparator` with a comparator
    string that is invalid.

    >>> Comparator("~>1.0")
    Traceback (most recent call last):
        ...
    semrange.ranges.InvalidComparator: Invalid comparator: '~>1.0'
    """


class Comparator:
    """This class abstracts handling of a single operator and version pair.

    A comparator is the primitive every range is expanded into; shorthand
    syntax such as ``^1.2`` is only understood by :class:`Range`.

    >>> Comparator(">= v1.2.3")
    <Comparator('>=1.2.3')>
    >>> Comparator("=1.2.3")
    <Comparator('1.2.3')>
    >>> Comparator("*").test("9.9.9")
    True
    """

    _regex = re.compile(
        r"""
        ^
        \s*
        (?:
            (?P<any>\*?)
            |
            (?P<operator>(<=|>=|<|>|=)?)
            \s*
            (?P<version>"""
        + VERSION_PATTERN
        + r"""
            )
        )
        \s*
        $
        """,
        re.VERBOSE,
    )

    _operators = {
        "=": "equal",
        "<": "less_than",
        "<=": "less_than_equal",
        ">": "greater_than",
        ">=": "greater_than_equal",
    }

    _spec: Tuple[str, Optional[Version]]

    def __init__(self, spec: str = "") -> None:
        """Initialize a Comparator instance.

        :param spec:
            The string representation of a comparator which will be parsed and
            normalized before use. The empty string and ``*`` match any
            version.
        :raises InvalidComparator:
            If the given comparator is not parseable.
        """
        match = self._regex.search(spec)
        if not match:
            raise InvalidComparator(f"Invalid comparator: {spec!r}")

        if match.group("version") is None:
            self._spec = ("", None)
        else:
            try:
                version = Version(match.group("version"))
            except InvalidVersion as exc:
                raise InvalidComparator(f"Invalid comparator: {spec!r}") from exc
            self._spec = (match.group("operator") or "=", version)

    @classmethod
    def _from_constraint(cls, constraint: Constraint) -> Comparator:
        comparator = cls.__new__(cls)
        comparator._spec = (constraint.operator, constraint.version)
        return comparator

    def __repr__(self) -> str:
        """A representation of the comparator that shows all internal state.

        >>> Comparator('<2.0.0')
        <Comparator('<2.0.0')>
        """
        return f"<{self.__class__.__name__}({str(self)!r})>"

    def __str__(self) -> str:
        """A string representation of the comparator that can be round-tripped.

        >>> str(Comparator('>=1.0.0+build'))
        '>=1.0.0'
        >>> str(Comparator('= 1.0.0'))
        '1.0.0'
        """
        operator, version = self._spec
        if version is None:
            return ""
        return f"{'' if operator == '=' else operator}{version.public}"

    def __hash__(self) -> int:
        return hash(self._spec)

    def __eq__(self, other: object) -> bool:
        """Whether or not the two Comparator-like objects are equal.

        :param other: The other object to check against.

        >>> Comparator(">=1.2.3") == ">= v1.2.3"
        True
        >>> Comparator("=1.2.3") == "1.2.3"
        True
        """
        if isinstance(other, str):
            try:
                other = self.__class__(str(other))
            except InvalidComparator:
                return NotImplemented
        elif not isinstance(other, self.__class__):
            return NotImplemented

        return self._spec == other._spec

    @property
    def operator(self) -> str:
        """The operator of this comparator, ``""`` when it matches anything.

        >>> Comparator("1.2.3").operator
        '='
        """
        return self._spec[0]

    @property
    def version(self) -> Optional[Version]:
        """The version of this comparator, ``None`` when it matches anything.

        >>> Comparator("<1.2.3").version
        <Version('1.2.3')>
        """
        return self._spec[1]

    @property
    def is_any(self) -> bool:
        return self._spec[1] is None

    def _get_operator(self, op: str) -> CallableOperator:
        operator_callable: CallableOperator = getattr(
            self, f"_compare_{self._operators[op]}"
        )
        return operator_callable

    def _compare_equal(self, prospective: Version, spec: Version) -> bool:
        return prospective == spec

    def _compare_less_than(self, prospective: Version, spec: Version) -> bool:
        return prospective < spec

    def _compare_less_than_equal(self, prospective: Version, spec: Version) -> bool:
        return prospective <= spec

    def _compare_greater_than(self, prospective: Version, spec: Version) -> bool:
        return prospective > spec

    def _compare_greater_than_equal(
        self, prospective: Version, spec: Version
    ) -> bool:
        return prospective >= spec

    def _matches(self, prospective: Version) -> bool:
        # Plain ordering, without the pre-release gate.
        operator, version = self._spec
        if version is None:
            return True
        return self._get_operator(operator)(prospective, version)

    def test(self, version: UnparsedVersion, options: OptionsLike = None) -> bool:
        """Return whether ``version`` satisfies this comparator.

        Pre-release versions only satisfy a comparator whose own version is a
        pre-release of the same ``major.minor.patch``, unless
        ``include_prerelease`` is set.

        >>> Comparator(">=1.0.0").test("1.1.0")
        True
        >>> Comparator(">=1.0.0").test("1.1.0-beta")
        False
        >>> Comparator(">=1.0.0").test("1.1.0-beta", {"include_prerelease": True})
        True
        """
        return ComparatorSet((self,)).test(
            _coerce_version(version), _coerce_options(options)
        )

    def intersects(self, other: Comparator, options: OptionsLike = None) -> bool:
        """Return whether some version satisfies both comparators.

        >>> Comparator(">1.0.0").intersects(Comparator("<=1.0.0"))
        False
        """
        if not isinstance(other, Comparator):
            raise TypeError("a Comparator is required")
        return ComparatorSet((self,)).intersects(ComparatorSet((other,)), options)


# The canonical "matches nothing" comparator; no version sorts below 0.0.0-0.
_NEVER = Comparator._from_constraint(Constraint("<", Version("0.0.0-0")))
_LOWEST = Version("0.0.0-0")


class _Bound(NamedTuple):
    version: Version
    inclusive: bool


class _Interval(NamedTuple):
    lower: _Bound
    upper: Optional[_Bound]
    pinned: Optional[Version]


def _tighter_lower(candidate: _Bound, current: _Bound) -> bool:
    if candidate.version != current.version:
        return candidate.version > current.version
    return current.inclusive and not candidate.inclusive


def _tighter_upper(candidate: _Bound, current: Optional[_Bound]) -> bool:
    if current is None:
        return True
    if candidate.version != current.version:
        return candidate.version < current.version
    return current.inclusive and not candidate.inclusive


def _above(version: Version, bound: _Bound) -> bool:
    return version > bound.version or (bound.inclusive and version == bound.version)


def _below(version: Version, bound: Optional[_Bound]) -> bool:
    if bound is None:
        return True
    return version < bound.version or (bound.inclusive and version == bound.version)


def _reduce(comparators: Iterable[Comparator]) -> Optional[_Interval]:
    """Collapse ANDed comparators into one interval, or ``None`` if empty."""
    lower = _Bound(_LOWEST, True)
    upper: Optional[_Bound] = None
    pinned: Optional[Version] = None

    for comparator in comparators:
        operator, version = comparator.operator, comparator.version
        if version is None:
            continue
        if operator == "=":
            if pinned is not None and pinned != version:
                return None
            pinned = version
        elif operator in (">", ">="):
            bound = _Bound(version, operator == ">=")
            if _tighter_lower(bound, lower):
                lower = bound
        else:
            bound = _Bound(version, operator == "<=")
            if _tighter_upper(bound, upper):
                upper = bound

    if pinned is not None:
        if not (_above(pinned, lower) and _below(pinned, upper)):
            return None
    elif upper is not None:
        if lower.version > upper.version:
            return None
        if lower.version == upper.version:
            if not (lower.inclusive and upper.inclusive):
                return None
            # >=v <=v leaves exactly v.
            pinned = lower.version

    return _Interval(lower, upper, pinned)


class ComparatorSet:
    """A conjunction of :class:`Comparator` objects.

    A set without comparators places no constraint on the version (other than
    the pre-release gate) and renders as the empty string.

    >>> Range(">=1.2.7 <1.3.0").sets[0]
    <ComparatorSet('>=1.2.7 <1.3.0')>
    """

    def __init__(
        self, comparators: Iterable[Comparator] = (), *, malformed: bool = False
    ) -> None:
        self._comparators = tuple(c for c in comparators if not c.is_any)
        self._malformed = malformed

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({str(self)!r})>"

    def __str__(self) -> str:
        return " ".join(str(c) for c in self._comparators)

    def __hash__(self) -> int:
        return hash(self._comparators)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparatorSet):
            return NotImplemented
        return self._comparators == other._comparators

    def __len__(self) -> int:
        return len(self._comparators)

    def __iter__(self) -> Iterator[Comparator]:
        return iter(self._comparators)

    @property
    def malformed(self) -> bool:
        """Whether this set was produced from text that could not be parsed."""
        return self._malformed

    def test(self, version: Version, options: OptionsLike = None) -> bool:
        options = _coerce_options(options)

        if not all(c._matches(version) for c in self._comparators):
            return False

        if version.is_prerelease and not options.include_prerelease:
            # A pre-release is only allowed in when one of the comparators
            # names a pre-release of the very same major.minor.patch.
            return any(
                c.version is not None
                and c.version.is_prerelease
                and c.version.release == version.release
                for c in self._comparators
            )

        return True

    def is_satisfiable(self) -> bool:
        return _reduce(self._comparators) is not None

    def intersects(self, other: ComparatorSet, options: OptionsLike = None) -> bool:
        interval = _reduce(itertools.chain(self._comparators, other._comparators))
        if interval is None:
            return False
        if interval.pinned is not None:
            # Only one version is left, it has to get past both gates.
            return self.test(interval.pinned, options) and other.test(
                interval.pinned, options
            )
        return True


def _parse_comparator_set(source: str) -> ComparatorSet:
    try:
        constraints = parse_comparator_set(source)
    except (ParserSyntaxError, InvalidVersion) as exc:
        logger.debug("Comparator set %r can never be satisfied: %s", source, exc)
        return ComparatorSet((_NEVER,), malformed=True)
    return ComparatorSet(Comparator._from_constraint(c) for c in constraints)


class Range:
    """This class abstracts handling of a set of comparator sets.

    Comparator sets are separated by ``||`` and any one of them may match;
    the comparators inside a set are separated by whitespace and must all
    match. Shorthand syntax (``^``, ``~``, ``x`` ranges and ``A - B``) is
    expanded into plain comparators.

    >>> Range("^1.2.3")
    <Range('>=1.2.3 <2.0.0')>
    >>> "1.4.0" in Range("1.2.x || >=1.4.0")
    True
    >>> str(Range("blerg"))
    '<0.0.0-0'
    """

    _split = re.compile(r"\s*\|\|\s*")

    def __init__(
        self, range: Union[str, Range] = "", options: OptionsLike = None
    ) -> None:
        """Initialize a Range instance.

        :param range:
            The string representation of a range which will be parsed and
            normalized before use. Malformed comparator sets are never an
            error, they simply cannot be satisfied. An existing :class:`Range`
            may be passed to re-use its comparator sets.
        :param options:
            An :class:`Options` instance or a mapping with an
            ``include_prerelease`` key. Other values select the defaults.
        :raises TypeError:
            If ``range`` is neither a string nor a :class:`Range`.
        """
        if isinstance(range, Range):
            self._raw: str = range._raw
            self._sets: Tuple[ComparatorSet, ...] = range._sets
            self._options = (
                range._options if options is None else _coerce_options(options)
            )
            return

        if not isinstance(range, str):
            raise TypeError(f"Invalid range: {range!r}")

        self._raw = range
        self._sets = tuple(
            _parse_comparator_set(source) for source in self._split.split(range.strip())
        )
        self._options = _coerce_options(options)

    def __repr__(self) -> str:
        """A representation of the range that shows all internal state.

        >>> Range('>=1.0.0 <2.0.0 || 3.x')
        <Range('>=1.0.0 <2.0.0||>=3.0.0 <4.0.0')>
        >>> Range('*', {"include_prerelease": True})
        <Range('', include_prerelease=True)>
        """
        pre = (
            ", include_prerelease=True" if self._options.include_prerelease else ""
        )
        return f"<{self.__class__.__name__}({str(self)!r}{pre})>"

    def __str__(self) -> str:
        """A string representation of the range that can be round-tripped.

        >>> str(Range(">= v1.2.3 || 1.2.3 - 2"))
        '>=1.2.3||>=1.2.3 <3.0.0'
        """
        return "||".join(str(s) for s in self._sets)

    def __hash__(self) -> int:
        return hash((str(self), self._options))

    def __eq__(self, other: object) -> bool:
        """Whether or not the two Range-like objects are equal.

        >>> Range("~1.2") == ">=1.2.0 <1.3.0"
        True
        """
        if isinstance(other, str):
            other = Range(other, self._options)
        elif not isinstance(other, Range):
            return NotImplemented

        return str(self) == str(other) and self._options == other._options

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[ComparatorSet]:
        return iter(self._sets)

    def __contains__(self, item: UnparsedVersion) -> bool:
        return self.contains(item)

    @property
    def raw(self) -> str:
        """The text this range was parsed from."""
        return self._raw

    @property
    def sets(self) -> Tuple[ComparatorSet, ...]:
        return self._sets

    @property
    def options(self) -> Options:
        return self._options

    @property
    def is_malformed(self) -> bool:
        """Whether any comparator set failed to parse.

        >>> Range("1.x || blerg").is_malformed
        True
        """
        return any(s.malformed for s in self._sets)

    def contains(
        self, item: Optional[UnparsedVersion], options: OptionsLike = None
    ) -> bool:
        """Return whether or not the item is contained in this range.

        :param item:
            The item to check for, which can be a version string or a
            :class:`Version` instance.
        :param options:
            Overrides the options this range was created with.
        :raises InvalidVersion:
            If ``item`` is a string that is not a valid version.

        >>> Range(">=1.2.3").contains("1.3.0")
        True
        >>> Range(">=1.2.3").contains("1.3.0-rc.1")
        False
        >>> Range(">=1.2.3").contains("1.3.0-rc.1", {"include_prerelease": True})
        True
        """
        if not item:
            return False

        opts = self._options if options is None else _coerce_options(options)
        version = _coerce_version(item)
        return any(s.test(version, opts) for s in self._sets)

    def test(self, version: Optional[UnparsedVersion]) -> bool:
        """Return whether ``version`` satisfies this range."""
        return self.contains(version)

    def intersects(
        self, other: Union[Range, str, None], options: OptionsLike = None
    ) -> bool:
        """Return whether some version satisfies both ranges.

        :raises TypeError: If ``other`` is neither a :class:`Range` nor a string.

        >>> Range("1.5.x").intersects(Range("<1.5.0 || >=1.6.0"))
        False
        >>> Range("*").intersects("0.0.1")
        True
        """
        opts = self._options if options is None else _coerce_options(options)
        if isinstance(other, str):
            other = Range(other, opts)
        elif not isinstance(other, Range):
            raise TypeError("a Range is required")

        return any(
            mine.intersects(theirs, opts)
            for mine in self._sets
            for theirs in other._sets
        )

    def filter(
        self,
        iterable: Iterable[UnparsedVersionVar],
        options: OptionsLike = None,
    ) -> Iterator[UnparsedVersionVar]:
        """Filter items in the given iterable, that match the range.

        :param iterable:
            An iterable that can contain version strings and :class:`Version`
            instances. The items in the iterable will be filtered according to
            the range, keeping their order.
        :param options:
            Overrides the options this range was created with.

        >>> list(Range("^1.2").filter(["1.1.0", "1.2.0", "1.9.9", "2.0.0"]))
        ['1.2.0', '1.9.9']
        """
        for item in iterable:
            if self.contains(item, options):
                yield item


def _to_range(range: Union[Range, str], options: OptionsLike) -> Range:
    if isinstance(range, Range) and options is None:
        return range
    return Range(range, options)


def satisfies(
    version: UnparsedVersion, range: Union[Range, str], options: OptionsLike = None
) -> bool:
    """Return whether ``version`` satisfies ``range``.

    >>> satisfies("1.2.3", "1.0.0 - 2.0.0")
    True
    >>> satisfies("2.0.0-pre", "^1.2.3")
    False
    """
    return _to_range(range, options).contains(version)


def valid_range(
    range: Union[Range, str], options: OptionsLike = None
) -> Optional[str]:
    """Return the canonical form of ``range``, or ``None`` if it is invalid.

    >>> valid_range("1.0.0 - 2.0.0")
    '>=1.0.0 <=2.0.0'
    >>> valid_range("")
    '*'
    >>> valid_range("blerg") is None
    True
    """
    if not isinstance(range, (Range, str)):
        return None
    parsed = _to_range(range, options)
    if parsed.is_malformed:
        return None
    return str(parsed) or "*"


def intersects(
    left: Union[Range, str, None],
    right: Union[Range, str, None],
    options: OptionsLike = None,
) -> bool:
    """Return whether the two ranges have any version in common.

    >>> intersects("1.x", "<=1.0.0")
    True
    """
    if not isinstance(left, (Range, str)) or not isinstance(right, (Range, str)):
        raise TypeError("a Range is required")
    return _to_range(left, options).intersects(_to_range(right, options), options)


def filter_versions(
    versions: Iterable[UnparsedVersionVar],
    range: Union[Range, str],
    options: OptionsLike = None,
) -> List[UnparsedVersionVar]:
    """Return the items of ``versions`` that satisfy ``range``, in order."""
    return list(_to_range(range, options).filter(versions))


def max_satisfying(
    versions: Iterable[UnparsedVersion],
    range: Union[Range, str],
    options: OptionsLike = None,
) -> Optional[Version]:
    """Return the highest version that satisfies ``range``, if any.

    >>> max_satisfying(["1.2.3", "1.2.4", "2.0.0"], "~1.2")
    <Version('1.2.4')>
    """
    parsed = _to_range(range, options)
    candidates = (_coerce_version(v) for v in versions)
    return max((v for v in candidates if parsed.contains(v)), default=None)


def min_satisfying(
    versions: Iterable[UnparsedVersion],
    range: Union[Range, str],
    options: OptionsLike = None,
) -> Optional[Version]:
    """Return the lowest version that satisfies ``range``, if any.

    >>> min_satisfying(["1.2.3", "1.2.4", "2.0.0"], "~1.2")
    <Version('1.2.3')>
    """
    parsed = _to_range(range, options)
    candidates = (_coerce_version(v) for v in versions)
    return min((v for v in candidates if parsed.contains(v)), default=None)


def _lower_bound(comparator: Comparator) -> Optional[Version]:
    operator, version = comparator.operator, comparator.version
    if version is None or operator in ("<", "<="):
        return None
    if operator != ">":
        return Version(version.public)
    if not version.is_prerelease:
        return Version(format_version(version.major, version.minor, version.patch + 1))

    # 1.2.3-beta < 1.2.3-beta.0
    prerelease = ".".join(str(i) for i in (*version.prerelease, 0))
    return Version(
        format_version(version.major, version.minor, version.patch, prerelease)
    )


def min_version(
    range: Union[Range, str], options: OptionsLike = None
) -> Optional[Version]:
    """Return the lowest version that could satisfy ``range``.

    >>> min_version(">1.2.3 <2")
    <Version('1.2.4')>
    >>> min_version("^0.1.2 || >=2")
    <Version('0.1.2')>
    >>> min_version("blerg") is None
    True
    """
    parsed = _to_range(range, options)

    for candidate in (Version("0.0.0"), _LOWEST):
        if parsed.contains(candidate):
            return candidate

    found = []
    for comparators in parsed.sets:
        lowest: Optional[Version] = None
        for comparator in comparators:
            bound = _lower_bound(comparator)
            if bound is not None and (lowest is None or bound > lowest):
                lowest = bound
        if lowest is not None and comparators.test(lowest, parsed.options):
            found.append(lowest)

    return min(found, default=None)


def to_comparators(
    range: Union[Range, str], options: OptionsLike = None
) -> List[List[str]]:
    """Return the comparator strings of every comparator set of ``range``.

    >>> to_comparators("~1.2 || 3")
    [['>=1.2.0', '<1.3.0'], ['>=3.0.0', '<4.0.0']]
    """
    return [[str(c) for c in s] for s in _to_range(range, options).sets]
