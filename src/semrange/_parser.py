# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

# The docstring for each parse function contains the grammar for the rule.
# The grammar uses a simple EBNF-inspired syntax:
#
# - Uppercase names are tokens
# - Lowercase names are rules (parsed with a parse_* function)
# - Parentheses are used for grouping
# - A | means either-or
# - A * means 0 or more
# - A + means 1 or more
# - A ? means 0 or 1

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from ._tokenizer import PARTIAL_PATTERN, Token, Tokenizer
from .version import Version

_partial_regex = re.compile(PARTIAL_PATTERN, re.VERBOSE)


class Constraint(NamedTuple):
    """A single desugared ``operator`` / ``version`` pair."""

    operator: str
    version: Version


class Partial(NamedTuple):
    major: Optional[str]
    minor: Optional[str]
    patch: Optional[str]
    prerelease: Optional[str]
    build: Optional[str]


def format_version(major: int, minor: int, patch: int, prerelease: str = "") -> str:
    version = f"{major}.{minor}.{patch}"
    if prerelease:
        version += f"-{prerelease}"
    return version


def _is_x(part: Optional[str]) -> bool:
    return part is None or part in ("x", "X", "*")


def _int(part: Optional[str]) -> int:
    # Only called on segments already known not to be wildcards.
    assert part is not None
    return int(part)


def _constraint(
    operator: str, major: int, minor: int, patch: int, prerelease: str = ""
) -> Constraint:
    return Constraint(
        operator, Version(format_version(major, minor, patch, prerelease))
    )


def _full(partial: Partial) -> Version:
    text = format_version(
        _int(partial.major),
        _int(partial.minor),
        _int(partial.patch),
        partial.prerelease or "",
    )
    if partial.build:
        text += f"+{partial.build}"
    return Version(text)


def _to_partial(token: Token) -> Partial:
    match = _partial_regex.fullmatch(token.text)
    # The tokenizer only produces PARTIAL tokens that match this pattern.
    assert match is not None, token
    return Partial(
        major=match.group("major"),
        minor=match.group("minor"),
        patch=match.group("patch"),
        prerelease=match.group("prerelease"),
        build=match.group("build"),
    )


def parse_comparator_set(source: str) -> List[Constraint]:
    """
    comparator_set = hyphen_range | simple* END
    hyphen_range = PARTIAL HYPHEN PARTIAL END
    """
    tokens = Tokenizer(source.strip())
    constraints: List[Constraint] = []

    if tokens.match("PARTIAL"):
        start = _to_partial(tokens.read())
        if tokens.try_read("HYPHEN"):
            end = _to_partial(
                tokens.read("PARTIAL", error_message="Expected a version after ' - '")
            )
            tokens.expect("END", error_message="Expected end of hyphen range")
            return _expand_hyphen(start, end)
        constraints.extend(_expand_xrange("", start))

    while not tokens.match("END"):
        constraints.extend(_parse_simple(tokens))

    return constraints


def _parse_simple(tokens: Tokenizer) -> List[Constraint]:
    """
    simple = TILDE PARTIAL | CARET PARTIAL | OP? PARTIAL
    """
    if tokens.try_read("TILDE"):
        return _expand_tilde(_parse_partial(tokens))
    if tokens.try_read("CARET"):
        return _expand_caret(_parse_partial(tokens))

    operator = tokens.try_read("OP")
    return _expand_xrange(operator.text if operator else "", _parse_partial(tokens))


def _parse_partial(tokens: Tokenizer) -> Partial:
    return _to_partial(
        tokens.read("PARTIAL", error_message="Expected a version")
    )


def _expand_hyphen(start: Partial, end: Partial) -> List[Constraint]:
    """``1.2 - 3.4`` => ``>=1.2.0 <3.5.0``"""
    constraints = []

    if _is_x(start.major):
        pass
    elif _is_x(start.minor):
        constraints.append(_constraint(">=", _int(start.major), 0, 0))
    elif _is_x(start.patch):
        constraints.append(
            _constraint(">=", _int(start.major), _int(start.minor), 0)
        )
    else:
        constraints.append(Constraint(">=", _full(start)))

    if _is_x(end.major):
        pass
    elif _is_x(end.minor):
        constraints.append(_constraint("<", _int(end.major) + 1, 0, 0))
    elif _is_x(end.patch):
        constraints.append(
            _constraint("<", _int(end.major), _int(end.minor) + 1, 0)
        )
    else:
        constraints.append(Constraint("<=", _full(end)))

    return constraints


def _expand_xrange(operator: str, partial: Partial) -> List[Constraint]:
    """``1.2.x`` => ``>=1.2.0 <1.3.0``, ``<=1.2`` => ``<1.3.0``, ``*`` => any"""
    any_major = _is_x(partial.major)
    any_minor = any_major or _is_x(partial.minor)
    any_patch = any_minor or _is_x(partial.patch)

    if not any_patch:
        return [Constraint(operator or "=", _full(partial))]

    if any_major:
        if operator in (">", "<"):
            # Nothing is above or below every version.
            return [_constraint("<", 0, 0, 0, "0")]
        return []

    major = _int(partial.major)
    minor = 0 if any_minor else _int(partial.minor)

    if operator == ">":
        if any_minor:
            return [_constraint(">=", major + 1, 0, 0)]
        return [_constraint(">=", major, minor + 1, 0)]
    if operator == "<=":
        # <=0.7.x is actually <0.8.0, since any 0.7.x should pass.
        if any_minor:
            return [_constraint("<", major + 1, 0, 0)]
        return [_constraint("<", major, minor + 1, 0)]
    if operator in (">=", "<"):
        return [_constraint(operator, major, minor, 0)]

    if any_minor:
        return [
            _constraint(">=", major, 0, 0),
            _constraint("<", major + 1, 0, 0),
        ]
    return [
        _constraint(">=", major, minor, 0),
        _constraint("<", major, minor + 1, 0),
    ]


def _expand_tilde(partial: Partial) -> List[Constraint]:
    """
    ``~1`` => ``>=1.0.0 <2.0.0``, ``~1.2`` and ``~1.2.3`` stay below ``1.3.0``.
    """
    if _is_x(partial.major):
        return []

    major = _int(partial.major)
    if _is_x(partial.minor):
        return [
            _constraint(">=", major, 0, 0),
            _constraint("<", major + 1, 0, 0),
        ]

    minor = _int(partial.minor)
    if _is_x(partial.patch):
        lower = _constraint(">=", major, minor, 0)
    else:
        lower = Constraint(">=", _full(partial))
    return [lower, _constraint("<", major, minor + 1, 0)]


def _expand_caret(partial: Partial) -> List[Constraint]:
    """
    Allow changes that do not modify the left-most non-zero element of
    ``major.minor.patch``.
    """
    if _is_x(partial.major):
        return []

    major = _int(partial.major)
    if _is_x(partial.minor):
        return [
            _constraint(">=", major, 0, 0),
            _constraint("<", major + 1, 0, 0),
        ]

    minor = _int(partial.minor)
    if _is_x(partial.patch):
        lower = _constraint(">=", major, minor, 0)
        if major == 0:
            return [lower, _constraint("<", 0, minor + 1, 0)]
        return [lower, _constraint("<", major + 1, 0, 0)]

    patch = _int(partial.patch)
    lower = Constraint(">=", _full(partial))
    if major == 0 and minor == 0:
        return [lower, _constraint("<", 0, 0, patch + 1)]
    if major == 0:
        return [lower, _constraint("<", 0, minor + 1, 0)]
    return [lower, _constraint("<", major + 1, 0, 0)]
