# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""Command line access to version comparison and range matching.

Every subcommand reports its answer through the exit status: ``0`` when the
answer is yes, ``1`` when it is no and ``2`` when the input is invalid.
"""

from __future__ import annotations

import argparse
import logging
import operator
import sys
from typing import Callable, NoReturn, Sequence

from .ranges import Options, Range, intersects, valid_range
from .version import InvalidVersion, Version

_OPERATORS: dict[str, Callable[[Version, Version], bool]] = {
    "eq": operator.eq,
    "==": operator.eq,
    "ne": operator.ne,
    "!=": operator.ne,
    "lt": operator.lt,
    "<": operator.lt,
    "le": operator.le,
    "<=": operator.le,
    "gt": operator.gt,
    ">": operator.gt,
    "ge": operator.ge,
    ">=": operator.ge,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semrange",
        description="Compare semantic versions and test them against ranges.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="compare two versions")
    compare.add_argument("left")
    compare.add_argument("operator", choices=list(_OPERATORS))
    compare.add_argument("right")

    satisfies = subparsers.add_parser(
        "satisfies", help="check whether a version satisfies a range"
    )
    satisfies.add_argument("version")
    satisfies.add_argument("range")

    valid = subparsers.add_parser(
        "valid-range", help="print the canonical form of a range"
    )
    valid.add_argument("range")

    overlap = subparsers.add_parser(
        "intersects", help="check whether two ranges share a version"
    )
    overlap.add_argument("left")
    overlap.add_argument("right")

    for sub in (satisfies, valid, overlap):
        sub.add_argument(
            "--include-prerelease",
            action="store_true",
            help="let pre-release versions satisfy any range",
        )

    return parser


def main(argv: Sequence[str] | None = None) -> NoReturn:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    options = Options(include_prerelease=getattr(args, "include_prerelease", False))

    if args.command == "compare":
        try:
            left, right = Version(args.left), Version(args.right)
        except InvalidVersion as exc:
            parser.error(str(exc))
        sys.exit(0 if _OPERATORS[args.operator](left, right) else 1)

    if args.command == "satisfies":
        try:
            version = Version(args.version)
        except InvalidVersion as exc:
            parser.error(str(exc))
        sys.exit(0 if Range(args.range, options).contains(version) else 1)

    if args.command == "valid-range":
        canonical = valid_range(args.range, options)
        if canonical is None:
            parser.error(f"Invalid range: {args.range!r}")
        print(canonical)
        sys.exit(0)

    sys.exit(0 if intersects(args.left, args.right, options) else 1)


if __name__ == "__main__":
    main()
