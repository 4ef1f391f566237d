# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
from __future__ import annotations


class InfinityType:
    """Compares greater than any other object.

    Stands in for the pre-release part of a release's sort key, so that
    ``1.0.0`` sorts after every ``1.0.0-*``.
    """

    def __repr__(self) -> str:
        return "Infinity"

    def __hash__(self) -> int:
        return hash(repr(self))

    def __lt__(self, other: object) -> bool:
        return False

    def __le__(self, other: object) -> bool:
        return isinstance(other, self.__class__)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__)

    def __gt__(self, other: object) -> bool:
        return not isinstance(other, self.__class__)

    def __ge__(self, other: object) -> bool:
        return True


Infinity = InfinityType()
