from __future__ import annotations

from semrange.ranges import Range, intersects, max_satisfying

from . import add_attributes

RANGES = [
    "*",
    "1.2.3",
    ">=1.2.3 <2.0.0",
    "^1.2.3",
    "^0.0.3",
    "~1.2",
    "~>3.2.1",
    "1.x || >=2.5.0 || 5.0.0 - 7.2.3",
    "1.2.3-pre+asdf - 2.4.3-pre+asdf",
    "<=0.7.x",
    ">1.2 <1.5.0-beta || ^2",
    "blerg",
]

VERSIONS = [
    "0.0.1",
    "1.2.3",
    "1.2.4-beta.1",
    "1.3.0",
    "2.0.0",
    "2.5.1",
    "3.2.2",
    "6.0.0",
]


class TimeRangeSuite:
    def setup(self) -> None:
        self.ranges = [Range(r) for r in RANGES]

    @add_attributes(pretty_name="Range constructor")
    def time_constructor(self) -> None:
        for r in RANGES:
            Range(r)

    @add_attributes(pretty_name="Range contains")
    def time_contains(self) -> None:
        for r in self.ranges:
            r.contains("1.2.4")

    @add_attributes(pretty_name="Range str")
    def time_str(self) -> None:
        for r in self.ranges:
            str(r)

    @add_attributes(pretty_name="intersects")
    def time_intersects(self) -> None:
        for left in self.ranges:
            for right in self.ranges:
                intersects(left, right)

    @add_attributes(pretty_name="max_satisfying")
    def time_max_satisfying(self) -> None:
        for r in self.ranges:
            max_satisfying(VERSIONS, r)
