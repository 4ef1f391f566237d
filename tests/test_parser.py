# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

import pytest

from semrange._parser import format_version, parse_comparator_set
from semrange._tokenizer import ParserSyntaxError, Tokenizer


def _tokens(source):
    tokenizer = Tokenizer(source)
    tokens = []
    while not tokenizer.match("END"):
        token = tokenizer.read()
        tokens.append((token.name, token.text))
    return tokens


def _expand(source):
    return [(c.operator, str(c.version)) for c in parse_comparator_set(source)]


class TestTokenizer:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("", []),
            ("1.2.3", [("PARTIAL", "1.2.3")]),
            ("v1.2.3-beta.1+build", [("PARTIAL", "v1.2.3-beta.1+build")]),
            (
                "1.2.3 - 2",
                [("PARTIAL", "1.2.3"), ("HYPHEN", "-"), ("PARTIAL", "2")],
            ),
            (
                "~>1.2 ^2 >=3.x <4",
                [
                    ("TILDE", "~>"),
                    ("PARTIAL", "1.2"),
                    ("CARET", "^"),
                    ("PARTIAL", "2"),
                    ("OP", ">="),
                    ("PARTIAL", "3.x"),
                    ("OP", "<"),
                    ("PARTIAL", "4"),
                ],
            ),
            ("> 1.*", [("OP", ">"), ("PARTIAL", "1.*")]),
            ("=X", [("OP", "="), ("PARTIAL", "X")]),
        ],
    )
    def test_tokens(self, source, expected):
        assert _tokens(source) == expected

    def test_try_read(self):
        tokenizer = Tokenizer("^1")
        assert tokenizer.try_read("TILDE") is None
        assert tokenizer.try_read("CARET").text == "^"
        assert tokenizer.try_read("PARTIAL").text == "1"
        assert tokenizer.match("END")

    @pytest.mark.parametrize(
        "source",
        ["1.2.3-", "01.2.3", "1.2.3.4", ">=1.2.3<2", "1.2-beta", "blerg", "!1"],
    )
    def test_unrecognized_token(self, source):
        with pytest.raises(ParserSyntaxError, match="Unrecognized token"):
            _tokens(source)


class TestParserSyntaxError:
    @pytest.mark.parametrize(
        ("source", "message", "span"),
        [
            ("1.2.3 -", "Unrecognized token", (5, 5)),
            ("1 - 2 - 3", "Expected end of hyphen range", (5, 8)),
            ("^", "Expected a version", (1, 1)),
            (">=~1.2.3", "Expected a version", (2, 7)),
            ("1.2.3 - >2", "Expected a version after ' - '", (8, 9)),
        ],
    )
    def test_error_details(self, source, message, span):
        with pytest.raises(ParserSyntaxError) as excinfo:
            parse_comparator_set(source)

        error = excinfo.value
        assert error.message == message
        assert error.source == source
        assert error.span == span

    def test_str_points_at_span(self):
        with pytest.raises(ParserSyntaxError) as excinfo:
            parse_comparator_set("1 - 2 - 3")

        assert str(excinfo.value) == (
            "Expected end of hyphen range\n    1 - 2 - 3\n         ^^^^"
        )


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ((1, 2, 3), "1.2.3"),
        ((0, 0, 0, "0"), "0.0.0-0"),
        ((1, 2, 3, "beta.1"), "1.2.3-beta.1"),
    ],
)
def test_format_version(args, expected):
    assert format_version(*args) == expected


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        # Whitespace only
        ("", []),
        ("   ", []),
        # Hyphen ranges
        ("1.2.3 - 2.3.4", [(">=", "1.2.3"), ("<=", "2.3.4")]),
        ("1.2 - 2.3.4", [(">=", "1.2.0"), ("<=", "2.3.4")]),
        ("1 - 2.3.4", [(">=", "1.0.0"), ("<=", "2.3.4")]),
        ("1.2.3 - 2.3", [(">=", "1.2.3"), ("<", "2.4.0")]),
        ("1.2.3 - 2", [(">=", "1.2.3"), ("<", "3.0.0")]),
        ("* - 2", [("<", "3.0.0")]),
        ("1.2.3 - *", [(">=", "1.2.3")]),
        ("* - x", []),
        ("1.2.3+b - 2.3.4-rc.1+b", [(">=", "1.2.3+b"), ("<=", "2.3.4-rc.1+b")]),
        # X-ranges
        ("*", []),
        ("x.x.x", []),
        (">=*", []),
        ("<=X", []),
        ("=*", []),
        (">*", [("<", "0.0.0-0")]),
        ("<*", [("<", "0.0.0-0")]),
        ("1.x", [(">=", "1.0.0"), ("<", "2.0.0")]),
        ("1.2.*", [(">=", "1.2.0"), ("<", "1.3.0")]),
        ("=1", [(">=", "1.0.0"), ("<", "2.0.0")]),
        (">1", [(">=", "2.0.0")]),
        (">1.2", [(">=", "1.3.0")]),
        (">=1", [(">=", "1.0.0")]),
        (">=1.2", [(">=", "1.2.0")]),
        ("<1", [("<", "1.0.0")]),
        ("<1.2", [("<", "1.2.0")]),
        ("<=1", [("<", "2.0.0")]),
        ("<=1.2", [("<", "1.3.0")]),
        ("1.x.3", [(">=", "1.0.0"), ("<", "2.0.0")]),
        # Full versions keep their operator
        ("1.2.3", [("=", "1.2.3")]),
        ("=v1.2.3", [("=", "1.2.3")]),
        ("<=1.2.3-rc.1", [("<=", "1.2.3-rc.1")]),
        # Tilde ranges
        ("~1", [(">=", "1.0.0"), ("<", "2.0.0")]),
        ("~1.2", [(">=", "1.2.0"), ("<", "1.3.0")]),
        ("~1.2.3", [(">=", "1.2.3"), ("<", "1.3.0")]),
        ("~>1.2.3", [(">=", "1.2.3"), ("<", "1.3.0")]),
        ("~0.0.1", [(">=", "0.0.1"), ("<", "0.1.0")]),
        ("~1.2.3-beta.2", [(">=", "1.2.3-beta.2"), ("<", "1.3.0")]),
        ("~*", []),
        ("~1.x", [(">=", "1.0.0"), ("<", "2.0.0")]),
        # Caret ranges
        ("^1.2.3", [(">=", "1.2.3"), ("<", "2.0.0")]),
        ("^0.2.3", [(">=", "0.2.3"), ("<", "0.3.0")]),
        ("^0.0.3", [(">=", "0.0.3"), ("<", "0.0.4")]),
        ("^1.2.3-beta.2", [(">=", "1.2.3-beta.2"), ("<", "2.0.0")]),
        ("^0.0.3-beta", [(">=", "0.0.3-beta"), ("<", "0.0.4")]),
        ("^1.2.x", [(">=", "1.2.0"), ("<", "2.0.0")]),
        ("^0.0.x", [(">=", "0.0.0"), ("<", "0.1.0")]),
        ("^0.0", [(">=", "0.0.0"), ("<", "0.1.0")]),
        ("^1.x", [(">=", "1.0.0"), ("<", "2.0.0")]),
        ("^0.x", [(">=", "0.0.0"), ("<", "1.0.0")]),
        ("^*", []),
        # Several comparators
        (
            ">=1.2.7 <1.3.0",
            [(">=", "1.2.7"), ("<", "1.3.0")],
        ),
        (
            "~1.2 >=1.2.5",
            [(">=", "1.2.0"), ("<", "1.3.0"), (">=", "1.2.5")],
        ),
        (
            "1.x ^1.2 1.2.3",
            [
                (">=", "1.0.0"),
                ("<", "2.0.0"),
                (">=", "1.2.0"),
                ("<", "2.0.0"),
                ("=", "1.2.3"),
            ],
        ),
    ],
)
def test_parse_comparator_set(source, expected):
    assert _expand(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "1.2.3 - 2.0.0 - 3.0.0",
        ">=1.2.3 - 2.0.0",
        "1.2.3 - 2.0.0 <3",
        "~",
        "^^1",
        ">=",
        "~>=1",
        "= = 1",
    ],
)
def test_parse_comparator_set_invalid(source):
    with pytest.raises(ParserSyntaxError):
        parse_comparator_set(source)
