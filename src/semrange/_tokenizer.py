# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Generator, NoReturn, Optional, Tuple, Union

# A version in which trailing segments may be omitted or written as a
# wildcard (``x``, ``X`` or ``*``). Prerelease and build metadata may only
# follow a patch segment.
_XR = r"0|[1-9][0-9]*|x|X|\*"
_PRERELEASE_IDENTIFIER = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_IDENTIFIER = r"[0-9a-zA-Z-]+"

PARTIAL_PATTERN = rf"""
    v?
    (?P<major>{_XR})
    (?:
        \.(?P<minor>{_XR})
        (?:
            \.(?P<patch>{_XR})
            (?:-(?P<prerelease>
                {_PRERELEASE_IDENTIFIER}(?:\.{_PRERELEASE_IDENTIFIER})*
            ))?
            (?:\+(?P<build>
                {_BUILD_IDENTIFIER}(?:\.{_BUILD_IDENTIFIER})*
            ))?
        )?
    )?
"""


@dataclass
class Token:
    name: str
    text: str
    position: int

    def matches(self, *names: str) -> bool:
        return not names or self.name in names


class ParserSyntaxError(Exception):
    """The provided source text could not be parsed correctly."""

    def __init__(
        self,
        message: str,
        *,
        source: str,
        span: Tuple[int, int],
    ) -> None:
        self.span = span
        self.message = message
        self.source = source

        super().__init__()

    def __str__(self) -> str:
        marker = " " * self.span[0] + "^" * (self.span[1] - self.span[0] + 1)
        return "\n    ".join([self.message, self.source, marker])


DEFAULT_RULES: "Dict[str, Union[str, re.Pattern[str]]]" = {
    # A hyphen range separator must be surrounded by whitespace, otherwise it
    # would be the start of a prerelease.
    "HYPHEN": r"\s+-\s+",
    "TILDE": r"\s*~>?",
    "CARET": r"\s*\^",
    "OP": r"\s*(>=|<=|>|<|=)",
    # Versions are separated from whatever follows by whitespace.
    "PARTIAL": re.compile(r"\s*" + PARTIAL_PATTERN + r"(?=\s|$)", re.VERBOSE),
}


class Tokenizer:
    """Stream of tokens for a LL(1) parser.

    Provides methods to examine the next token to be read, and to read it
    (advance to the next token).
    """

    def __init__(
        self,
        source: str,
        *,
        rules: "Dict[str, Union[str, re.Pattern[str]]]" = DEFAULT_RULES,
    ) -> None:
        self.source = source
        self.rules = {name: re.compile(pattern) for name, pattern in rules.items()}
        self.next_token: Optional[Token] = None
        self.generator = self._tokenize()
        self.position = 0

    def peek(self) -> Token:
        """
        Return the next token to be read.
        """
        if not self.next_token:
            self.next_token = next(self.generator)
        return self.next_token

    def match(self, *name: str) -> bool:
        """
        Return True if the next token matches the given arguments.
        """
        token = self.peek()
        return token.matches(*name)

    def expect(self, *name: str, error_message: str) -> Token:
        """
        Raise SyntaxError if the next token doesn't match given arguments.
        """
        token = self.peek()
        if not token.matches(*name):
            self.raise_syntax_error(
                message=error_message,
                span_start=token.position,
                span_end=max(token.position, len(self.source) - 1),
            )
        return token

    def read(self, *name: str, error_message: str = "") -> Token:
        """Return the next token and advance to the next token.

        Raise SyntaxError if the token doesn't match.
        """
        result = self.expect(*name, error_message=error_message)
        self.next_token = None
        return result

    def try_read(self, *name: str) -> Optional[Token]:
        """read() if the next token matches the given arguments.

        Do nothing if it does not match.
        """
        if self.match(*name):
            return self.read()
        return None

    def raise_syntax_error(
        self,
        message: str,
        *,
        span_start: Optional[int] = None,
        span_end: Optional[int] = None,
    ) -> NoReturn:
        """Raise ParserSyntaxError at the given position."""
        span = (
            self.position if span_start is None else span_start,
            self.position if span_end is None else span_end,
        )
        raise ParserSyntaxError(
            message,
            source=self.source,
            span=span,
        )

    def _make_token(self, name: str, text: str) -> Token:
        """
        Make a token with the current position.
        """
        return Token(name, text, self.position)

    def _tokenize(self) -> Generator[Token, Token, None]:
        """
        The main generator of tokens.
        """
        while self.position < len(self.source):
            for name, expression in self.rules.items():
                match = expression.match(self.source, self.position)
                if match:
                    token_text = match[0]

                    yield self._make_token(name, token_text.strip())
                    self.position += len(token_text)
                    break
            else:
                self.raise_syntax_error(message="Unrecognized token")
        yield self._make_token("END", "")
