"""
Lexical types for the template engine.

Defines token types, tag kinds and lexical/syntax errors
with position information for precise diagnostics.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from ..errors import ParseError


class TokenType(enum.Enum):
    """Token types produced by the lexer."""

    # Literal text, never spans a line terminator
    TEXT = "TEXT"

    # \n or \r\n
    NEWLINE = "NEWLINE"

    # Anything between a pair of delimiters
    TAG = "TAG"

    EOF = "EOF"


class TagKind(enum.Enum):
    """Tag kinds, determined by the sigil after the opening delimiter."""

    VARIABLE = "VARIABLE"              # {{name}}
    UNESCAPED = "UNESCAPED"            # {{{name}}} or {{&name}}
    SECTION_OPEN = "SECTION_OPEN"      # {{#name}}
    INVERTED_OPEN = "INVERTED_OPEN"    # {{^name}}
    SECTION_CLOSE = "SECTION_CLOSE"    # {{/name}}
    COMMENT = "COMMENT"                # {{! text }}
    PARTIAL = "PARTIAL"                # {{>name}}
    SET_DELIMITER = "SET_DELIMITER"    # {{=<% %>=}}

    @property
    def can_stand_alone(self) -> bool:
        """Interpolation tags always render inline; everything else may own a line."""
        return self not in (TagKind.VARIABLE, TagKind.UNESCAPED)


@dataclass(frozen=True)
class Delimiters:
    """Opening and closing tag delimiters."""
    open: str = "{{"
    close: str = "}}"


DEFAULT_DELIMITERS = Delimiters()


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error diagnostics.
    """
    type: TokenType
    value: str           # Text, line terminator, or trimmed tag content
    position: int        # Offset in the source text
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)
    end: int = -1        # Offset just past the token
    kind: Optional[TagKind] = None
    delimiters: Delimiters = DEFAULT_DELIMITERS
    indent: str = ""     # Leading whitespace of a standalone partial

    @property
    def is_tag(self) -> bool:
        return self.type == TokenType.TAG

    @property
    def is_blank_text(self) -> bool:
        return self.type == TokenType.TEXT and self.value.strip(" \t") == ""

    def __repr__(self) -> str:
        label = self.kind.name if self.kind else self.type.name
        return f"Token({label}, {self.value!r}, {self.line}:{self.column})"


class LexerError(ParseError):
    """Lexical analysis error."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column
        self.position = position


class ParserError(ParseError):
    """Syntax analysis error."""

    def __init__(self, message: str, token: Token):
        super().__init__(f"{message} at {token.line}:{token.column}")
        self.token = token
        self.line = token.line
        self.column = token.column
        self.position = token.position


__all__ = [
    "TokenType",
    "TagKind",
    "Delimiters",
    "DEFAULT_DELIMITERS",
    "Token",
    "LexerError",
    "ParserError",
]
