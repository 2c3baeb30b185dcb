"""
Standalone-line whitespace pass.

Runs between lexing and parsing. A line that holds a single structural tag
(section, inverted section, closing tag, comment, partial or set-delimiter)
surrounded only by spaces and tabs belongs to the tag: its leading
whitespace and its line terminator are dropped from the output.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from .tokens import TagKind, Token, TokenType


class StandaloneFilter:
    """
    Removes whitespace owned by standalone tags from a token stream.

    Tokens are grouped into lines by NEWLINE tokens; a tag spanning several
    physical lines (multi-line comment) is still a single token and so
    belongs to one logical line.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens

    def apply(self) -> List[Token]:
        result: List[Token] = []
        line: List[Token] = []

        for token in self.tokens:
            if token.type == TokenType.NEWLINE:
                result.extend(self._finish_line(line, token))
                line = []
            elif token.type == TokenType.EOF:
                result.extend(self._finish_line(line, None))
                result.append(token)
                line = []
            else:
                line.append(token)

        if line:
            result.extend(self._finish_line(line, None))

        return result

    def _finish_line(self, line: List[Token], newline: Optional[Token]) -> List[Token]:
        tag = self._standalone_tag(line)
        if tag is None:
            return line + [newline] if newline is not None else line

        if tag.kind == TagKind.PARTIAL:
            # Whitespace before a standalone partial indents every line of the partial
            leading = []
            for token in line:
                if token is tag:
                    break
                leading.append(token.value)
            tag = replace(tag, indent="".join(leading))

        return [tag]

    @staticmethod
    def _standalone_tag(line: List[Token]) -> Optional[Token]:
        tags = [token for token in line if token.is_tag]
        if len(tags) != 1:
            return None

        tag = tags[0]
        if not tag.kind.can_stand_alone:
            return None

        if all(token is tag or token.is_blank_text for token in line):
            return tag
        return None


def strip_standalone(tokens: List[Token]) -> List[Token]:
    """Applies the standalone-line rule to a token stream."""
    return StandaloneFilter(tokens).apply()


__all__ = ["StandaloneFilter", "strip_standalone"]
