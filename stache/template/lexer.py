"""
Lexical analyzer for the template engine.

Splits template source into text, line terminator and tag tokens.
Tracks the current delimiter pair, which {{=<% %>=}} tags rebind
for the rest of the scan.
"""

from __future__ import annotations

from typing import Dict, List

from .tokens import (
    DEFAULT_DELIMITERS,
    Delimiters,
    LexerError,
    TagKind,
    Token,
    TokenType,
)


class TemplateLexer:
    """
    Template lexer.

    Produces a flat token stream where:
    - TEXT tokens never contain a line terminator
    - each \\n or \\r\\n is a separate NEWLINE token
    - each tag is a single TAG token with its kind and trimmed content
    """

    # Sigils right after the opening delimiter
    _SIGILS: Dict[str, TagKind] = {
        "#": TagKind.SECTION_OPEN,
        "^": TagKind.INVERTED_OPEN,
        "/": TagKind.SECTION_CLOSE,
        "!": TagKind.COMMENT,
        ">": TagKind.PARTIAL,
        "&": TagKind.UNESCAPED,
        "{": TagKind.UNESCAPED,
        "=": TagKind.SET_DELIMITER,
    }

    def __init__(self, text: str, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)
        self.delimiters = delimiters

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source and returns the token list, ending with EOF.
        """
        tokens: List[Token] = []

        while self.position < self.length:
            tokens.append(self.next_token())

        tokens.append(self._make(TokenType.EOF, "", self.position, self.line, self.column))
        return tokens

    def next_token(self) -> Token:
        """
        Extracts the next token from the input.
        """
        if self.position >= self.length:
            return self._make(TokenType.EOF, "", self.position, self.line, self.column)

        if self.text.startswith(self.delimiters.open, self.position):
            return self._read_tag()

        start_pos = self.position
        start_line = self.line
        start_column = self.column

        for terminator in ("\r\n", "\n"):
            if self.text.startswith(terminator, self.position):
                self._advance(len(terminator))
                return self._make(TokenType.NEWLINE, terminator, start_pos, start_line, start_column)

        text_end = self._find_text_end()
        value = self.text[self.position:text_end]
        self._advance(len(value))
        return self._make(TokenType.TEXT, value, start_pos, start_line, start_column)

    def _read_tag(self) -> Token:
        """Reads a tag starting at the current opening delimiter."""
        start_pos = self.position
        start_line = self.line
        start_column = self.column
        delimiters = self.delimiters

        content_start = start_pos + len(delimiters.open)
        sigil = self.text[content_start:content_start + 1]
        kind = self._SIGILS.get(sigil, TagKind.VARIABLE)

        # {{{name}}} and {{=| |=}} carry a matching character before the closing delimiter
        if sigil in ("{", "="):
            closer = ("}" if sigil == "{" else "=") + delimiters.close
            search_from = content_start + 1
        else:
            closer = delimiters.close
            search_from = content_start

        close_at = self.text.find(closer, search_from)
        if close_at == -1:
            raise LexerError(
                f"Unclosed tag (expected {closer!r})",
                start_line, start_column, start_pos
            )

        body = self.text[content_start:close_at]
        if kind != TagKind.VARIABLE:
            body = body[1:]

        if kind == TagKind.COMMENT:
            value = body
        else:
            value = body.strip()
            if not value:
                raise LexerError("Empty tag", start_line, start_column, start_pos)

        new_delimiters = None
        if kind == TagKind.SET_DELIMITER:
            new_delimiters = self._parse_delimiters(value, start_line, start_column, start_pos)

        end = close_at + len(closer)
        self._advance(end - self.position)

        if new_delimiters is not None:
            self.delimiters = new_delimiters

        return Token(
            TokenType.TAG, value, start_pos, start_line, start_column,
            end=end, kind=kind, delimiters=delimiters,
        )

    @staticmethod
    def _parse_delimiters(value: str, line: int, column: int, position: int) -> Delimiters:
        """Parses the content of a set-delimiter tag: '<open> <close>'."""
        parts = value.split()
        if len(parts) != 2 or any("=" in part for part in parts):
            raise LexerError(f"Invalid delimiter definition: {value!r}", line, column, position)
        return Delimiters(open=parts[0], close=parts[1])

    def _find_text_end(self) -> int:
        """
        Finds where the current run of text ends: the next opening
        delimiter, the next line terminator, or the end of the source.
        """
        candidates = [self.length]

        tag_at = self.text.find(self.delimiters.open, self.position)
        if tag_at != -1:
            candidates.append(tag_at)

        newline_at = self.text.find("\n", self.position)
        if newline_at != -1:
            if newline_at > self.position and self.text[newline_at - 1] == "\r":
                newline_at -= 1
            candidates.append(newline_at)

        return min(candidates)

    def _advance(self, count: int) -> None:
        """
        Moves the position forward by count characters,
        updating line and column numbers.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == "\n":
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1

    def _make(self, token_type: TokenType, value: str, position: int, line: int, column: int) -> Token:
        return Token(token_type, value, position, line, column, end=position + len(value))


def tokenize_template(text: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Args:
        text: Template source
        delimiters: Delimiters in effect at the start of the source

    Returns:
        Token list ending with EOF

    Raises:
        LexerError: On unclosed tags, empty tags or bad delimiter definitions
    """
    lexer = TemplateLexer(text, delimiters)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
