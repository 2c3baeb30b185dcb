"""
Template parser.

Turns the token stream into an AST, validating section nesting
with an explicit stack of open sections. Either the whole tree is
built or a ParserError is raised.
"""

from __future__ import annotations

from typing import List, Tuple

from .lexer import TemplateLexer
from .nodes import (
    CommentNode,
    NamePath,
    PartialNode,
    SectionNode,
    TemplateAST,
    TemplateNode,
    TextNode,
    VariableNode,
)
from .standalone import strip_standalone
from .tokens import DEFAULT_DELIMITERS, Delimiters, ParserError, TagKind, Token, TokenType

# An open section: its opening token and the children collected so far
_OpenSection = Tuple[Token, List[TemplateNode]]


class TemplateParser:
    """
    Builds the AST from a token stream already processed by the standalone pass.

    The source text is needed to capture the raw body of each section.
    """

    def __init__(self, tokens: List[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.root: List[TemplateNode] = []
        self.stack: List[_OpenSection] = []

    def parse(self) -> TemplateAST:
        """
        Parses the token stream.

        Returns:
            Tuple of root nodes

        Raises:
            ParserError: On unbalanced or mismatched sections and invalid names
        """
        for token in self.tokens:
            if token.type == TokenType.EOF:
                break
            if token.type in (TokenType.TEXT, TokenType.NEWLINE):
                self._append_text(token.value)
            else:
                self._parse_tag(token)

        if self.stack:
            open_token, _ = self.stack[-1]
            raise ParserError(f"Unclosed section '{open_token.value}'", open_token)

        return tuple(self.root)

    @property
    def _target(self) -> List[TemplateNode]:
        return self.stack[-1][1] if self.stack else self.root

    def _append_text(self, text: str) -> None:
        """Appends text, merging with a preceding text node."""
        target = self._target
        if target and isinstance(target[-1], TextNode):
            target[-1] = TextNode(target[-1].text + text)
        else:
            target.append(TextNode(text))

    def _parse_tag(self, token: Token) -> None:
        kind = token.kind

        if kind in (TagKind.VARIABLE, TagKind.UNESCAPED):
            self._target.append(VariableNode(
                name=token.value,
                path=self._split_name(token),
                escape=kind == TagKind.VARIABLE,
            ))
        elif kind in (TagKind.SECTION_OPEN, TagKind.INVERTED_OPEN):
            self._split_name(token)
            self.stack.append((token, []))
        elif kind == TagKind.SECTION_CLOSE:
            self._close_section(token)
        elif kind == TagKind.COMMENT:
            self._target.append(CommentNode(token.value))
        elif kind == TagKind.PARTIAL:
            self._target.append(PartialNode(name=token.value, indent=token.indent))
        elif kind == TagKind.SET_DELIMITER:
            # Already applied by the lexer
            pass
        else:
            raise ParserError(f"Unexpected tag kind: {kind}", token)

    def _close_section(self, token: Token) -> None:
        if not self.stack:
            raise ParserError(f"Closing tag '{token.value}' without open section", token)

        open_token, children = self.stack.pop()
        if open_token.value != token.value:
            raise ParserError(
                f"Mismatched section: '{open_token.value}' opened at "
                f"{open_token.line}:{open_token.column} closed by '{token.value}'",
                token
            )

        self._target.append(SectionNode(
            name=open_token.value,
            path=self._split_name(open_token),
            inverted=open_token.kind == TagKind.INVERTED_OPEN,
            children=tuple(children),
            raw=self.source[open_token.end:token.position],
            delimiters=open_token.delimiters,
        ))

    @staticmethod
    def _split_name(token: Token) -> NamePath:
        """Splits a dotted name; '.' alone is the implicit iterator."""
        name = token.value
        if name == ".":
            return (".",)
        parts = tuple(name.split("."))
        if any(not part for part in parts):
            raise ParserError(f"Invalid name '{name}'", token)
        return parts


def parse_template(text: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> TemplateAST:
    """
    Parses template source into an AST.

    Lexing, the standalone-line pass and tree building run in order;
    nothing is rendered until all three succeed.

    Raises:
        LexerError: On malformed tags
        ParserError: On malformed section structure
    """
    tokens = TemplateLexer(text, delimiters).tokenize()
    tokens = strip_standalone(tokens)
    return TemplateParser(tokens, text).parse()


__all__ = ["TemplateParser", "parse_template"]
