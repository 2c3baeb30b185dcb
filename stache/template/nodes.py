"""
AST nodes.

Immutable node classes representing a parsed template. A parsed tree is
never modified, so one tree may be rendered any number of times.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .tokens import DEFAULT_DELIMITERS, Delimiters

NamePath = Tuple[str, ...]


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Static text copied to the output as is.
    """
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """
    Interpolation tag: {{name}}, {{{name}}} or {{&name}}.

    path is the dotted name split into parts; ('.',) is the implicit iterator.
    """
    name: str
    path: NamePath
    escape: bool = True


@dataclass(frozen=True)
class SectionNode(TemplateNode):
    """
    Section {{#name}}...{{/name}} or inverted section {{^name}}...{{/name}}.

    raw keeps the unrendered source between the tags for lambdas,
    delimiters the pair in effect at the opening tag.
    """
    name: str
    path: NamePath
    inverted: bool = False
    children: Tuple[TemplateNode, ...] = ()
    raw: str = ""
    delimiters: Delimiters = DEFAULT_DELIMITERS


@dataclass(frozen=True)
class CommentNode(TemplateNode):
    """Comment {{! ... }}. Never rendered."""
    text: str = ""


@dataclass(frozen=True)
class PartialNode(TemplateNode):
    """
    Partial {{>name}}, rendered against the caller's context.

    indent is the leading whitespace of a standalone partial tag.
    """
    name: str
    indent: str = ""


TemplateAST = Tuple[TemplateNode, ...]


__all__ = [
    "NamePath",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "SectionNode",
    "CommentNode",
    "PartialNode",
    "TemplateAST",
]
