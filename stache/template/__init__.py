"""
Mustache-style template engine.

Source text goes through the lexer, the standalone-line pass and the
parser into an immutable AST, which the renderer walks against a
context stack.
"""

from __future__ import annotations

from .context import ContextStack
from .nodes import (
    TemplateAST,
    TemplateNode,
    TextNode,
    VariableNode,
    SectionNode,
    CommentNode,
    PartialNode,
)
from .parser import TemplateParser, parse_template
from .partials import DictPartialProvider
from .processor import TemplateProcessor, create_template_processor
from .protocols import PartialProvider, Sink
from .renderer import TemplateRenderer
from .tokens import LexerError, ParserError

__all__ = [
    "ContextStack",
    "TemplateAST",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "SectionNode",
    "CommentNode",
    "PartialNode",
    "TemplateParser",
    "parse_template",
    "DictPartialProvider",
    "TemplateProcessor",
    "create_template_processor",
    "PartialProvider",
    "Sink",
    "TemplateRenderer",
    "LexerError",
    "ParserError",
]
