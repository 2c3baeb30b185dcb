"""
Template renderer.

Walks the AST depth-first against a context stack and writes the
result to a sink as it goes.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, Optional, Tuple

from .context import ContextStack
from .nodes import (
    CommentNode,
    PartialNode,
    SectionNode,
    TemplateAST,
    TemplateNode,
    TextNode,
    VariableNode,
)
from .parser import parse_template
from .protocols import PartialProvider, Sink
from .tokens import DEFAULT_DELIMITERS, Delimiters
from ..config import RenderOptions
from ..data import Data, LambdaValue, ListValue, MapValue, is_truthy, stringify
from ..errors import PartialNotFoundError, RenderError, StacheUserError

logger = logging.getLogger(__name__)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)

# Start of every line, except past a trailing line terminator
_LINE_START_RE = re.compile(r"^(?!\Z)", re.MULTILINE)


def html_escape(text: str) -> str:
    # Apostrophes are left alone
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def indent_lines(text: str, indent: str) -> str:
    """Prefixes every line of text with indent."""
    if not indent:
        return text
    return _LINE_START_RE.sub(lambda _: indent, text)


class _RenderState:
    """Mutable state of one render call."""

    def __init__(self, stack: ContextStack):
        self.stack = stack
        self.partial_depth = 0
        self.partials: Dict[Tuple[str, str], Optional[TemplateAST]] = {}


class TemplateRenderer:
    """
    Renders parsed templates.

    The renderer itself holds no per-render state, so one instance
    (and one parsed tree) may serve any number of renders.
    """

    def __init__(self, partials: Optional[PartialProvider] = None, options: Optional[RenderOptions] = None):
        self.partials = partials
        self.options = options or RenderOptions()

    def render(self, ast: TemplateAST, data: Optional[Data], sink: Sink) -> None:
        """
        Renders ast against data into sink.

        Raises:
            RenderError: If the sink rejects a write, a lambda fails,
                or partial nesting is too deep
            PartialNotFoundError: For unknown partials when the policy is "error"
            ParseError: If a lambda result or a partial fails to parse
        """
        state = _RenderState(ContextStack(data))
        self._render_nodes(ast, state, sink)

    def _render_nodes(self, nodes: TemplateAST, state: _RenderState, sink: Sink) -> None:
        for node in nodes:
            self._render_node(node, state, sink)

    def _render_node(self, node: TemplateNode, state: _RenderState, sink: Sink) -> None:
        if isinstance(node, TextNode):
            self._write(sink, node.text)
        elif isinstance(node, VariableNode):
            self._render_variable(node, state, sink)
        elif isinstance(node, SectionNode):
            self._render_section(node, state, sink)
        elif isinstance(node, PartialNode):
            self._render_partial(node, state, sink)
        elif isinstance(node, CommentNode):
            return
        else:
            raise TypeError(f"Unknown node type: {type(node).__name__}")

    def _render_variable(self, node: VariableNode, state: _RenderState, sink: Sink) -> None:
        value = state.stack.resolve(node.path)
        if value is None:
            return

        if isinstance(value, LambdaValue):
            source = self._call_lambda(value, "", node.name)
            buffer = io.StringIO()
            self._render_nodes(self._parse_fragment(source, DEFAULT_DELIMITERS), state, buffer)
            text = buffer.getvalue()
        else:
            text = stringify(value)

        if node.escape and self.options.escape_html:
            text = html_escape(text)
        self._write(sink, text)

    def _render_section(self, node: SectionNode, state: _RenderState, sink: Sink) -> None:
        value = state.stack.resolve(node.path)

        if node.inverted:
            if not is_truthy(value):
                self._render_nodes(node.children, state, sink)
            return

        if not is_truthy(value):
            return

        if isinstance(value, ListValue):
            for item in value.items:
                with state.stack.frame(item):
                    self._render_nodes(node.children, state, sink)
        elif isinstance(value, LambdaValue):
            source = self._call_lambda(value, node.raw, node.name)
            self._render_nodes(self._parse_fragment(source, node.delimiters), state, sink)
        elif isinstance(value, MapValue):
            with state.stack.frame(value):
                self._render_nodes(node.children, state, sink)
        else:
            with state.stack.frame(state.stack.top):
                self._render_nodes(node.children, state, sink)

    def _render_partial(self, node: PartialNode, state: _RenderState, sink: Sink) -> None:
        ast = self._load_partial(node, state)
        if ast is None:
            return

        # Missing partials are settled before the nesting limit applies
        if state.partial_depth >= self.options.max_partial_depth:
            raise RenderError(
                f"Partial '{node.name}' exceeds the nesting limit of {self.options.max_partial_depth}"
            )

        state.partial_depth += 1
        try:
            self._render_nodes(ast, state, sink)
        finally:
            state.partial_depth -= 1

    def _load_partial(self, node: PartialNode, state: _RenderState) -> Optional[TemplateAST]:
        """Fetches and parses a partial, once per name and indentation within a render."""
        key = (node.name, node.indent)
        if key in state.partials:
            return state.partials[key]

        template = self.partials.get_partial(node.name) if self.partials is not None else None
        if template is None:
            if self.options.missing_partials == "error":
                raise PartialNotFoundError(node.name)
            logger.warning(f"Partial '{node.name}' not found, rendering nothing")
            ast = None
        elif isinstance(template, str):
            ast = parse_template(indent_lines(template, node.indent))
            logger.debug(f"Parsed partial '{node.name}' -> {len(ast)} nodes")
        else:
            ast = tuple(template)

        state.partials[key] = ast
        return ast

    def _call_lambda(self, value: LambdaValue, text: str, name: str) -> str:
        logger.debug(f"Expanding lambda '{name}'")
        try:
            return value(text)
        except StacheUserError:
            raise
        except Exception as e:
            raise RenderError(f"Lambda '{name}' failed: {e}", e) from e

    @staticmethod
    def _parse_fragment(source: str, delimiters: Delimiters) -> TemplateAST:
        return parse_template(source, delimiters)

    @staticmethod
    def _write(sink: Sink, text: str) -> None:
        if not text:
            return
        try:
            sink.write(text)
        except Exception as e:
            raise RenderError(f"Failed to write output: {e}", e) from e


__all__ = ["TemplateRenderer", "html_escape", "indent_lines"]
