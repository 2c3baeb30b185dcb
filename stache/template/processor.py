"""
Template processor.

Public API tying the lexer, parser and renderer together: parse text
into an AST, render an AST or text against context data.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Mapping, Optional, Union

from .nodes import TemplateAST
from .parser import parse_template
from .partials import DictPartialProvider
from .protocols import PartialProvider, Sink
from .renderer import TemplateRenderer
from ..config import RenderOptions
from ..data import MapValue, to_data
from ..errors import StacheUserError

logger = logging.getLogger(__name__)

Template = Union[str, TemplateAST]


class TemplateProcessor:
    """
    Main template processor.

    Holds the partial provider and options; every render gets its own
    context stack, so a processor may be shared between renders.
    Parsed templates are not cached between calls.
    """

    def __init__(
        self,
        partials: Optional[Union[PartialProvider, Mapping[str, Template]]] = None,
        options: Optional[RenderOptions] = None,
    ):
        """
        Initializes the processor.

        Args:
            partials: Partial provider, or a plain name -> template mapping
            options: Render options (defaults when omitted)
        """
        if partials is not None and not isinstance(partials, PartialProvider):
            partials = DictPartialProvider(partials)
        self.partials = partials
        self.options = options or RenderOptions()
        self.renderer = TemplateRenderer(self.partials, self.options)

    def parse(self, template_text: str, template_name: str = "") -> TemplateAST:
        """
        Parses template text into an AST.

        Raises:
            ParseError: On malformed templates
        """
        try:
            ast = parse_template(template_text)
        except StacheUserError as e:
            logger.debug(f"Failed to parse template '{template_name}': {e}")
            raise
        logger.debug(f"Parsed template '{template_name}' -> {len(ast)} nodes")
        return ast

    def render(self, template: Template, data: Any = None, template_name: str = "") -> str:
        """
        Renders a template to a string.

        Args:
            template: Template text or a pre-parsed AST
            data: Context: a data model value or plain Python values
            template_name: Optional name for diagnostics

        Returns:
            Rendered text
        """
        buffer = io.StringIO()
        self.render_to(template, data, buffer, template_name)
        return buffer.getvalue()

    def render_to(self, template: Template, data: Any, sink: Sink, template_name: str = "") -> None:
        """
        Renders a template into a sink.

        Parse errors are raised before anything is written; render errors
        may leave partial output in the sink.

        Raises:
            ParseError: On malformed templates
            RenderError: On sink failures, failing lambdas or runaway partials
        """
        ast = self.parse(template, template_name) if isinstance(template, str) else tuple(template)

        context = to_data(data)
        if context is None:
            context = MapValue()

        try:
            self.renderer.render(ast, context, sink)
        except StacheUserError as e:
            logger.debug(f"Failed to render template '{template_name}': {e}")
            raise


def create_template_processor(
    partials: Optional[Union[PartialProvider, Mapping[str, Template]]] = None,
    **options: Any,
) -> TemplateProcessor:
    """
    Creates a processor from keyword options.

    Args:
        partials: Partial provider or mapping
        **options: Fields of RenderOptions

    Returns:
        Configured template processor
    """
    return TemplateProcessor(partials, RenderOptions.from_dict(options))


__all__ = ["TemplateProcessor", "Template", "create_template_processor"]
