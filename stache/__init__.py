"""
stache: logic-less templates.

    >>> import stache
    >>> stache.render("Hello, {{name}}!", {"name": "world"})
    'Hello, world!'
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .builder import ListBuilder, MapBuilder
from .config import RenderOptions, load_options
from .data import (
    BoolValue,
    Data,
    LambdaValue,
    ListValue,
    MapValue,
    StrValue,
    is_truthy,
    to_data,
)
from .errors import ParseError, PartialNotFoundError, RenderError, StacheUserError
from .template import (
    DictPartialProvider,
    PartialProvider,
    TemplateAST,
    TemplateProcessor,
    create_template_processor,
    parse_template,
)
from .version import tool_version

__version__ = tool_version()


def parse(text: str) -> TemplateAST:
    """Parses template text; raises ParseError on malformed templates."""
    return parse_template(text)


def render(
    template: Union[str, TemplateAST],
    data: Any = None,
    partials: Optional[Union[PartialProvider, Mapping[str, Any]]] = None,
    **options: Any,
) -> str:
    """
    Renders a template with a one-off processor.

    Args:
        template: Template text or parsed AST
        data: Context data
        partials: Partial provider or name -> template mapping
        **options: Fields of RenderOptions

    Returns:
        Rendered text
    """
    return create_template_processor(partials, **options).render(template, data)


__all__ = [
    "parse",
    "render",
    "MapBuilder",
    "ListBuilder",
    "RenderOptions",
    "load_options",
    "Data",
    "StrValue",
    "BoolValue",
    "ListValue",
    "MapValue",
    "LambdaValue",
    "is_truthy",
    "to_data",
    "StacheUserError",
    "ParseError",
    "RenderError",
    "PartialNotFoundError",
    "DictPartialProvider",
    "PartialProvider",
    "TemplateProcessor",
    "create_template_processor",
    "tool_version",
]
