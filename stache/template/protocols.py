"""
Protocols for the renderer's external collaborators.

The engine only needs a sink that accepts text and a provider that
knows partial templates by name; where either comes from is up to the caller.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union, runtime_checkable

from .nodes import TemplateAST


@runtime_checkable
class Sink(Protocol):
    """
    Output destination.

    io.StringIO, text files and sys.stdout all satisfy this protocol.
    """

    def write(self, text: str) -> Any:
        """
        Appends text to the output.

        Any exception raised here is reported as RenderError.
        """
        ...


@runtime_checkable
class PartialProvider(Protocol):
    """
    Source of partial templates.
    """

    def get_partial(self, name: str) -> Optional[Union[str, TemplateAST]]:
        """
        Looks up a partial by name.

        Args:
            name: Partial name as written in {{>name}}

        Returns:
            Template source, a pre-parsed AST, or None if unknown
        """
        ...


__all__ = ["Sink", "PartialProvider"]
