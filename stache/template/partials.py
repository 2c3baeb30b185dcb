"""In-memory partial registry."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Union

from .nodes import TemplateAST

logger = logging.getLogger(__name__)


class DictPartialProvider:
    """
    Partial provider backed by a dictionary of name -> template.

    Values may be template source or pre-parsed ASTs. Initial entries go
    through register(), so they follow the same naming rule.
    """

    def __init__(self, partials: Optional[Mapping[str, Union[str, TemplateAST]]] = None):
        self._partials: Dict[str, Union[str, TemplateAST]] = {}
        for name, template in (partials or {}).items():
            self.register(name, template)

    def register(self, name: str, template: Union[str, TemplateAST]) -> None:
        """
        Registers or replaces a partial.

        Raises:
            ValueError: If the name is empty
        """
        if not name or not name.strip():
            raise ValueError("Partial name must not be empty")
        if name in self._partials:
            logger.debug(f"Partial '{name}' replaced")
        self._partials[name] = template

    def get_partial(self, name: str) -> Optional[Union[str, TemplateAST]]:
        return self._partials.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._partials

    def names(self) -> list:
        return sorted(self._partials)


__all__ = ["DictPartialProvider"]
