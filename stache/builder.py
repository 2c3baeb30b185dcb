"""
Fluent builders for assembling context data.

Sugar over the data model for calling code and tests:

    data = (MapBuilder()
            .insert("name", "Joe")
            .insert("items", ListBuilder().push("a").push("b"))
            .build())
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .data import Data, ListValue, MapValue, LambdaValue, to_data
from .template.processor import Template, TemplateProcessor
from .template.protocols import PartialProvider, Sink


def _convert(value: Any) -> Optional[Data]:
    if isinstance(value, (MapBuilder, ListBuilder)):
        return value.build()
    return to_data(value)


class MapBuilder:
    """Mutable map under construction. Last insertion of a key wins."""

    def __init__(self):
        self._entries: Dict[str, Data] = {}

    def insert(self, key: str, value: Any) -> MapBuilder:
        """
        Inserts or overwrites a key.

        Args:
            key: Entry name
            value: Data value, plain Python value or nested builder;
                None removes the key

        Returns:
            The builder itself for chaining
        """
        converted = _convert(value)
        if converted is None:
            self._entries.pop(key, None)
        else:
            self._entries[key] = converted
        return self

    def insert_lambda(self, key: str, func: Callable[[str], Any]) -> MapBuilder:
        self._entries[key] = LambdaValue(func)
        return self

    def build(self) -> MapValue:
        return MapValue(dict(self._entries))

    def render(
        self,
        template: Template,
        sink: Optional[Sink] = None,
        partials: Optional[Union[PartialProvider, Mapping[str, Template]]] = None,
    ) -> Optional[str]:
        """
        Renders a template against the map built so far.

        Args:
            template: Template text or a pre-parsed AST
            sink: Output destination; when omitted the text is returned
            partials: Partial provider or name -> template mapping

        Returns:
            Rendered text, or None when written to a sink
        """
        processor = TemplateProcessor(partials)
        if sink is None:
            return processor.render(template, self.build())
        processor.render_to(template, self.build(), sink)
        return None


class ListBuilder:
    """Mutable list under construction."""

    def __init__(self):
        self._items: List[Data] = []

    def push(self, value: Union[Any, MapBuilder, ListBuilder]) -> ListBuilder:
        converted = _convert(value)
        if converted is not None:
            self._items.append(converted)
        return self

    def build(self) -> ListValue:
        return ListValue(tuple(self._items))


__all__ = ["MapBuilder", "ListBuilder"]
