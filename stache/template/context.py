"""
Context stack for rendering.

Frames are kept innermost-last. Names are resolved by searching from the
innermost frame outwards; a miss is never an error.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from ..data import Data, MapValue


class ContextStack:
    """
    Ordered sequence of data frames owned by a single render call.

    Created with the caller's root context; sections push a frame on entry
    and pop it when their subtree is done.
    """

    def __init__(self, root: Optional[Data] = None):
        self._frames: List[Data] = [root if root is not None else MapValue()]

    @property
    def top(self) -> Data:
        """Innermost frame."""
        return self._frames[-1]

    def __len__(self) -> int:
        return len(self._frames)

    def push(self, frame: Data) -> None:
        self._frames.append(frame)

    def pop(self) -> Data:
        if len(self._frames) == 1:
            raise IndexError("Cannot pop the root frame")
        return self._frames.pop()

    @contextmanager
    def frame(self, data: Data) -> Iterator[ContextStack]:
        """Pushes a frame for the duration of a with-block."""
        self.push(data)
        try:
            yield self
        finally:
            self.pop()

    def resolve(self, path: Sequence[str]) -> Optional[Data]:
        """
        Resolves a name path against the stack.

        The first frame (innermost first) holding path[0] wins, even if the
        rest of the path then misses there. Remaining parts must each step
        through a map.

        Args:
            path: Name parts, at least one; ('.',) is the implicit iterator

        Returns:
            Resolved value or None on a miss
        """
        if tuple(path) == (".",):
            return self.top

        first, rest = path[0], path[1:]

        for frame in reversed(self._frames):
            if isinstance(frame, MapValue) and first in frame:
                value = frame.get(first)
                break
        else:
            return None

        for name in rest:
            if not isinstance(value, MapValue):
                return None
            value = value.get(name)
            if value is None:
                return None

        return value


__all__ = ["ContextStack"]
