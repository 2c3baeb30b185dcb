"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StacheUserError.

Programming errors and bugs should NOT inherit from StacheUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class StacheUserError(Exception):
    """
    Base class for all user-facing errors in stache.

    These errors indicate problems that the user can fix:
    malformed templates, unknown partials, broken output destinations, etc.
    """
    pass


class ParseError(StacheUserError):
    """A template could not be turned into a node tree."""
    pass


class RenderError(StacheUserError):
    """
    Rendering failed after it started.

    Raised for sink failures and for exceptions escaping user lambdas.
    Missing variables and sections are never render errors.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class PartialNotFoundError(RenderError):
    """A partial was referenced but the provider does not know it."""

    def __init__(self, name: str):
        super().__init__(f"Partial not found: {name!r}")
        self.name = name


__all__ = ["StacheUserError", "ParseError", "RenderError", "PartialNotFoundError"]
