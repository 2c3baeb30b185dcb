from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Returns the version of the installed distribution.
    Does not depend on the rest of the package (avoids import cycles).
    """
    try:
        return metadata.version("stache")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
