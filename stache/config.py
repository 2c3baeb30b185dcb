from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML

DEFAULT_CFG_FILE = "stache.yaml"

MISSING_PARTIALS_POLICIES = ("ignore", "error")

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class RenderOptions:
    """
    Rendering policy knobs.

    missing_partials: "ignore" renders unknown partials as empty text,
        "error" raises PartialNotFoundError.
    max_partial_depth: nesting limit for partials including themselves.
    escape_html: when False, {{name}} behaves like {{{name}}}.
    """
    missing_partials: str = "ignore"
    max_partial_depth: int = 100
    escape_html: bool = True

    def __post_init__(self) -> None:
        if self.missing_partials not in MISSING_PARTIALS_POLICIES:
            raise ValueError(
                f"missing_partials must be one of {', '.join(MISSING_PARTIALS_POLICIES)}, "
                f"got {self.missing_partials!r}"
            )
        if isinstance(self.max_partial_depth, bool) or not isinstance(self.max_partial_depth, int) \
                or self.max_partial_depth <= 0:
            raise ValueError(f"max_partial_depth must be a positive integer, got {self.max_partial_depth!r}")
        if not isinstance(self.escape_html, bool):
            raise ValueError(f"escape_html must be a boolean, got {self.escape_html!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RenderOptions:
        """Builds options from a mapping (e.g. parsed YAML), rejecting unknown keys."""
        known = {"missing_partials", "max_partial_depth", "escape_html"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown render options: {', '.join(unknown)}")
        return cls(**{k: data[k] for k in known if k in data})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_options(path: Optional[Path] = None) -> RenderOptions:
    """
    Loads render options from a YAML file (./stache.yaml by default).

    • Missing file → defaults.
    • Empty document → defaults.
    • The document must be a mapping.
    """
    path = path if path is not None else Path(DEFAULT_CFG_FILE)
    if not path.exists():
        return RenderOptions()

    with path.open(encoding="utf-8") as f:
        raw = _yaml.load(f) or {}

    if not isinstance(raw, dict):
        raise RuntimeError(f"YAML must be a mapping: {path}")

    return RenderOptions.from_dict(raw)


__all__ = ["RenderOptions", "load_options", "DEFAULT_CFG_FILE"]
