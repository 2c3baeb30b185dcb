"""
Shared test infrastructure for stache.

Modules:
- file_utils: Utilities for creating files and directories
- spec_fixtures: Loading of the Mustache conformance fixtures (YAML)
- rendering_utils: Rendering shortcuts and sink doubles
"""

from .file_utils import write
from .rendering_utils import render_template, RecordingSink, FailingSink
from .spec_fixtures import SPEC_DIR, load_spec_cases

__all__ = [
    # File utilities
    "write",

    # Rendering utilities
    "render_template", "RecordingSink", "FailingSink",

    # Conformance fixtures
    "SPEC_DIR", "load_spec_cases",
]
