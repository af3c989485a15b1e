"""
Templates Package
=================
Anatomy template validation, sources and the caching registry.
"""

from anatomy.templates.registry import AnatomyRegistry, INTERNAL_MARKER
from anatomy.templates.sources import (
    BUILTIN_TEMPLATE_DIR,
    DirectoryTemplateSource,
    TemplateSource,
)
from anatomy.templates.validation import check_tree, validate_template

__all__ = [
    "AnatomyRegistry",
    "INTERNAL_MARKER",
    "BUILTIN_TEMPLATE_DIR",
    "DirectoryTemplateSource",
    "TemplateSource",
    "check_tree",
    "validate_template",
]
