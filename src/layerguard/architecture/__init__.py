"""Architecture styles: layers, import constraints and per-style rule sets."""

from .models import (
    ArchitectureDefinition,
    ArchitectureStyle,
    ImportConstraint,
    LayerDefinition,
)
from .registry import (
    ARCHITECTURE_DEFINITIONS,
    DEFAULT_REGISTRY,
    STYLE_RULES,
    ArchitectureRegistry,
    get_definition,
    list_definitions,
)

__all__ = [
    "ArchitectureStyle",
    "ArchitectureDefinition",
    "LayerDefinition",
    "ImportConstraint",
    "ArchitectureRegistry",
    "ARCHITECTURE_DEFINITIONS",
    "STYLE_RULES",
    "DEFAULT_REGISTRY",
    "get_definition",
    "list_definitions",
]
