"""
layerguard - Architecture Boundary Checker

Checks that a source tree respects the module boundaries of a chosen
architecture style (Clean, Layered, Hexagonal, DDD, Feature-Sliced, MVC,
CQRS, Microservices, Modular-Monolith, feature-based) by extracting each
file's import statements and flagging forbidden cross-layer references.
"""

__version__ = "0.1.0"

from .api import (
    check,
    get_architecture_definition,
    get_rules_for_architecture,
    list_architecture_definitions,
    validate_architecture,
)
from .architecture import ArchitectureDefinition, ArchitectureStyle
from .engine import ValidationEngine
from .models import Severity, ValidationReport, ValidationRequest, Violation
from .rules import FunctionRule, Rule

__all__ = [
    "check",  # Main entry point (full report)
    "validate_architecture",
    "get_rules_for_architecture",
    "list_architecture_definitions",
    "get_architecture_definition",
    "ValidationEngine",  # Advanced usage (reusable engine)
    "ValidationRequest",
    "ValidationReport",
    "Violation",
    "Severity",
    "Rule",
    "FunctionRule",
    "ArchitectureDefinition",
    "ArchitectureStyle",
]
