"""Data models for architecture styles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class ArchitectureStyle(str, Enum):
    """Fixed set of architecture style identifiers."""

    CLEAN = "clean"
    LAYERED = "layered"
    FEATURE_BASED = "feature-based"
    HEXAGONAL = "hexagonal"
    DDD = "ddd"
    FEATURE_SLICED = "feature-sliced"
    MVC = "mvc"
    CQRS = "cqrs"
    MICROSERVICES = "microservices"
    MODULAR_MONOLITH = "modular-monolith"

    @classmethod
    def parse(cls, value: "str | ArchitectureStyle") -> Optional["ArchitectureStyle"]:
        """Return the member for ``value``, or None if it is not a known style.

        Ids match exactly: ``"CLEAN"`` and ``" clean"`` are unknown styles.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class LayerDefinition:
    """A named grouping of source files with a directory convention."""

    name: str
    description: str
    directory: str


@dataclass(frozen=True)
class ImportConstraint:
    """Code in ``from_layer`` must not reference any of ``forbidden``.

    Layer names may carry a ``/*`` suffix (``features/*``) meaning "any
    sibling slice of that layer".
    """

    from_layer: str
    forbidden: frozenset[str]

    def forbids(self, layer: str) -> bool:
        return layer in self.forbidden


@dataclass(frozen=True)
class ArchitectureDefinition:
    """Declarative description of one architecture style.

    Attributes:
        id: Style identifier
        name: Human-readable name
        description: Short description
        layers: Layers in dependency order, innermost first
        constraints: Cross-layer import constraints
        default_modules: Modules generated per layer by scaffolding
        supported_profiles: Technology stacks this style is offered for
    """

    id: ArchitectureStyle
    name: str
    description: str
    layers: tuple[LayerDefinition, ...]
    constraints: tuple[ImportConstraint, ...] = ()
    default_modules: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    supported_profiles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the mapping so a registered definition can't be mutated.
        if not isinstance(self.default_modules, MappingProxyType):
            frozen = {k: tuple(v) for k, v in self.default_modules.items()}
            object.__setattr__(self, "default_modules", MappingProxyType(frozen))

    @property
    def layer_names(self) -> tuple[str, ...]:
        return tuple(layer.name for layer in self.layers)

    def layer(self, name: str) -> Optional[LayerDefinition]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def forbidden_for(self, layer: str) -> frozenset[str]:
        """All layers ``layer`` must not import from (empty if unconstrained)."""
        forbidden: set[str] = set()
        for constraint in self.constraints:
            if constraint.from_layer == layer:
                forbidden |= constraint.forbidden
        return frozenset(forbidden)

    def supports(self, profile: str) -> bool:
        return profile in self.supported_profiles
