"""Architecture registry: the single source of truth for architecture styles.

Adding a new style requires:
1. Add a member to ArchitectureStyle.
2. Add its ArchitectureDefinition to ARCHITECTURE_DEFINITIONS below.
3. Add its rule ids to STYLE_RULES below.
The rule selector and the CLI pick it up automatically.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Union

from ..exceptions import InvalidConfigError, UnknownArchitectureError
from .models import (
    ArchitectureDefinition,
    ArchitectureStyle,
    ImportConstraint,
    LayerDefinition,
)

StyleId = Union[str, ArchitectureStyle]


def _layers(*specs: tuple[str, str]) -> tuple[LayerDefinition, ...]:
    # Every built-in layer lives in a directory named after it.
    return tuple(LayerDefinition(name=name, description=desc, directory=name) for name, desc in specs)


def _constraints(table: Mapping[str, Sequence[str]]) -> tuple[ImportConstraint, ...]:
    return tuple(
        ImportConstraint(from_layer=src, forbidden=frozenset(forbidden))
        for src, forbidden in table.items()
    )


ARCHITECTURE_DEFINITIONS: tuple[ArchitectureDefinition, ...] = (
    ArchitectureDefinition(
        id=ArchitectureStyle.CLEAN,
        name="Clean Architecture",
        description=(
            "Dependency inversion with Domain at the core, surrounded by Application, "
            "Infrastructure, and Presentation"
        ),
        layers=_layers(
            ("domain", "Entities, value objects, repository interfaces"),
            ("application", "Use cases, application services, DTOs"),
            ("infrastructure", "Database, external services, framework implementations"),
            ("presentation", "Controllers, views, API endpoints"),
        ),
        constraints=_constraints(
            {
                "domain": ["infrastructure", "presentation", "application"],
                "application": ["infrastructure", "presentation"],
                "infrastructure": ["presentation"],
            }
        ),
        default_modules={
            "domain": ("entities", "repositories", "value-objects"),
            "application": ("use-cases", "services", "dtos"),
            "infrastructure": ("persistence", "api", "config"),
            "presentation": ("controllers", "middleware"),
        },
        supported_profiles=("react", "java", "dotnet", "nodejs", "django", "react-native"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.LAYERED,
        name="Layered Architecture",
        description="Traditional layers: Presentation → Business Logic → Data Access",
        layers=_layers(
            ("models", "Data models and entities"),
            ("repositories", "Data access layer"),
            ("services", "Business logic layer"),
            ("controllers", "Presentation / API layer"),
        ),
        constraints=_constraints(
            {
                "models": ["repositories", "services", "controllers"],
                "repositories": ["services", "controllers"],
                "services": ["controllers"],
            }
        ),
        default_modules={
            "models": ("User",),
            "repositories": ("UserRepository",),
            "services": ("UserService",),
            "controllers": ("UserController",),
        },
        supported_profiles=(
            "react",
            "java",
            "dotnet",
            "nodejs",
            "django",
            "laravel",
            "angular",
            "flutter",
        ),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.FEATURE_BASED,
        name="Feature-based Architecture",
        description="Self-contained feature modules with shared utilities",
        layers=_layers(
            ("shared", "Shared components, hooks, and utilities"),
            ("features", "Self-contained feature modules"),
            ("app", "Application shell, routing, providers"),
        ),
        constraints=_constraints({"features/*": ["features/*"]}),
        default_modules={
            "shared": ("components", "hooks", "utils"),
            "features": ("auth", "home"),
            "app": ("App", "providers"),
        },
        supported_profiles=("react", "nextjs", "angular", "vue", "react-native"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.HEXAGONAL,
        name="Hexagonal Architecture (Ports & Adapters)",
        description=(
            "Business logic at the core with ports (interfaces) and adapters (implementations)"
        ),
        layers=_layers(
            ("domain", "Core business logic, entities"),
            ("ports", "Inbound and outbound port interfaces"),
            ("application", "Application services orchestrating ports"),
            ("adapters", "Inbound (API) and outbound (DB, messaging) adapters"),
        ),
        constraints=_constraints(
            {
                "domain": ["adapters", "application"],
                "ports": ["adapters", "application"],
                "application": ["adapters"],
            }
        ),
        default_modules={
            "domain": ("entities", "value-objects", "exceptions"),
            "ports": ("inbound", "outbound"),
            "application": ("services",),
            "adapters": ("inbound/rest", "outbound/persistence", "outbound/messaging"),
        },
        supported_profiles=("java", "dotnet", "nodejs"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.DDD,
        name="Domain-Driven Design (Tactical)",
        description=(
            "Rich domain model with Aggregates, Value Objects, Repositories, and Bounded Contexts"
        ),
        layers=_layers(
            ("domain", "Aggregates, entities, value objects, domain services, domain events"),
            ("application", "Application services, command/query handlers, DTOs"),
            ("infrastructure", "Persistence, messaging, external integrations"),
            ("presentation", "API controllers, GraphQL resolvers"),
        ),
        constraints=_constraints(
            {
                "domain": ["infrastructure", "presentation", "application"],
                "application": ["presentation"],
            }
        ),
        default_modules={
            "domain": (
                "model/aggregates",
                "model/entities",
                "model/value-objects",
                "service",
                "repository",
                "event",
            ),
            "application": ("service", "dto", "command", "query"),
            "infrastructure": ("persistence", "messaging", "config"),
            "presentation": ("controller", "dto"),
        },
        supported_profiles=("java", "dotnet"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.FEATURE_SLICED,
        name="Feature-Sliced Design",
        description=(
            "Modern scalable frontend architecture with app, processes, pages, features, "
            "entities, shared layers"
        ),
        layers=_layers(
            ("shared", "Shared UI kit, utilities, configs"),
            ("entities", "Business entities (user, product, etc.)"),
            ("features", "User interactions (auth, comments, etc.)"),
            ("widgets", "Composite UI blocks combining entities + features"),
            ("pages", "Routing pages composing widgets"),
            ("app", "App initialization, providers, global styles"),
        ),
        constraints=_constraints(
            {
                "shared": ["entities", "features", "widgets", "pages", "app"],
                "entities": ["features", "widgets", "pages", "app"],
                "features": ["widgets", "pages", "app"],
                "widgets": ["pages", "app"],
                "pages": ["app"],
            }
        ),
        default_modules={
            "shared": ("ui", "lib", "config"),
            "entities": ("user", "product"),
            "features": ("auth", "search"),
            "widgets": ("header", "sidebar"),
            "pages": ("home", "profile"),
            "app": ("providers", "styles"),
        },
        supported_profiles=("react", "nextjs"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.MVC,
        name="MVC (Model-View-Controller)",
        description=(
            "Classic pattern — Controllers handle requests, Services contain logic, "
            "Models define data"
        ),
        layers=_layers(
            ("models", "Data models and entities"),
            ("services", "Business logic"),
            ("controllers", "Request handlers"),
            ("views", "Response templates / serializers"),
        ),
        constraints=_constraints(
            {
                "models": ["controllers", "views"],
                "services": ["controllers", "views"],
            }
        ),
        default_modules={
            "models": ("User",),
            "services": ("UserService",),
            "controllers": ("UserController",),
            "views": ("templates",),
        },
        supported_profiles=("java", "dotnet", "nodejs", "django", "laravel"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.CQRS,
        name="CQRS (Command Query Responsibility Segregation)",
        description="Separate read and write models with dedicated command/query handlers",
        layers=_layers(
            ("domain", "Domain entities and write model"),
            ("commands", "Command definitions and handlers (write side)"),
            ("queries", "Query definitions and handlers (read side)"),
            ("read-model", "Read-optimized projections"),
            ("infrastructure", "Persistence, messaging, event bus"),
            ("presentation", "API endpoints dispatching commands/queries"),
        ),
        constraints=_constraints(
            {
                "domain": ["commands", "queries", "read-model", "infrastructure", "presentation"],
                "commands": ["queries", "read-model", "presentation"],
                "queries": ["commands", "presentation"],
                "read-model": ["commands", "presentation"],
            }
        ),
        default_modules={
            "domain": ("entities", "events", "value-objects"),
            "commands": ("handlers", "definitions"),
            "queries": ("handlers", "definitions"),
            "read-model": ("projections",),
            "infrastructure": ("persistence", "event-bus"),
            "presentation": ("controllers",),
        },
        supported_profiles=("java", "dotnet"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.MICROSERVICES,
        name="Microservices Architecture",
        description=(
            "Distributed services with API gateway, service communication, "
            "and independent deployments"
        ),
        layers=_layers(
            ("gateway", "API gateway / reverse proxy"),
            ("services", "Independent microservices"),
            ("shared", "Shared contracts, DTOs, events"),
        ),
        constraints=_constraints({"services/*": ["services/*"]}),
        default_modules={
            "gateway": ("config", "routes"),
            "services": ("auth-service", "user-service", "order-service"),
            "shared": ("contracts", "events", "dto"),
        },
        supported_profiles=("java", "dotnet"),
    ),
    ArchitectureDefinition(
        id=ArchitectureStyle.MODULAR_MONOLITH,
        name="Modular Monolith",
        description="Clear module boundaries without the complexity of distributed systems",
        layers=_layers(
            ("shared", "Cross-cutting concerns, shared kernel"),
            ("modules", "Self-contained business modules with internal layering"),
            ("host", "Application host, composition root, startup"),
        ),
        constraints=_constraints({"modules/*": ["modules/*"]}),
        default_modules={
            "shared": ("kernel", "contracts", "events"),
            "modules": ("users", "billing", "notifications"),
            "host": ("startup", "config"),
        },
        supported_profiles=("java", "dotnet", "nodejs", "laravel"),
    ),
)

# Built-in rule ids active for each style, in evaluation order.
STYLE_RULES: Mapping[ArchitectureStyle, tuple[str, ...]] = MappingProxyType(
    {
        ArchitectureStyle.CLEAN: (
            "clean/domain-isolation",
            "clean/application-isolation",
            "naming/no-impl-in-domain",
        ),
        ArchitectureStyle.FEATURE_BASED: ("feature/isolation",),
        ArchitectureStyle.LAYERED: ("naming/no-impl-in-domain",),
        ArchitectureStyle.HEXAGONAL: (
            "hexagonal/port-isolation",
            "clean/domain-isolation",
            "naming/no-impl-in-domain",
        ),
        ArchitectureStyle.DDD: (
            "ddd/aggregate-isolation",
            "clean/domain-isolation",
            "naming/no-impl-in-domain",
        ),
        ArchitectureStyle.FEATURE_SLICED: ("fsd/layer-order", "feature/isolation"),
        ArchitectureStyle.MVC: ("naming/no-impl-in-domain",),
        ArchitectureStyle.CQRS: ("cqrs/segregation", "naming/no-impl-in-domain"),
        ArchitectureStyle.MICROSERVICES: ("naming/no-impl-in-domain",),
        ArchitectureStyle.MODULAR_MONOLITH: (
            "modular/module-isolation",
            "naming/no-impl-in-domain",
        ),
    }
)


class ArchitectureRegistry:
    """Immutable catalog of architecture definitions and their rule sets.

    Built once at process start and shared read-only by every check.
    """

    def __init__(
        self,
        definitions: Iterable[ArchitectureDefinition],
        style_rules: Mapping[ArchitectureStyle, Sequence[str]],
    ):
        by_id: dict[ArchitectureStyle, ArchitectureDefinition] = {}
        for definition in definitions:
            if definition.id in by_id:
                raise InvalidConfigError("architecture", definition.id.value, "duplicate id")
            _check_definition(definition)
            by_id[definition.id] = definition

        for style in style_rules:
            if style not in by_id:
                raise InvalidConfigError("style_rules", style.value, "no such architecture")

        self._definitions: Mapping[ArchitectureStyle, ArchitectureDefinition] = MappingProxyType(by_id)
        self._style_rules: Mapping[ArchitectureStyle, tuple[str, ...]] = MappingProxyType(
            {style: tuple(ids) for style, ids in style_rules.items()}
        )

    def get_definition(self, style_id: StyleId) -> Optional[ArchitectureDefinition]:
        """Look up a definition; unknown ids return None."""
        style = ArchitectureStyle.parse(style_id)
        if style is None:
            return None
        return self._definitions.get(style)

    def require_definition(self, style_id: StyleId) -> ArchitectureDefinition:
        """Look up a definition, raising UnknownArchitectureError if absent."""
        definition = self.get_definition(style_id)
        if definition is None:
            raise UnknownArchitectureError(str(style_id), self.style_ids())
        return definition

    def list_definitions(self) -> tuple[ArchitectureDefinition, ...]:
        """All definitions in registration order."""
        return tuple(self._definitions.values())

    def list_definitions_for_profile(self, profile: str) -> tuple[ArchitectureDefinition, ...]:
        """Definitions offered for a technology stack (e.g. ``java``)."""
        return tuple(d for d in self._definitions.values() if d.supports(profile))

    def rule_ids_for(self, style_id: StyleId) -> tuple[str, ...]:
        """Built-in rule ids for a style; empty for unknown styles."""
        style = ArchitectureStyle.parse(style_id)
        if style is None:
            return ()
        return self._style_rules.get(style, ())

    def style_ids(self) -> list[str]:
        return [style.value for style in self._definitions]

    def __contains__(self, style_id: object) -> bool:
        if not isinstance(style_id, (str, ArchitectureStyle)):
            return False
        return self.get_definition(style_id) is not None

    def __iter__(self) -> Iterator[ArchitectureDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


def _check_definition(definition: ArchitectureDefinition) -> None:
    names = definition.layer_names
    if len(set(names)) != len(names):
        raise InvalidConfigError("layers", definition.id.value, "duplicate layer name")

    known = set(names)
    for constraint in definition.constraints:
        for layer in (constraint.from_layer, *constraint.forbidden):
            # "features/*" refers to slices of the "features" layer
            base = layer[:-2] if layer.endswith("/*") else layer
            if base not in known:
                raise InvalidConfigError(
                    "constraints", definition.id.value, f"unknown layer '{layer}'"
                )


DEFAULT_REGISTRY = ArchitectureRegistry(ARCHITECTURE_DEFINITIONS, STYLE_RULES)


def get_definition(style_id: StyleId) -> Optional[ArchitectureDefinition]:
    return DEFAULT_REGISTRY.get_definition(style_id)


def list_definitions() -> tuple[ArchitectureDefinition, ...]:
    return DEFAULT_REGISTRY.list_definitions()
