"""Intermediate Representation (IR) for GraphQL resolver type generation.

Every node is an immutable dataclass with a single operation,
``translate(translator, nullable=True)``, which hands the node back to the
matching ``translate_*`` method of a :class:`~gql_tsgen.core.translator.Translator`.
Nodes never format text themselves, so a different output language only
needs a new translator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .translator import Translator


ROOT_TYPE_NAMES = ("Query", "Mutation", "Subscription")


def _freeze(node, *names: str):
    """Store list-valued fields of a frozen node as tuples."""
    for name in names:
        object.__setattr__(node, name, tuple(getattr(node, name)))


@dataclass(frozen=True)
class IRDescription:
    """Free-text documentation attached to a definition."""
    text: str | None = None

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_description(self)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class IRNamedType:
    """A type referenced by name: a built-in scalar or a user type."""
    name: str

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_named_type(self, nullable)


@dataclass(frozen=True)
class IRNonNullType:
    """Wraps a type that can never be null (``T!``)."""
    base: IRType

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_non_null_type(self)


@dataclass(frozen=True)
class IRListType:
    """A list of ``base`` (``[T]``)."""
    base: IRType

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_list_type(self, nullable)


@dataclass(frozen=True)
class IRCompoundType:
    """An inline record of named types.

    Used for ``@requires`` clauses and ``@key`` field sets. Members keep
    the order they were declared in.
    """
    fields: tuple[tuple[str, IRType], ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "fields", tuple((name, type_) for name, type_ in self.fields)
        )

    @classmethod
    def from_mapping(cls, mapping: dict[str, IRType]) -> IRCompoundType:
        return cls(tuple(mapping.items()))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def __len__(self) -> int:
        return len(self.fields)

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_compound_type(self)


IRType = IRNamedType | IRNonNullType | IRListType | IRCompoundType


# =============================================================================
# Definitions
# =============================================================================


@dataclass(frozen=True)
class IRArgumentDefinition:
    """An argument accepted by a resolver."""
    name: str
    type: IRType
    description: IRDescription = field(default_factory=IRDescription)

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_argument_definition(self)


@dataclass(frozen=True)
class IRFieldDefinition:
    """A field on an object's public shape."""
    name: str
    type: IRType
    description: IRDescription = field(default_factory=IRDescription)

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_field_definition(self)


@dataclass(frozen=True)
class IRResolverDefinition:
    """A resolver signature for one field of an object.

    ``parent`` is the name of the owning object definition. ``requires``
    lists the extra fields (from ``@requires``) the resolver reads on top
    of the parent representation. A field that is ``@external`` and never
    ``@provides``'d cannot be resolved by this service, which is what
    ``is_not_provided_and_external`` records.
    """
    name: str
    type: IRType
    parent: str
    arguments: tuple[IRArgumentDefinition, ...] = ()
    requires: IRCompoundType = field(default_factory=IRCompoundType)
    description: IRDescription = field(default_factory=IRDescription)
    is_root_type: bool = False
    is_not_provided_and_external: bool = False

    def __post_init__(self):
        _freeze(self, "arguments")

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_resolver_definition(self)


@dataclass(frozen=True)
class IRObjectDefinition:
    """A GraphQL object type together with its resolvers."""
    name: str
    fields: tuple[IRFieldDefinition, ...] = ()
    resolvers: tuple[IRResolverDefinition, ...] = ()
    description: IRDescription = field(default_factory=IRDescription)
    is_root_type: bool = False

    def __post_init__(self):
        _freeze(self, "fields", "resolvers")

    @property
    def is_root(self) -> bool:
        """True for operation entry points, flagged or named Query/Mutation/Subscription."""
        return self.is_root_type or self.name in ROOT_TYPE_NAMES

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_object_definition(self)


@dataclass(frozen=True)
class IREntityDefinition(IRObjectDefinition):
    """A federated entity: an object that can be resolved by reference.

    Each entry of ``keys`` is one alternative set of fields that is enough
    to look the entity up again.
    """
    keys: tuple[IRCompoundType, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _freeze(self, "keys")

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_entity_definition(self)


@dataclass(frozen=True)
class IREnumDefinition:
    """A GraphQL enum type."""
    name: str
    values: tuple[str, ...] = ()
    description: IRDescription = field(default_factory=IRDescription)

    def __post_init__(self):
        _freeze(self, "values")

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_enum_definition(self)


@dataclass(frozen=True)
class IRScalarDefinition:
    """A custom GraphQL scalar."""
    name: str
    description: IRDescription = field(default_factory=IRDescription)

    def translate(self, translator: Translator, nullable: bool = True) -> str:
        return translator.translate_scalar_definition(self)


@dataclass
class IRSchema:
    """Everything the parser found, ready to hand to a translator."""
    objects: list[IRObjectDefinition] = field(default_factory=list)
    enums: list[IREnumDefinition] = field(default_factory=list)
    scalars: list[IRScalarDefinition] = field(default_factory=list)

    @property
    def entities(self) -> list[IREntityDefinition]:
        """Return the objects that are federated entities."""
        return [o for o in self.objects if isinstance(o, IREntityDefinition)]

    def get_object(self, name: str) -> IRObjectDefinition | None:
        """Look up an object definition by name."""
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None
