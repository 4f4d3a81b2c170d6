"""Intermediate Representation (IR) for introspected GraphQL schemas.

Every named type is one frozen dataclass per kind, so code that needs
kind-specific data dispatches on the class rather than probing for
optional attributes. Instances are built once by the parser and never
mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class TypeKind(str, Enum):
    """The ``__TypeKind`` values of the introspection system."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


class OperationKind(str, Enum):
    """Root operation types."""
    QUERY = "QUERY"
    MUTATION = "MUTATION"
    SUBSCRIPTION = "SUBSCRIPTION"


@dataclass(frozen=True)
class TypeRef:
    """A (possibly wrapped) reference to a named type.

    Wrapper kinds carry ``of_type`` and no name; named kinds carry a name
    and no ``of_type``.
    """
    kind: TypeKind
    name: str | None = None
    of_type: "TypeRef | None" = None


@dataclass(frozen=True)
class InputValue:
    """An argument or an input object field."""
    name: str
    type: TypeRef
    description: str | None = None
    default_value: str | None = None


@dataclass(frozen=True)
class Field:
    """A field of an object or interface type."""
    name: str
    type: TypeRef
    description: str | None = None
    args: tuple[InputValue, ...] = ()
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class EnumValue:
    name: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class NamedType:
    """Common part of every schema-level type definition."""
    kind: ClassVar[TypeKind]
    name: str
    description: str | None = None


@dataclass(frozen=True)
class ScalarType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.SCALAR


@dataclass(frozen=True)
class ObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.OBJECT
    fields: tuple[Field, ...] = ()
    interfaces: tuple[str, ...] = ()


@dataclass(frozen=True)
class InterfaceType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INTERFACE
    fields: tuple[Field, ...] = ()
    possible_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnionType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.UNION
    possible_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.ENUM
    values: tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class InputObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT
    input_fields: tuple[InputValue, ...] = ()


@dataclass(frozen=True)
class Schema:
    """Complete intermediate representation of an introspected schema.

    ``raw`` keeps the ``__schema`` object exactly as the endpoint returned it.
    """
    types: dict[str, NamedType] = field(default_factory=dict)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def get_type_by_name(self, name: str) -> NamedType | None:
        """Look up a type by name."""
        return self.types.get(name)

    def root_type_name(self, operation: OperationKind) -> str | None:
        """Return the name of the root type for an operation kind, if any."""
        if operation is OperationKind.QUERY:
            return self.query_type
        if operation is OperationKind.MUTATION:
            return self.mutation_type
        return self.subscription_type
