"""Introspection result parser.

Turns the JSON returned for the standard introspection query into an
IR ``Schema``.
"""

from typing import Any

from graphql import get_introspection_query

from .errors import SchemaIntegrityError
from .ir import (
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    NamedType,
    ObjectType,
    ScalarType,
    Schema,
    TypeKind,
    TypeRef,
    UnionType,
)

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


def parse_type_ref(data: dict[str, Any] | None, partial: bool = False) -> TypeRef:
    """Build a TypeRef chain from an introspection ``__Type`` reference.

    With ``partial``, a wrapper whose ``ofType`` is missing ends the chain
    instead of raising. Depth-limited introspection queries cut deep
    chains short this way.
    """
    if not isinstance(data, dict):
        raise SchemaIntegrityError(f"Expected a type reference object, got {data!r}")

    try:
        kind = TypeKind(data.get("kind"))
    except ValueError:
        raise SchemaIntegrityError(f"Unknown type kind: {data.get('kind')!r}") from None

    if kind.is_wrapper:
        if data.get("ofType") is None:
            if partial:
                return TypeRef(kind=kind)
            raise SchemaIntegrityError(f"{kind.value} type reference has no ofType")
        return TypeRef(kind=kind, of_type=parse_type_ref(data["ofType"], partial))

    if not data.get("name"):
        raise SchemaIntegrityError(f"{kind.value} type reference has no name")
    return TypeRef(kind=kind, name=data["name"])


class IntrospectionParser:
    """Parses an introspection response into IR."""

    def __init__(self, result: dict[str, Any]):
        """Initialize with the ``data`` portion of an introspection response."""
        self.result = result

    def parse(self) -> Schema:
        """Parse the ``__schema`` object and return the complete IR."""
        raw = self.result.get("__schema") if isinstance(self.result, dict) else None
        if not isinstance(raw, dict):
            raise SchemaIntegrityError("Introspection query did not return a __schema object.")

        types: dict[str, NamedType] = {}
        try:
            for type_data in raw.get("types") or []:
                named = self._process_type(type_data)
                types[named.name] = named
        except (KeyError, TypeError, AttributeError) as e:
            raise SchemaIntegrityError(f"Malformed introspection type data: {e!r}") from e

        roots = {}
        for key in ("queryType", "mutationType", "subscriptionType"):
            ref = raw.get(key)
            name = ref.get("name") if isinstance(ref, dict) else None
            if name is not None and name not in types:
                raise SchemaIntegrityError(f"Root type '{name}' ({key}) is not defined in the schema")
            roots[key] = name

        return Schema(
            types=types,
            query_type=roots["queryType"],
            mutation_type=roots["mutationType"],
            subscription_type=roots["subscriptionType"],
            raw=raw,
        )

    def _process_type(self, data: dict[str, Any]) -> NamedType:
        name = data.get("name")
        if not name:
            raise SchemaIntegrityError(f"Schema type without a name: {data!r}")
        description = data.get("description")

        try:
            kind = TypeKind(data.get("kind"))
        except ValueError:
            raise SchemaIntegrityError(f"Type '{name}' has unknown kind {data.get('kind')!r}") from None

        if kind is TypeKind.OBJECT:
            return ObjectType(
                name=name,
                description=description,
                fields=self._process_fields(data.get("fields")),
                interfaces=self._names(data.get("interfaces")),
            )
        if kind is TypeKind.INTERFACE:
            return InterfaceType(
                name=name,
                description=description,
                fields=self._process_fields(data.get("fields")),
                possible_types=self._names(data.get("possibleTypes")),
            )
        if kind is TypeKind.UNION:
            return UnionType(
                name=name,
                description=description,
                possible_types=self._names(data.get("possibleTypes")),
            )
        if kind is TypeKind.ENUM:
            values = tuple(
                EnumValue(
                    name=v["name"],
                    description=v.get("description"),
                    is_deprecated=bool(v.get("isDeprecated")),
                    deprecation_reason=v.get("deprecationReason"),
                )
                for v in data.get("enumValues") or []
            )
            return EnumType(name=name, description=description, values=values)
        if kind is TypeKind.INPUT_OBJECT:
            return InputObjectType(
                name=name,
                description=description,
                input_fields=self._process_input_values(data.get("inputFields")),
            )
        if kind is TypeKind.SCALAR:
            return ScalarType(name=name, description=description)

        raise SchemaIntegrityError(f"Type '{name}' has wrapper kind {kind.value} at schema level")

    def _process_fields(self, field_data: list[dict[str, Any]] | None) -> tuple[Field, ...]:
        return tuple(
            Field(
                name=f["name"],
                type=parse_type_ref(f.get("type")),
                description=f.get("description"),
                args=self._process_input_values(f.get("args")),
                is_deprecated=bool(f.get("isDeprecated")),
                deprecation_reason=f.get("deprecationReason"),
            )
            for f in field_data or []
        )

    @staticmethod
    def _process_input_values(values: list[dict[str, Any]] | None) -> tuple[InputValue, ...]:
        return tuple(
            InputValue(
                name=v["name"],
                type=parse_type_ref(v.get("type")),
                description=v.get("description"),
                default_value=v.get("defaultValue"),
            )
            for v in values or []
        )

    @staticmethod
    def _names(refs: list[dict[str, Any]] | None) -> tuple[str, ...]:
        return tuple(r["name"] for r in refs or [] if r.get("name"))


def parse_introspection(result: dict[str, Any]) -> Schema:
    """Parse an introspection response ``data`` object into a Schema."""
    return IntrospectionParser(result).parse()
