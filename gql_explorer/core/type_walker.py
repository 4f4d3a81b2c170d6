"""Helpers for walking LIST/NON_NULL wrapper chains."""

from .errors import SchemaIntegrityError
from .ir import TypeKind, TypeRef

SCALAR_LIKE_KINDS = frozenset({TypeKind.SCALAR, TypeKind.ENUM})

# Stands in for the part of a chain a depth-limited query did not return
TRUNCATED_TYPE = "?"


def _wrapped(ref: TypeRef) -> TypeRef:
    if ref.of_type is None:
        raise SchemaIntegrityError(f"{ref.kind.value} type reference has no ofType")
    return ref.of_type


def unwrap(ref: TypeRef) -> TypeRef:
    """Follow wrappers down to the named leaf reference."""
    while ref.kind.is_wrapper:
        ref = _wrapped(ref)
    if ref.name is None:
        raise SchemaIntegrityError(f"{ref.kind.value} type reference has no name")
    return ref


def unwrap_to_named(ref: TypeRef) -> str:
    """Return the name of the named type at the bottom of a wrapper chain.

    Example:
        NON_NULL(LIST(NON_NULL(SCALAR Int))) -> "Int"
    """
    return unwrap(ref).name


def is_scalar_like(kind: TypeKind) -> bool:
    """True for kinds that can be selected without a sub-selection."""
    return kind in SCALAR_LIKE_KINDS


def render_type_syntax(ref: TypeRef, partial: bool = False) -> str:
    """Render a type reference in GraphQL syntax, e.g. ``[Int!]!``.

    With ``partial``, the missing tail of a truncated chain renders as
    ``?``, e.g. ``[[?]!]``.
    """
    if ref.kind.is_wrapper:
        if partial and ref.of_type is None:
            inner = TRUNCATED_TYPE
        else:
            inner = render_type_syntax(_wrapped(ref), partial)
        return f"{inner}!" if ref.kind is TypeKind.NON_NULL else f"[{inner}]"
    if ref.name is None:
        raise SchemaIntegrityError(f"{ref.kind.value} type reference has no name")
    return ref.name
