"""Depth-first walker over TypeDoc type expressions.

Every type expression is a dict tagged by its ``type`` field. The walker
visits nested types in a fixed order per variant:

  - typeArguments (any variant)     → each argument, before the variant's own positions
  - intrinsic, literal, reference   → leaf
  - array                           → elementType
  - union, intersection             → types[]
  - tuple                           → elements[]
  - typeOperator                    → target
  - conditional                     → checkType, extendsType, trueType, falseType
  - mapped                          → parameterType, templateType
  - indexedAccess                   → objectType, indexType
  - reflection                      → declaration signatures (type parameters,
                                      parameters, return type) or, without
                                      signatures, declaration children
                                      (type parameters, type)

Any other ``type`` value means the JSON was produced by a generator version
this tool does not understand, and walking stops with UnsupportedTypeKindError.
"""

from typing import Any, Callable

from typedoc_ingest.domain.enums import TypeKind

_LEAF_KINDS = {TypeKind.INTRINSIC.value, TypeKind.LITERAL.value, TypeKind.REFERENCE.value}


class UnsupportedTypeKindError(ValueError):
    """A type expression kind outside the supported variant set."""

    def __init__(self, kind: Any) -> None:
        super().__init__(f"Not supported type: {kind}")
        self.kind = kind


def walk_type(type_: dict[str, Any], on_reference: Callable[[int], None]) -> None:
    """Report the target id of every reference type nested in ``type_``.

    References without a numeric ``target`` point outside the document
    (e.g. built-ins) and are not reported. Duplicates are reported once per
    occurrence.

    Args:
        type_: Type expression dict.
        on_reference: Called with each reference target id, depth-first,
            left to right.

    Raises:
        UnsupportedTypeKindError: A nested type kind is not supported.
    """
    def _visit(node: dict[str, Any]) -> None:
        if node.get('type') == TypeKind.REFERENCE.value:
            target = node.get('target')
            if isinstance(target, int) and not isinstance(target, bool):
                on_reference(target)

    traverse_type(type_, _visit)


def traverse_type(type_: dict[str, Any], callback: Callable[[dict[str, Any]], None]) -> None:
    """Call ``callback`` for ``type_`` and every type expression nested in it.

    Raises:
        UnsupportedTypeKindError: A nested type kind is not supported.
    """
    callback(type_)

    for arg in type_.get('typeArguments') or []:
        traverse_type(arg, callback)

    kind = type_.get('type')

    if kind in _LEAF_KINDS:
        return

    if kind == TypeKind.REFLECTION.value:
        _traverse_declaration(type_.get('declaration') or {}, callback)
    elif kind == TypeKind.ARRAY.value:
        traverse_type(type_['elementType'], callback)
    elif kind in (TypeKind.UNION.value, TypeKind.INTERSECTION.value):
        for member in type_.get('types') or []:
            traverse_type(member, callback)
    elif kind == TypeKind.TUPLE.value:
        for element in type_.get('elements') or []:
            traverse_type(element, callback)
    elif kind == TypeKind.TYPE_OPERATOR.value:
        traverse_type(type_['target'], callback)
    elif kind == TypeKind.CONDITIONAL.value:
        for key in ('checkType', 'extendsType', 'trueType', 'falseType'):
            traverse_type(type_[key], callback)
    elif kind == TypeKind.MAPPED.value:
        traverse_type(type_['parameterType'], callback)
        traverse_type(type_['templateType'], callback)
    elif kind == TypeKind.INDEXED_ACCESS.value:
        traverse_type(type_['objectType'], callback)
        traverse_type(type_['indexType'], callback)
    else:
        raise UnsupportedTypeKindError(kind)


def type_parameters(reflection: dict[str, Any]) -> list[dict[str, Any]]:
    """Return a reflection's type parameters.

    Older TypeDoc releases store signature type parameters under
    ``typeParameter``; newer ones use ``typeParameters``.
    """
    return reflection.get('typeParameters') or reflection.get('typeParameter') or []


def _traverse_declaration(declaration: dict[str, Any], callback: Callable[[dict[str, Any]], None]) -> None:
    """Walk an inline (anonymous) declaration of a reflection type."""
    if 'signatures' in declaration:
        for signature in declaration.get('signatures') or []:
            _traverse_type_parameters(signature, callback)
            for param in signature.get('parameters') or []:
                if param.get('type'):
                    traverse_type(param['type'], callback)
            if signature.get('type'):
                traverse_type(signature['type'], callback)
    else:
        for child in declaration.get('children') or []:
            _traverse_type_parameters(child, callback)
            if child.get('type'):
                traverse_type(child['type'], callback)


def _traverse_type_parameters(reflection: dict[str, Any], callback: Callable[[dict[str, Any]], None]) -> None:
    for param in type_parameters(reflection):
        if param.get('type'):
            traverse_type(param['type'], callback)
        if param.get('default'):
            traverse_type(param['default'], callback)
