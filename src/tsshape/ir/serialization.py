"""
Shape Serialization
===================

Converts shape descriptors to a canonical S-expression format for golden
files and debugging, and to plain dicts for JSON output.

Both forms are order-independent: fields, union members and intersection
members are emitted in a sorted order, so structurally equal descriptors
serialize identically whatever order they were written in. Source
locations are never serialized.

Uses structured sexpr (nested lists + sexpdata.Symbol),
then pretty-prints for readable output.
"""

import json
from typing import Any, Dict, Iterable, List

import sexpdata

from ..analysis.shapes import ShapeDescriptor
from ..shared.types import (
    TypeExpr, TypeVisitor, PrimitiveType, ImplicitType, ArrayType, TupleType,
    UnionType, IntersectionType, ObjectShapeType, GenericType, TypeQueryType,
    LiteralType, format_number,
)
from ..utils.config import SEXPR_INDENT, SEXPR_MAX_LINE


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = SEXPR_INDENT, max_line: int = SEXPR_MAX_LINE) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    if not isinstance(sexpr, list):
        # Symbols stay bare, names are quoted
        return sexpdata.dumps(sexpr)
    if not sexpr:
        return "()"
    parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
    one_line = "(" + " ".join(parts) + ")"
    if len(indent_str * indent) + len(one_line) <= max_line and "\n" not in one_line:
        return one_line
    prefix = indent_str * indent
    next_prefix = indent_str * (indent + 1)
    # Head atom stays on the opening line
    rest = "\n".join(next_prefix + p for p in parts[1:])
    inner = parts[0] + ("\n" + rest if rest else "")
    return f"({inner}\n{prefix})"


def serialize_shape(shape: ShapeDescriptor, pretty: bool = True) -> str:
    """
    Serialize a ShapeDescriptor to S-expression string.

    Args:
        shape: descriptor to serialize
        pretty: Use pretty-printed format (default True). Set False for compact single-line.

    Returns:
        S-expression string (pretty-printed by default)
    """
    sexpr = ShapeSerializer().serialize_to_sexpr(shape)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


def serialize_type(ty: TypeExpr) -> str:
    """Compact S-expression of a single canonical type"""
    return sexpdata.dumps(ty.accept(ShapeSerializer()))


class ShapeSerializer(TypeVisitor[Any]):
    """
    Descriptor / TypeExpr to structured S-expression serializer.

    Returns nested lists; keywords are sexpdata.Symbol, names are plain str.
    """

    def _sym(self, s: str) -> sexpdata.Symbol:
        """Keyword atom (no quotes in output)"""
        return sexpdata.Symbol(s)

    def _str(self, s: str) -> str:
        """Name or string value (quoted by sexpdata)"""
        return s

    def _sorted(self, items: Iterable[TypeExpr]) -> List[Any]:
        serialized = [t.accept(self) for t in items]
        return sorted(serialized, key=sexpdata.dumps)

    def serialize_to_sexpr(self, shape: ShapeDescriptor) -> List[Any]:
        fields = [
            [self._sym("field"), self._str(f.name),
             self._sym("optional" if f.optional else "required"), f.type.accept(self)]
            for f in sorted(shape.fields, key=lambda f: f.name)
        ]
        return [self._sym("shape"), self._str(shape.name), self._sym(shape.kind.value)] + fields

    def visit_primitive_type(self, ty: PrimitiveType) -> Any:
        return self._sym(ty.name)

    def visit_implicit_type(self, ty: ImplicitType) -> Any:
        return [self._sym("implicit")]

    def visit_array_type(self, ty: ArrayType) -> Any:
        return [self._sym("array"), ty.element.accept(self)]

    def visit_tuple_type(self, ty: TupleType) -> Any:
        elements = []
        for e in ty.elements:
            inner = e.type.accept(self)
            elements.append([self._sym("optional"), inner] if e.optional else inner)
        return [self._sym("tuple")] + elements

    def visit_union_type(self, ty: UnionType) -> Any:
        return [self._sym("union")] + self._sorted(ty.members)

    def visit_intersection_type(self, ty: IntersectionType) -> Any:
        return [self._sym("intersection")] + self._sorted(ty.members)

    def visit_object_shape_type(self, ty: ObjectShapeType) -> Any:
        return [self._sym("object")] + [
            [self._sym("field"), self._str(f.name),
             self._sym("optional" if f.optional else "required"), f.type.accept(self)]
            for f in sorted(ty.fields, key=lambda f: f.name)
        ]

    def visit_generic_type(self, ty: GenericType) -> Any:
        return [self._sym("generic"), self._str(ty.name)] + [a.accept(self) for a in ty.type_args]

    def visit_type_query_type(self, ty: TypeQueryType) -> Any:
        return [self._sym("typeof"), self._str(ty.referenced_name)]

    def visit_literal_type(self, ty: LiteralType) -> Any:
        if ty.literal_kind == "string":
            value = self._str(ty.value)
        elif ty.literal_kind == "boolean":
            value = self._sym("true" if ty.value else "false")
        else:
            value = self._sym(format_number(ty.value))
        return [self._sym("literal"), value]


# ============================================================================
# Dict / JSON form
# ============================================================================

class _DictBuilder(TypeVisitor[Dict[str, Any]]):

    def _sorted(self, items: Iterable[TypeExpr]) -> List[Dict[str, Any]]:
        return sorted((t.accept(self) for t in items), key=lambda d: json.dumps(d, sort_keys=True))

    def visit_primitive_type(self, ty: PrimitiveType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "name": ty.name}

    def visit_implicit_type(self, ty: ImplicitType) -> Dict[str, Any]:
        return {"kind": ty.kind.value}

    def visit_array_type(self, ty: ArrayType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "element": ty.element.accept(self)}

    def visit_tuple_type(self, ty: TupleType) -> Dict[str, Any]:
        return {
            "kind": ty.kind.value,
            "elements": [{"type": e.type.accept(self), "optional": e.optional} for e in ty.elements],
        }

    def visit_union_type(self, ty: UnionType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "members": self._sorted(ty.members)}

    def visit_intersection_type(self, ty: IntersectionType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "members": self._sorted(ty.members)}

    def visit_object_shape_type(self, ty: ObjectShapeType) -> Dict[str, Any]:
        return {
            "kind": ty.kind.value,
            "fields": [
                {"name": f.name, "optional": f.optional, "type": f.type.accept(self)}
                for f in sorted(ty.fields, key=lambda f: f.name)
            ],
        }

    def visit_generic_type(self, ty: GenericType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "name": ty.name, "type_args": [a.accept(self) for a in ty.type_args]}

    def visit_type_query_type(self, ty: TypeQueryType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "name": ty.referenced_name}

    def visit_literal_type(self, ty: LiteralType) -> Dict[str, Any]:
        return {"kind": ty.kind.value, "literal_kind": ty.literal_kind, "value": ty.value}


def type_to_dict(ty: TypeExpr) -> Dict[str, Any]:
    """JSON-ready dict of a canonical type"""
    return ty.accept(_DictBuilder())


def shape_to_dict(shape: ShapeDescriptor) -> Dict[str, Any]:
    """JSON-ready dict of a descriptor; fields sorted by name"""
    builder = _DictBuilder()
    return {
        "name": shape.name,
        "kind": shape.kind.value,
        "fields": [
            {"name": f.name, "optional": f.optional, "type": f.type.accept(builder)}
            for f in sorted(shape.fields, key=lambda f: f.name)
        ],
    }


def shapes_to_json(shapes: Iterable[ShapeDescriptor], indent: int = 2) -> str:
    return json.dumps([shape_to_dict(s) for s in shapes], indent=indent)
