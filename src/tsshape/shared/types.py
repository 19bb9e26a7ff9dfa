"""
Type Expression Model

tsc Pattern: ts.Type / ts.TypeFlags

Canonical, form-independent representation of a TypeScript type expression.
Every variant is an immutable (frozen) dataclass and hashable, so canonical
types can live in sets (unions) and be compared structurally with `==`.
"""

from dataclasses import dataclass
from typing import Tuple, FrozenSet, Generic, TypeVar, Union, Optional, Iterator
from abc import ABC, abstractmethod
from enum import Enum


class TypeKind(Enum):
    """
    Type kind tag.

    tsc Pattern: ts.TypeFlags
    """
    PRIMITIVE = "primitive"  # string, number, boolean, any, null, ...
    IMPLICIT = "implicit"    # no annotation written
    ARRAY = "array"
    TUPLE = "tuple"
    UNION = "union"
    INTERSECTION = "intersection"
    OBJECT = "object"        # inline object-shape literal
    GENERIC = "generic"      # named reference, possibly parameterized
    TYPE_QUERY = "type_query"
    LITERAL = "literal"


T = TypeVar('T')


@dataclass(frozen=True)
class TypeExpr:
    """
    Base of all canonical types.

    Visitor dispatch goes through `accept`, keyed on `kind`.
    """
    kind: TypeKind

    def accept(self, visitor: 'TypeVisitor[T]') -> T:
        _type_visitor_dispatch = {
            TypeKind.PRIMITIVE: visitor.visit_primitive_type,
            TypeKind.IMPLICIT: visitor.visit_implicit_type,
            TypeKind.ARRAY: visitor.visit_array_type,
            TypeKind.TUPLE: visitor.visit_tuple_type,
            TypeKind.UNION: visitor.visit_union_type,
            TypeKind.INTERSECTION: visitor.visit_intersection_type,
            TypeKind.OBJECT: visitor.visit_object_shape_type,
            TypeKind.GENERIC: visitor.visit_generic_type,
            TypeKind.TYPE_QUERY: visitor.visit_type_query_type,
            TypeKind.LITERAL: visitor.visit_literal_type,
        }
        return _type_visitor_dispatch[self.kind](self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class PrimitiveType(TypeExpr):
    """Keyword type (string, number, boolean, any, null, unknown, ...)"""
    name: str

    def __init__(self, name: str):
        super().__init__(kind=TypeKind.PRIMITIVE)
        object.__setattr__(self, 'name', name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"PrimitiveType({self.name!r})"


@dataclass(frozen=True)
class ImplicitType(TypeExpr):
    """
    A field written without a type annotation.

    Behaves like `any` for comparison by default, but is tracked separately so
    callers can warn about it.
    """

    def __init__(self):
        super().__init__(kind=TypeKind.IMPLICIT)

    def __str__(self) -> str:
        return "<implicit any>"

    def __repr__(self) -> str:
        return "ImplicitType()"


@dataclass(frozen=True)
class ArrayType(TypeExpr):
    """Array type: T[] (and Array<T>)"""
    element: TypeExpr

    def __init__(self, element: TypeExpr):
        super().__init__(kind=TypeKind.ARRAY)
        object.__setattr__(self, 'element', element)

    def __str__(self) -> str:
        inner = str(self.element)
        if isinstance(self.element, (UnionType, IntersectionType)):
            inner = f"({inner})"
        return f"{inner}[]"


@dataclass(frozen=True)
class TupleElement:
    """One tuple position; `optional` comes from the `?` marker only."""
    type: TypeExpr
    optional: bool = False

    def __str__(self) -> str:
        return f"{self.type}?" if self.optional else str(self.type)


@dataclass(frozen=True)
class TupleType(TypeExpr):
    """Tuple type: [A, B?]"""
    elements: Tuple[TupleElement, ...]

    def __init__(self, elements: Tuple[TupleElement, ...]):
        super().__init__(kind=TypeKind.TUPLE)
        object.__setattr__(self, 'elements', tuple(elements))

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class UnionType(TypeExpr):
    """
    Union type: A | B

    Members are a set; order is irrelevant and duplicates collapse.
    """
    members: FrozenSet[TypeExpr]

    def __init__(self, members):
        super().__init__(kind=TypeKind.UNION)
        object.__setattr__(self, 'members', frozenset(members))

    def __str__(self) -> str:
        return " | ".join(sorted(str(m) for m in self.members))


@dataclass(frozen=True)
class IntersectionType(TypeExpr):
    """
    Intersection type: A & B

    Members keep the order they were written in (it decides merge tie-breaks),
    but equality ignores it.
    """
    members: Tuple[TypeExpr, ...]

    def __init__(self, members):
        super().__init__(kind=TypeKind.INTERSECTION)
        object.__setattr__(self, 'members', tuple(members))

    def __eq__(self, other):
        if not isinstance(other, IntersectionType):
            return NotImplemented
        return frozenset(self.members) == frozenset(other.members)

    def __hash__(self):
        return hash((self.kind, frozenset(self.members)))

    def __str__(self) -> str:
        return " & ".join(str(m) for m in self.members)


@dataclass(frozen=True)
class ObjectField:
    """Property of an inline object shape."""
    name: str
    optional: bool
    type: TypeExpr

    def __str__(self) -> str:
        marker = "?" if self.optional else ""
        return f"{self.name}{marker}: {self.type}"


@dataclass(frozen=True)
class ObjectShapeType(TypeExpr):
    """
    Inline object-shape literal: { a: string; b?: number }

    Fields keep source order for display; equality treats them as a mapping.
    """
    fields: Tuple[ObjectField, ...]

    def __init__(self, fields):
        super().__init__(kind=TypeKind.OBJECT)
        object.__setattr__(self, 'fields', tuple(fields))

    def __eq__(self, other):
        if not isinstance(other, ObjectShapeType):
            return NotImplemented
        return frozenset(self.fields) == frozenset(other.fields)

    def __hash__(self):
        return hash((self.kind, frozenset(self.fields)))

    def __contains__(self, name: str) -> bool:
        return any(f.name == name for f in self.fields)

    def __iter__(self) -> Iterator[ObjectField]:
        return iter(self.fields)

    def get(self, name: str) -> Optional[ObjectField]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def __str__(self) -> str:
        if not self.fields:
            return "{}"
        return "{ " + "; ".join(str(f) for f in self.fields) + " }"


@dataclass(frozen=True)
class GenericType(TypeExpr):
    """
    Named type reference with positional type arguments: Map<K, V>

    A plain reference (`Foo`) has no arguments.
    """
    name: str
    type_args: Tuple[TypeExpr, ...] = ()

    def __init__(self, name: str, type_args: Tuple[TypeExpr, ...] = ()):
        super().__init__(kind=TypeKind.GENERIC)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'type_args', tuple(type_args))

    def __str__(self) -> str:
        if not self.type_args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.type_args)}>"


@dataclass(frozen=True)
class TypeQueryType(TypeExpr):
    """`typeof X`: the type of another named entity, resolved lazily."""
    referenced_name: str

    def __init__(self, referenced_name: str):
        super().__init__(kind=TypeKind.TYPE_QUERY)
        object.__setattr__(self, 'referenced_name', referenced_name)

    def __str__(self) -> str:
        return f"typeof {self.referenced_name}"


def format_number(value: float) -> str:
    """Shortest faithful text of a numeric literal (42, 0.5, 1e+21)"""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


LiteralValue = Union[str, float, bool]


@dataclass(frozen=True)
class LiteralType(TypeExpr):
    """String, numeric or boolean literal type: 'a', 42, true"""
    value: LiteralValue
    literal_kind: str  # "string" | "number" | "boolean"

    def __init__(self, value: LiteralValue):
        super().__init__(kind=TypeKind.LITERAL)
        if isinstance(value, bool):
            literal_kind = "boolean"
        elif isinstance(value, (int, float)):
            literal_kind = "number"
            value = float(value)
        else:
            literal_kind = "string"
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'literal_kind', literal_kind)

    def __str__(self) -> str:
        if self.literal_kind == "string":
            return f'"{self.value}"'
        if self.literal_kind == "boolean":
            return "true" if self.value else "false"
        return format_number(self.value)


class TypeVisitor(ABC, Generic[T]):
    """
    Type visitor pattern.

    tsc Pattern: ts.visitEachChild over ts.TypeNode kinds
    """

    @abstractmethod
    def visit_primitive_type(self, ty: PrimitiveType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_implicit_type(self, ty: ImplicitType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_array_type(self, ty: ArrayType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_tuple_type(self, ty: TupleType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_union_type(self, ty: UnionType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_intersection_type(self, ty: IntersectionType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_object_shape_type(self, ty: ObjectShapeType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_generic_type(self, ty: GenericType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_query_type(self, ty: TypeQueryType) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_literal_type(self, ty: LiteralType) -> T:
        raise NotImplementedError


class TypeTransformer(TypeVisitor[TypeExpr]):
    """
    Identity rebuild of a type tree. Subclasses override the visit_* methods
    for the variants they rewrite; everything else is rebuilt bottom-up.
    """

    def transform(self, ty: TypeExpr) -> TypeExpr:
        return ty.accept(self)

    def visit_primitive_type(self, ty: PrimitiveType) -> TypeExpr:
        return ty

    def visit_implicit_type(self, ty: ImplicitType) -> TypeExpr:
        return ty

    def visit_array_type(self, ty: ArrayType) -> TypeExpr:
        return ArrayType(self.transform(ty.element))

    def visit_tuple_type(self, ty: TupleType) -> TypeExpr:
        return TupleType(tuple(TupleElement(self.transform(e.type), e.optional) for e in ty.elements))

    def visit_union_type(self, ty: UnionType) -> TypeExpr:
        return UnionType(self.transform(m) for m in ty.members)

    def visit_intersection_type(self, ty: IntersectionType) -> TypeExpr:
        return IntersectionType(self.transform(m) for m in ty.members)

    def visit_object_shape_type(self, ty: ObjectShapeType) -> TypeExpr:
        return ObjectShapeType(ObjectField(f.name, f.optional, self.transform(f.type)) for f in ty.fields)

    def visit_generic_type(self, ty: GenericType) -> TypeExpr:
        return GenericType(ty.name, tuple(self.transform(a) for a in ty.type_args))

    def visit_type_query_type(self, ty: TypeQueryType) -> TypeExpr:
        return ty

    def visit_literal_type(self, ty: LiteralType) -> TypeExpr:
        return ty


# Common primitive types
STRING = PrimitiveType("string")
NUMBER = PrimitiveType("number")
BOOLEAN = PrimitiveType("boolean")
ANY = PrimitiveType("any")
NULL = PrimitiveType("null")
UNKNOWN = PrimitiveType("unknown")
UNDEFINED = PrimitiveType("undefined")
IMPLICIT = ImplicitType()
