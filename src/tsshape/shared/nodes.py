"""
Declaration Syntax Nodes
Raw, form-specific syntax produced by the front end.

These nodes mirror what was written (a class property, an interface member,
a parenthesized type, `Array<T>` vs `T[]`); the analysis layer turns them into
the canonical model in shared/types.py.

Visitor Pattern Support:
- Type nodes have accept() methods for polymorphic dispatch
- Declarations have accept() methods for form dispatch
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union, TypeVar, TYPE_CHECKING
from enum import Enum

from .source_location import SourceLocation

if TYPE_CHECKING:
    from .ast_visitor import TypeNodeVisitor, DeclarationVisitor

T = TypeVar('T')


class DeclarationKind(Enum):
    """The three shape-declaring forms (plus value declarations)"""
    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    VARIABLE = "variable"


class ASTNode:
    """
    Base class for all syntax nodes.

    Subclasses are frozen dataclasses; `location` never takes part in
    equality, so two parses of the same text compare equal.
    """
    __slots__ = ()

    def accept(self, visitor):
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


# =========================================================================
# TYPE NODES
# =========================================================================

class TypeNode(ASTNode):
    """Base class for written type expressions"""
    __slots__ = ()


@dataclass(frozen=True)
class KeywordTypeNode(TypeNode):
    """Keyword type: string, number, any, null, ..."""
    keyword: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_keyword_type(self)


@dataclass(frozen=True)
class TypeReferenceNode(TypeNode):
    """Named reference, possibly with type arguments: Foo, Map<K, V>, ns.Foo"""
    name: str
    type_args: Tuple[TypeNode, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_type_reference(self)


@dataclass(frozen=True)
class ArrayTypeNode(TypeNode):
    """Postfix array syntax: T[]"""
    element_type: TypeNode
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_array_type(self)


@dataclass(frozen=True)
class TupleMemberNode:
    """One written tuple position, `optional` set by a trailing `?`"""
    type: TypeNode
    optional: bool = False
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True)
class TupleTypeNode(TypeNode):
    """Tuple syntax: [A, B?]"""
    elements: Tuple[TupleMemberNode, ...]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_tuple_type(self)


@dataclass(frozen=True)
class UnionTypeNode(TypeNode):
    """A | B | C"""
    types: Tuple[TypeNode, ...]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_union_type(self)


@dataclass(frozen=True)
class IntersectionTypeNode(TypeNode):
    """A & B & C"""
    types: Tuple[TypeNode, ...]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_intersection_type(self)


@dataclass(frozen=True)
class TypeLiteralNode(TypeNode):
    """Inline object type: { a: string; b?: number }"""
    members: Tuple['MemberNode', ...]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_type_literal(self)


@dataclass(frozen=True)
class TypeQueryNode(TypeNode):
    """typeof X (X may be dotted: typeof ns.value)"""
    expr_name: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_type_query(self)


@dataclass(frozen=True)
class LiteralTypeNode(TypeNode):
    """Literal type: "a", 42, true"""
    value: Union[str, float, bool]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_literal_type(self)


@dataclass(frozen=True)
class ParenthesizedTypeNode(TypeNode):
    """(T)"""
    type: TypeNode
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_parenthesized_type(self)


@dataclass(frozen=True)
class TypeOperatorNode(TypeNode):
    """keyof T / unique symbol"""
    operator: str
    type: TypeNode
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_type_operator(self)


@dataclass(frozen=True)
class IndexedAccessTypeNode(TypeNode):
    """T["key"] / T[K]"""
    object_type: TypeNode
    index_type: TypeNode
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_indexed_access_type(self)


@dataclass(frozen=True)
class FunctionTypeNode(TypeNode):
    """(a: A, b?: B) => R; the parameter list is kept as written"""
    parameters: str
    return_type: TypeNode
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_function_type(self)


@dataclass(frozen=True)
class TemplateLiteralTypeNode(TypeNode):
    """`prefix-${T}`"""
    text: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_template_literal_type(self)


@dataclass(frozen=True)
class MappedTypeNode(TypeNode):
    """{ [K in C]?: V }"""
    key_name: str
    constraint: TypeNode
    value_type: TypeNode
    optional: bool = False
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_mapped_type(self)


@dataclass(frozen=True)
class ImplicitTypeNode(TypeNode):
    """Marker for a member written without an annotation"""

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_implicit_type(self)


IMPLICIT_TYPE_NODE = ImplicitTypeNode()


@dataclass(frozen=True)
class MergedTypeNode(TypeNode):
    """
    Type of a key declared by several intersected object literals.

    Never produced by the parser; the declaration reader builds it for
    `type T = { ... } & { ... }` and the normalizer folds the candidates
    with the right-biased merge.
    """
    types: Tuple[TypeNode, ...]
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: 'TypeNodeVisitor[T]') -> T:
        return visitor.visit_merged_type(self)


# =========================================================================
# MEMBERS
# =========================================================================

@dataclass(frozen=True)
class ParameterNode:
    """Method / constructor parameter"""
    name: str
    optional: bool = False
    type_annotation: Optional[TypeNode] = None
    modifiers: Tuple[str, ...] = ()
    is_rest: bool = False
    location: Optional[SourceLocation] = field(default=None, compare=False)


class MemberNode(ASTNode):
    """Base class for class members and type members"""
    __slots__ = ()


@dataclass(frozen=True)
class PropertyNode(MemberNode):
    """
    Class property or property signature.

    `optional` is the trailing `?` on the name; `type_annotation` is None when
    no annotation was written. `initializer` keeps the raw `= ...` text of a
    class property.
    """
    name: str
    optional: bool = False
    type_annotation: Optional[TypeNode] = None
    modifiers: Tuple[str, ...] = ()
    initializer: Optional[str] = None
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True)
class MethodNode(MemberNode):
    """Method, method signature or constructor"""
    name: str
    optional: bool = False
    parameters: Tuple[ParameterNode, ...] = ()
    return_type: Optional[TypeNode] = None
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True)
class IndexSignatureNode(MemberNode):
    """[key: string]: T"""
    key_name: str
    key_type: TypeNode
    value_type: TypeNode
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return f"[{self.key_name}]"


# =========================================================================
# DECLARATIONS
# =========================================================================

@dataclass(frozen=True)
class TypeParameterNode:
    """<T extends C>"""
    name: str
    constraint: Optional[TypeNode] = None


@dataclass(frozen=True)
class HeritageClause:
    """extends A, B / implements C"""
    keyword: str
    types: Tuple[TypeNode, ...]


class DeclarationNode(ASTNode):
    """Base class for top-level declarations"""
    __slots__ = ()
    kind: DeclarationKind


@dataclass(frozen=True)
class ClassDeclaration(DeclarationNode):
    """class Name { field-list }"""
    name: str
    members: Tuple[MemberNode, ...]
    type_parameters: Tuple[TypeParameterNode, ...] = ()
    heritage: Tuple[HeritageClause, ...] = ()
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    kind = DeclarationKind.CLASS

    def accept(self, visitor: 'DeclarationVisitor[T]') -> T:
        return visitor.visit_class_declaration(self)


@dataclass(frozen=True)
class InterfaceDeclaration(DeclarationNode):
    """interface Name { member-list }"""
    name: str
    members: Tuple[MemberNode, ...]
    type_parameters: Tuple[TypeParameterNode, ...] = ()
    heritage: Tuple[HeritageClause, ...] = ()
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    kind = DeclarationKind.INTERFACE

    def accept(self, visitor: 'DeclarationVisitor[T]') -> T:
        return visitor.visit_interface_declaration(self)


@dataclass(frozen=True)
class TypeAliasDeclaration(DeclarationNode):
    """type Name = T"""
    name: str
    type: TypeNode
    type_parameters: Tuple[TypeParameterNode, ...] = ()
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    kind = DeclarationKind.TYPE_ALIAS

    def accept(self, visitor: 'DeclarationVisitor[T]') -> T:
        return visitor.visit_type_alias_declaration(self)


@dataclass(frozen=True)
class VariableDeclaration(DeclarationNode):
    """declare const name: T  (feeds the type-query symbol table)"""
    name: str
    type_annotation: Optional[TypeNode] = None
    keyword: str = "const"
    modifiers: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    kind = DeclarationKind.VARIABLE

    def accept(self, visitor: 'DeclarationVisitor[T]') -> T:
        return visitor.visit_variable_declaration(self)


@dataclass(frozen=True)
class SourceFile(ASTNode):
    """Root node: every declaration in one file, in source order"""
    declarations: Tuple[DeclarationNode, ...]
    file: str = ""

    def __iter__(self):
        return iter(self.declarations)

    def shape_declarations(self) -> Tuple[DeclarationNode, ...]:
        """Class, interface and type-alias declarations"""
        return tuple(d for d in self.declarations if d.kind is not DeclarationKind.VARIABLE)

    def value_declarations(self) -> Tuple['VariableDeclaration', ...]:
        return tuple(d for d in self.declarations if d.kind is DeclarationKind.VARIABLE)
