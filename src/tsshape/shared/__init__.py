"""
Shared components: syntax nodes, the canonical type model and diagnostics.

tsc Pattern: Shared foundational types and utilities
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErrorReporter, TsShapeError, ParseError, DuplicateFieldError,
    UnsupportedConstruct, UnresolvedTypeQuery,
)
from .types import (
    TypeExpr, TypeKind, PrimitiveType, ImplicitType, ArrayType, TupleElement, TupleType,
    UnionType, IntersectionType, ObjectField, ObjectShapeType, GenericType,
    TypeQueryType, LiteralType, TypeVisitor, TypeTransformer,
    STRING, NUMBER, BOOLEAN, ANY, NULL, UNKNOWN, UNDEFINED, IMPLICIT,
)
from .nodes import (
    ASTNode, TypeNode, MemberNode, DeclarationNode, DeclarationKind, SourceFile,
    ClassDeclaration, InterfaceDeclaration, TypeAliasDeclaration, VariableDeclaration,
    PropertyNode, MethodNode, IndexSignatureNode, ParameterNode,
)
from .ast_visitor import TypeNodeVisitor, DeclarationVisitor
