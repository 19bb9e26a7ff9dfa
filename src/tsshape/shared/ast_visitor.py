"""
AST Visitor Pattern

This module provides:
1. TypeNodeVisitor (dispatch over written type syntax)
2. DeclarationVisitor (dispatch over the declaration forms)

Design:
- Abstract base class with visit_* methods for each node type
- Type-safe (mypy can check)
- Extensible (add new visitors without changing nodes)
"""

from typing import TypeVar, Generic, TYPE_CHECKING
from abc import ABC, abstractmethod

if TYPE_CHECKING:
    from .nodes import (
        KeywordTypeNode, TypeReferenceNode, ArrayTypeNode, TupleTypeNode,
        UnionTypeNode, IntersectionTypeNode, TypeLiteralNode, TypeQueryNode,
        LiteralTypeNode, ParenthesizedTypeNode, TypeOperatorNode,
        IndexedAccessTypeNode, FunctionTypeNode, TemplateLiteralTypeNode,
        MappedTypeNode, ImplicitTypeNode, MergedTypeNode,
        ClassDeclaration, InterfaceDeclaration, TypeAliasDeclaration,
        VariableDeclaration,
    )

T = TypeVar('T')


class TypeNodeVisitor(ABC, Generic[T]):
    """
    Visitor over written type expressions.

    Every TypeNode subclass calls exactly one of these from accept().
    """

    @abstractmethod
    def visit_keyword_type(self, node: 'KeywordTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_reference(self, node: 'TypeReferenceNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_array_type(self, node: 'ArrayTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_tuple_type(self, node: 'TupleTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_union_type(self, node: 'UnionTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_intersection_type(self, node: 'IntersectionTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_literal(self, node: 'TypeLiteralNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_query(self, node: 'TypeQueryNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_literal_type(self, node: 'LiteralTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_parenthesized_type(self, node: 'ParenthesizedTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_operator(self, node: 'TypeOperatorNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_indexed_access_type(self, node: 'IndexedAccessTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_function_type(self, node: 'FunctionTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_template_literal_type(self, node: 'TemplateLiteralTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_mapped_type(self, node: 'MappedTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_implicit_type(self, node: 'ImplicitTypeNode') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_merged_type(self, node: 'MergedTypeNode') -> T:
        raise NotImplementedError


class DeclarationVisitor(ABC, Generic[T]):
    """Visitor over top-level declarations (one method per form)"""

    @abstractmethod
    def visit_class_declaration(self, node: 'ClassDeclaration') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_interface_declaration(self, node: 'InterfaceDeclaration') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_type_alias_declaration(self, node: 'TypeAliasDeclaration') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_variable_declaration(self, node: 'VariableDeclaration') -> T:
        raise NotImplementedError
