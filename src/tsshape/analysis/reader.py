"""
Declaration Reader

tsc Pattern: ts.checker getPropertiesOfType (declared members only)

One output contract for the three shape-declaring forms:

    class Test { a?: string; b; }
    interface Test { a?: string; b; }
    type Test = { a?: string; b; }

all yield RawField("a", True, <string>) and RawField("b", False, IMPLICIT)
in source order. Downstream code cannot tell which form produced a field.
"""

import logging
from typing import Iterator, NamedTuple, Optional, Tuple, List, Dict
from typing_extensions import Protocol

from ..shared.nodes import (
    TypeNode, MemberNode, DeclarationNode, DeclarationKind,
    PropertyNode, MethodNode, IndexSignatureNode,
    ClassDeclaration, InterfaceDeclaration, TypeAliasDeclaration, VariableDeclaration,
    TypeLiteralNode, IntersectionTypeNode, ParenthesizedTypeNode, MergedTypeNode,
    MappedTypeNode, IMPLICIT_TYPE_NODE,
)
from ..shared.ast_visitor import DeclarationVisitor
from ..shared.errors import UnsupportedConstruct
from ..shared.source_location import SourceLocation
from ..utils.config import NON_INSTANCE_MODIFIERS

logger = logging.getLogger("tsshape.analysis.reader")


class RawField(NamedTuple):
    """(name, optional, raw type) triple; `location` is diagnostic only"""
    name: str
    optional: bool
    raw_type: TypeNode
    location: Optional[SourceLocation] = None


class DeclarationSource(Protocol):
    """Anything that can enumerate the fields of one declaration"""
    name: str
    kind: DeclarationKind

    def fields(self) -> Iterator[RawField]:
        ...


def _property_field(member: PropertyNode) -> RawField:
    raw_type = member.type_annotation if member.type_annotation is not None else IMPLICIT_TYPE_NODE
    return RawField(member.name, member.optional, raw_type, member.location)


def _type_member_fields(owner: str, members: Tuple[MemberNode, ...]) -> Iterator[RawField]:
    """Property signatures of an interface body or object literal"""
    for member in members:
        if isinstance(member, PropertyNode):
            yield _property_field(member)
        elif isinstance(member, MethodNode):
            logger.debug(f"{owner}: skipping method signature `{member.name}`")
        elif isinstance(member, IndexSignatureNode):
            raise UnsupportedConstruct("index signature", member.location, detail=f"in `{owner}`")


class ClassSource:
    """Instance fields of a class declaration"""

    def __init__(self, decl: ClassDeclaration):
        self.decl = decl
        self.name = decl.name
        self.kind = decl.kind

    def fields(self) -> Iterator[RawField]:
        for member in self.decl.members:
            if isinstance(member, PropertyNode):
                static = NON_INSTANCE_MODIFIERS.intersection(member.modifiers)
                if static:
                    logger.debug(f"{self.name}: skipping {'/'.join(sorted(static))} member `{member.name}`")
                    continue
                yield _property_field(member)
            elif isinstance(member, MethodNode):
                logger.debug(f"{self.name}: skipping method `{member.name}`")
            elif isinstance(member, IndexSignatureNode):
                raise UnsupportedConstruct("index signature", member.location, detail=f"in `{self.name}`")


class InterfaceSource:
    """Property signatures of an interface; `extends` clauses are not expanded"""

    def __init__(self, decl: InterfaceDeclaration):
        self.decl = decl
        self.name = decl.name
        self.kind = decl.kind

    def fields(self) -> Iterator[RawField]:
        if self.decl.heritage:
            logger.debug(f"{self.name}: heritage clauses are not expanded")
        yield from _type_member_fields(self.name, self.decl.members)


class TypeAliasSource:
    """
    Fields of `type Name = { ... }`.

    An intersection of object literals yields one field per key; a key
    written by several literals carries a MergedTypeNode and is optional only
    when every literal marks it optional. Any other right-hand side does not
    describe a shape and raises UnsupportedConstruct.
    """

    def __init__(self, decl: TypeAliasDeclaration):
        self.decl = decl
        self.name = decl.name
        self.kind = decl.kind

    def fields(self) -> Iterator[RawField]:
        literals = self._object_literals(self.decl.type)
        if len(literals) == 1:
            yield from _type_member_fields(self.name, literals[0].members)
            return
        yield from self._merged_fields(literals)

    def _object_literals(self, node: TypeNode) -> List[TypeLiteralNode]:
        while isinstance(node, ParenthesizedTypeNode):
            node = node.type
        if isinstance(node, TypeLiteralNode):
            return [node]
        if isinstance(node, IntersectionTypeNode):
            literals: List[TypeLiteralNode] = []
            for part in node.types:
                literals.extend(self._object_literals(part))
            return literals
        if isinstance(node, MappedTypeNode):
            raise UnsupportedConstruct("mapped type", node.location, detail=f"over `{node.key_name}` in `{self.name}`")
        raise UnsupportedConstruct(
            "type alias without an object shape",
            getattr(node, 'location', None) or self.decl.location,
            detail=f"`{self.name}` is not an object literal or an intersection of object literals",
        )

    def _merged_fields(self, literals: List[TypeLiteralNode]) -> Iterator[RawField]:
        groups: Dict[str, List[Tuple[int, RawField]]] = {}
        for index, literal in enumerate(literals):
            for raw in _type_member_fields(self.name, literal.members):
                groups.setdefault(raw.name, []).append((index, raw))

        for name, entries in groups.items():
            owners = [index for index, _ in entries]
            if len(entries) == 1 or len(set(owners)) != len(owners):
                # Repeated inside one literal: pass through, the builder rejects it
                for _, raw in entries:
                    yield raw
                continue
            logger.debug(f"{self.name}: merging {len(entries)} declarations of `{name}`")
            first = entries[0][1]
            yield RawField(
                name=name,
                optional=all(raw.optional for _, raw in entries),
                raw_type=MergedTypeNode(types=tuple(raw.raw_type for _, raw in entries), location=first.location),
                location=first.location,
            )


class _SourcePicker(DeclarationVisitor[DeclarationSource]):
    """Reader adapter per declaration form"""

    def visit_class_declaration(self, node: ClassDeclaration) -> DeclarationSource:
        return ClassSource(node)

    def visit_interface_declaration(self, node: InterfaceDeclaration) -> DeclarationSource:
        return InterfaceSource(node)

    def visit_type_alias_declaration(self, node: TypeAliasDeclaration) -> DeclarationSource:
        return TypeAliasSource(node)

    def visit_variable_declaration(self, node: VariableDeclaration) -> DeclarationSource:
        raise UnsupportedConstruct(
            f"{node.kind.value} declaration",
            node.location,
            detail="only class, interface and type alias declarations describe shapes",
        )


def declaration_source(decl: DeclarationNode) -> DeclarationSource:
    """Pick the reader adapter for a declaration form"""
    return decl.accept(_SourcePicker())


def read_fields(decl: DeclarationNode) -> Iterator[RawField]:
    """Fields of any declaration form, in source order"""
    return declaration_source(decl).fields()
