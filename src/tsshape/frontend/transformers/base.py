"""
tsshape Declaration Transformer
Converts the Lark parse tree to declaration syntax nodes (shared/nodes.py)

Grammar aliases name every rule that produces a node, so each callback below
maps one-to-one onto a grammar alternative. Anonymous punctuation is filtered
by Lark; named terminals (modifiers, QMARK, INITIALIZER, ...) are kept and
sorted out by position or token type.
"""

from lark import Transformer, v_args
from lark.lexer import Token
from lark.visitors import Discard
from typing import List, Optional, Union, Any, Tuple
from typing_extensions import TypeAlias
import logging

from ...shared.nodes import (
    TypeNode, MemberNode, DeclarationNode,
    UnionTypeNode, IntersectionTypeNode, ArrayTypeNode, TupleMemberNode, TupleTypeNode,
    TypeLiteralNode, TypeQueryNode, LiteralTypeNode, ParenthesizedTypeNode,
    TypeOperatorNode, IndexedAccessTypeNode, FunctionTypeNode, TemplateLiteralTypeNode, MappedTypeNode,
    PropertyNode, MethodNode, IndexSignatureNode, ParameterNode,
    TypeParameterNode, HeritageClause,
    ClassDeclaration, InterfaceDeclaration, TypeAliasDeclaration, VariableDeclaration,
    SourceFile,
)
from ...shared.source_location import SourceLocation
from .literals import LiteralParser
from .members import MemberParser

# Lark Meta object carries location information
LarkMeta: TypeAlias = Any
DeclarationPart: TypeAlias = Union[Tuple[TypeParameterNode, ...], HeritageClause, MemberNode, List[MemberNode]]

logger: logging.Logger = logging.getLogger(__name__)


@v_args(inline=True, meta=True)
class DeclarationTransformer(Transformer):
    """
    Declaration syntax transformer.

    `current_file` must be set by the parser before transform() so that every
    node gets a usable SourceLocation.
    """

    def __init__(self) -> None:
        super().__init__()
        self.member_parser: MemberParser = MemberParser(self._extract_location)
        self.current_file: str = ""

    def _extract_location(self, meta: LarkMeta) -> SourceLocation:
        """Extract location from Lark meta object"""
        if not self.current_file:
            raise RuntimeError(
                "Parser bug: current_file not set. "
                "Parser must set current_file before transforming."
            )
        if meta is None or getattr(meta, 'empty', True):
            return SourceLocation(file=self.current_file, line=0, column=0)
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            start=meta.start_pos,
            end=meta.end_pos,
            end_line=getattr(meta, 'end_line', 0),
            end_column=getattr(meta, 'end_column', 0),
        )

    # =========================================================================
    # SOURCE FILE
    # =========================================================================

    def source_file(self, meta: LarkMeta, *statements: Union[DeclarationNode, Token]) -> SourceFile:
        """Import statements arrive as raw tokens and are dropped"""
        declarations = tuple(s for s in statements if isinstance(s, DeclarationNode))
        skipped = len(statements) - len(declarations)
        if skipped:
            logger.debug(f"{self.current_file}: skipped {skipped} import statement(s)")
        return SourceFile(declarations=declarations, file=self.current_file)

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def decl_modifiers(self, meta: LarkMeta, *tokens: Token) -> Tuple[str, ...]:
        return tuple(str(t) for t in tokens)

    @staticmethod
    def _split_declaration_parts(parts: Tuple[DeclarationPart, ...]):
        type_parameters: Tuple[TypeParameterNode, ...] = ()
        heritage: List[HeritageClause] = []
        members: List[MemberNode] = []
        for part in parts:
            if isinstance(part, tuple):
                type_parameters = part
            elif isinstance(part, HeritageClause):
                heritage.append(part)
            elif isinstance(part, list):
                members.extend(part)
            elif isinstance(part, MemberNode):
                members.append(part)
        return type_parameters, tuple(heritage), tuple(members)

    def class_decl(self, meta: LarkMeta, modifiers: Tuple[str, ...], name: Token,
                   *parts: DeclarationPart) -> ClassDeclaration:
        """Grammar: decl_modifiers "class" NAME type_params? heritage_clause* "{" class_member* "}" """
        type_parameters, heritage, members = self._split_declaration_parts(parts)
        return ClassDeclaration(
            name=str(name),
            members=members,
            type_parameters=type_parameters,
            heritage=heritage,
            modifiers=modifiers,
            location=self._extract_location(meta),
        )

    def interface_decl(self, meta: LarkMeta, modifiers: Tuple[str, ...], name: Token,
                       *parts: DeclarationPart) -> InterfaceDeclaration:
        """Grammar: decl_modifiers "interface" NAME type_params? heritage_clause* "{" type_member_list "}" """
        type_parameters, heritage, members = self._split_declaration_parts(parts)
        return InterfaceDeclaration(
            name=str(name),
            members=members,
            type_parameters=type_parameters,
            heritage=heritage,
            modifiers=modifiers,
            location=self._extract_location(meta),
        )

    def type_alias_decl(self, meta: LarkMeta, modifiers: Tuple[str, ...], name: Token,
                        *rest: Union[Tuple[TypeParameterNode, ...], TypeNode]) -> TypeAliasDeclaration:
        """Grammar: decl_modifiers "type" NAME type_params? "=" type ";"?"""
        type_parameters = rest[0] if len(rest) == 2 else ()
        return TypeAliasDeclaration(
            name=str(name),
            type=rest[-1],
            type_parameters=type_parameters,
            modifiers=modifiers,
            location=self._extract_location(meta),
        )

    def variable_decl(self, meta: LarkMeta, modifiers: Tuple[str, ...], keyword: Token, name: Token,
                      *rest: Union[TypeNode, Token]) -> VariableDeclaration:
        """Grammar: decl_modifiers (const|let|var) NAME (":" type)? INITIALIZER? ";"?"""
        annotation: Optional[TypeNode] = None
        for item in rest:
            if isinstance(item, TypeNode):
                annotation = item
        return VariableDeclaration(
            name=str(name),
            type_annotation=annotation,
            keyword=str(keyword),
            modifiers=modifiers,
            location=self._extract_location(meta),
        )

    def heritage_clause(self, meta: LarkMeta, keyword: Token, *types: TypeNode) -> HeritageClause:
        return HeritageClause(keyword=str(keyword), types=tuple(types))

    def type_params(self, meta: LarkMeta, *params: TypeParameterNode) -> Tuple[TypeParameterNode, ...]:
        return tuple(params)

    def type_param(self, meta: LarkMeta, name: Token, *rest: Union[Token, TypeNode]) -> TypeParameterNode:
        """Grammar: NAME (extends type)?"""
        constraint = rest[-1] if rest else None
        return TypeParameterNode(name=str(name), constraint=constraint)

    # =========================================================================
    # MEMBERS
    # =========================================================================

    def class_property(self, meta: LarkMeta, *items: Any) -> PropertyNode:
        return self.member_parser.parse_property(meta, items)

    def class_method(self, meta: LarkMeta, *items: Any) -> MethodNode:
        """Method bodies are discarded before this callback runs"""
        return self.member_parser.parse_method(meta, items)

    def property_signature(self, meta: LarkMeta, *items: Any) -> PropertyNode:
        return self.member_parser.parse_property(meta, items)

    def method_signature(self, meta: LarkMeta, *items: Any) -> MethodNode:
        return self.member_parser.parse_method(meta, items)

    def index_signature(self, meta: LarkMeta, *items: Any) -> IndexSignatureNode:
        return self.member_parser.parse_index_signature(meta, items)

    def type_member_list(self, meta: LarkMeta, *members: MemberNode) -> List[MemberNode]:
        return list(members)

    def parameter_list(self, meta: LarkMeta, *params: ParameterNode) -> List[ParameterNode]:
        return list(params)

    def parameter(self, meta: LarkMeta, *items: Any) -> ParameterNode:
        return self.member_parser.parse_parameter(meta, items)

    def block(self, meta: LarkMeta, *items: Any):
        return Discard

    def readonly_name(self, meta: LarkMeta, token: Token) -> Token:
        """`readonly` used as a property name"""
        return Token.new_borrow_pos('NAME', str(token), token)

    # =========================================================================
    # TYPES
    # =========================================================================

    def union(self, meta: LarkMeta, *types: TypeNode) -> TypeNode:
        """A leading `|` with a single member is just that member"""
        if len(types) == 1:
            return types[0]
        return UnionTypeNode(types=tuple(types), location=self._extract_location(meta))

    def intersection(self, meta: LarkMeta, *types: TypeNode) -> TypeNode:
        if len(types) == 1:
            return types[0]
        return IntersectionTypeNode(types=tuple(types), location=self._extract_location(meta))

    def type_operator(self, meta: LarkMeta, operator: Token, operand: TypeNode) -> TypeOperatorNode:
        return TypeOperatorNode(operator=str(operator), type=operand, location=self._extract_location(meta))

    def array_type(self, meta: LarkMeta, element: TypeNode) -> ArrayTypeNode:
        return ArrayTypeNode(element_type=element, location=self._extract_location(meta))

    def indexed_access_type(self, meta: LarkMeta, object_type: TypeNode, index_type: TypeNode) -> IndexedAccessTypeNode:
        return IndexedAccessTypeNode(
            object_type=object_type,
            index_type=index_type,
            location=self._extract_location(meta),
        )

    def type_reference(self, meta: LarkMeta, name: str, type_args: Optional[List[TypeNode]] = None) -> TypeNode:
        return LiteralParser.named_type(name, tuple(type_args or ()), self._extract_location(meta))

    def entity_name(self, meta: LarkMeta, *parts: Token) -> str:
        return ".".join(str(p) for p in parts)

    def type_arguments(self, meta: LarkMeta, *types: TypeNode) -> List[TypeNode]:
        return list(types)

    def type_query(self, meta: LarkMeta, typeof: Token, name: str) -> TypeQueryNode:
        return TypeQueryNode(expr_name=name, location=self._extract_location(meta))

    def type_literal(self, meta: LarkMeta, members: List[MemberNode]) -> TypeLiteralNode:
        return TypeLiteralNode(members=tuple(members), location=self._extract_location(meta))

    def tuple_type(self, meta: LarkMeta, elements: Optional[List[TupleMemberNode]] = None) -> TupleTypeNode:
        return TupleTypeNode(elements=tuple(elements or ()), location=self._extract_location(meta))

    def tuple_elements(self, meta: LarkMeta, *elements: TupleMemberNode) -> List[TupleMemberNode]:
        return list(elements)

    def tuple_element(self, meta: LarkMeta, element_type: TypeNode, qmark: Optional[Token] = None) -> TupleMemberNode:
        return TupleMemberNode(
            type=element_type,
            optional=qmark is not None,
            location=self._extract_location(meta),
        )

    def parenthesized_type(self, meta: LarkMeta, inner: TypeNode) -> ParenthesizedTypeNode:
        return ParenthesizedTypeNode(type=inner, location=self._extract_location(meta))

    def function_type(self, meta: LarkMeta, params: Token, return_type: TypeNode) -> FunctionTypeNode:
        """Grammar: FUNCTION_PARAMS type; the token text ends with `=>`"""
        parameters = str(params).rstrip()[:-2].rstrip()
        return FunctionTypeNode(parameters=parameters, return_type=return_type, location=self._extract_location(meta))

    def template_literal_type(self, meta: LarkMeta, token: Token) -> TemplateLiteralTypeNode:
        return TemplateLiteralTypeNode(text=str(token)[1:-1], location=self._extract_location(meta))

    def mapped_type(self, meta: LarkMeta, *items: Any) -> MappedTypeNode:
        """Grammar: "{" READONLY? "[" NAME IN type "]" QMARK? type_annotation "}" """
        key = next(i for i in items if isinstance(i, Token) and i.type == 'NAME')
        constraint, value_type = [i for i in items if isinstance(i, TypeNode)]
        return MappedTypeNode(
            key_name=str(key),
            constraint=constraint,
            value_type=value_type,
            optional=any(isinstance(i, Token) and i.type == 'QMARK' for i in items),
            location=self._extract_location(meta),
        )

    def string_literal_type(self, meta: LarkMeta, token: Token) -> LiteralTypeNode:
        return LiteralTypeNode(value=LiteralParser.unquote(token), location=self._extract_location(meta))

    def number_literal_type(self, meta: LarkMeta, token: Token) -> LiteralTypeNode:
        return LiteralTypeNode(value=LiteralParser.parse_number(token), location=self._extract_location(meta))
