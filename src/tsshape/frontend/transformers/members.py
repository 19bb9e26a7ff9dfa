"""
Member Parser - Extracted from DeclarationTransformer
Handles class members, type members and parameters, whose optional parts
arrive as a flat, variable-length list of children
"""

from typing import List, Optional, Tuple, Any, Callable
from typing_extensions import TypeAlias
from lark.lexer import Token

from ...shared.nodes import (
    TypeNode, PropertyNode, MethodNode, IndexSignatureNode, ParameterNode,
)
from ...shared.source_location import SourceLocation
from .literals import LiteralParser

# Type aliases for better clarity
LarkMeta: TypeAlias = Any  # Lark's internal Meta object
LocationExtractor: TypeAlias = Callable[[LarkMeta], SourceLocation]

MODIFIER_TOKENS = frozenset({
    'PUBLIC', 'PRIVATE', 'PROTECTED', 'READONLY', 'STATIC',
    'ABSTRACT', 'DECLARE', 'OVERRIDE', 'ASYNC',
})
NAME_TOKENS = frozenset({'NAME', 'STRING', 'SIGNED_NUMBER'})


class _MemberParts:
    """Pieces of one member, sorted out of the raw child list"""

    def __init__(self) -> None:
        self.modifiers: List[str] = []
        self.name: Optional[str] = None
        self.optional = False
        self.is_rest = False
        self.types: List[TypeNode] = []
        self.parameters: Tuple[ParameterNode, ...] = ()
        self.initializer: Optional[str] = None


class MemberParser:
    """Dedicated parser for members and parameters"""

    def __init__(self, location_extractor: LocationExtractor) -> None:
        self.extract_location = location_extractor

    def split(self, items: Tuple[Any, ...]) -> _MemberParts:
        """Sort children: modifier tokens, name, `?`, `...`, types, parameter list, initializer"""
        parts = _MemberParts()
        for item in items:
            if isinstance(item, Token):
                if item.type in MODIFIER_TOKENS and parts.name is None:
                    parts.modifiers.append(str(item))
                elif item.type in NAME_TOKENS and parts.name is None:
                    parts.name = LiteralParser.property_name(item)
                elif item.type == 'QMARK':
                    parts.optional = True
                elif item.type == 'DOTDOTDOT':
                    parts.is_rest = True
                elif item.type == 'INITIALIZER':
                    parts.initializer = str(item)[1:].strip()
            elif isinstance(item, TypeNode):
                parts.types.append(item)
            elif type(item) is list:
                parts.parameters = tuple(item)
        return parts

    def parse_property(self, meta: LarkMeta, items: Tuple[Any, ...]) -> PropertyNode:
        """Class property or property signature"""
        parts = self.split(items)
        return PropertyNode(
            name=parts.name,
            optional=parts.optional,
            type_annotation=parts.types[0] if parts.types else None,
            modifiers=tuple(parts.modifiers),
            initializer=parts.initializer,
            location=self.extract_location(meta),
        )

    def parse_method(self, meta: LarkMeta, items: Tuple[Any, ...]) -> MethodNode:
        """Method, method signature or constructor"""
        parts = self.split(items)
        return MethodNode(
            name=parts.name,
            optional=parts.optional,
            parameters=parts.parameters,
            return_type=parts.types[0] if parts.types else None,
            modifiers=tuple(parts.modifiers),
            location=self.extract_location(meta),
        )

    def parse_index_signature(self, meta: LarkMeta, items: Tuple[Any, ...]) -> IndexSignatureNode:
        """[key: K]: V"""
        parts = self.split(items)
        key_type, value_type = parts.types
        return IndexSignatureNode(
            key_name=parts.name,
            key_type=key_type,
            value_type=value_type,
            modifiers=tuple(parts.modifiers),
            location=self.extract_location(meta),
        )

    def parse_parameter(self, meta: LarkMeta, items: Tuple[Any, ...]) -> ParameterNode:
        parts = self.split(items)
        return ParameterNode(
            name=parts.name,
            optional=parts.optional,
            type_annotation=parts.types[0] if parts.types else None,
            modifiers=tuple(parts.modifiers),
            is_rest=parts.is_rest,
            location=self.extract_location(meta),
        )
