"""
Literal Parser - Extracted from DeclarationTransformer
Handles literal tokens (strings, numbers, booleans) and keyword type names
"""

import ast
from typing import Union, Optional, Tuple

from lark.lexer import Token

from ...shared.nodes import TypeNode, KeywordTypeNode, LiteralTypeNode, TypeReferenceNode
from ...shared.types import format_number
from ...shared.source_location import SourceLocation
from ...utils.config import PRIMITIVE_TYPE_NAMES, BOOLEAN_TRUE_LITERAL, BOOLEAN_FALSE_LITERAL


class LiteralParser:
    """Dedicated parser for literal tokens"""

    @staticmethod
    def unquote(token: Union[Token, str]) -> str:
        """Strip the quotes of a single- or double-quoted string literal and resolve escapes"""
        text = str(token)
        if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
            return ast.literal_eval(text)
        return text

    @staticmethod
    def parse_number(token: Union[Token, str]) -> float:
        """Numeric literal value; TypeScript numbers are all doubles"""
        return float(str(token))

    @staticmethod
    def property_name(token: Token) -> str:
        """Name of a property written as an identifier, string or number"""
        if token.type == 'STRING':
            return LiteralParser.unquote(token)
        if token.type == 'SIGNED_NUMBER':
            return format_number(LiteralParser.parse_number(token))
        return str(token)

    @staticmethod
    def named_type(name: str,
                   type_args: Tuple[TypeNode, ...],
                   location: Optional[SourceLocation]) -> TypeNode:
        """
        Classify a written type name.

        Keyword names (string, null, ...) and boolean literals are lexed as
        identifiers; a name with type arguments is always a reference.
        """
        if not type_args:
            if name in PRIMITIVE_TYPE_NAMES:
                return KeywordTypeNode(keyword=name, location=location)
            if name == BOOLEAN_TRUE_LITERAL:
                return LiteralTypeNode(value=True, location=location)
            if name == BOOLEAN_FALSE_LITERAL:
                return LiteralTypeNode(value=False, location=location)
        return TypeReferenceNode(name=name, type_args=type_args, location=location)
