"""
tsshape Declaration Transformers
================================

Specialized transformers for the declaration syntax nodes.
"""

from .base import DeclarationTransformer
from .literals import LiteralParser
from .members import MemberParser

__all__ = [
    'DeclarationTransformer',
    'LiteralParser',
    'MemberParser',
]
