"""
Front end: Lark grammar, parser and parse-tree transformers.
"""

from .parser import Parser

__all__ = ['Parser']
