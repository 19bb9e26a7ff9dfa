"""
Source Location (Span)

tsc Pattern: ts.TextRange / ts.LineAndCharacter
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a declaration, member or type node.

    Line and column are 1-based (Lark convention); start/end are character
    offsets into the source text. Immutable (frozen) for hashability.
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
