"""
Parser

tsc Pattern: ts.createSourceFile
"""

from pathlib import Path
from lark import Lark
from lark.exceptions import (
    UnexpectedToken, UnexpectedCharacters, UnexpectedEOF, VisitError,
    ParseError as LarkParseError,
)
import logging

from ..shared.nodes import SourceFile
from ..shared.errors import ParseError
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_FILE
from .method_bodies import blank_method_bodies
from .transformers.base import DeclarationTransformer

logger = logging.getLogger("tsshape.frontend.parser")


class Parser:
    """
    Parser (tsc naming: createSourceFile).

    Takes TypeScript source text and returns a SourceFile of declaration
    nodes with source locations. Class method bodies are blanked first
    (method_bodies.py). Lark errors never escape; they are wrapped
    in ParseError.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            grammar_path,
            start='source_file',
            parser='lalr',              # Required for caching
            cache=cache_file,
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self.transformer = DeclarationTransformer()

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE) -> SourceFile:
        """
        Parse source code to declaration nodes.

        Returns: SourceFile
        """
        try:
            self.transformer.current_file = source_file
            tree = self.parser.parse(blank_method_bodies(source))
            result = self.transformer.transform(tree)
            logger.debug(f"{source_file}: parsed {len(result.declarations)} declaration(s)")
            return result

        except (UnexpectedToken, UnexpectedCharacters, UnexpectedEOF) as e:
            location = None
            line = getattr(e, 'line', -1)
            column = getattr(e, 'column', -1)
            if isinstance(line, int) and line > 0:
                location = SourceLocation(
                    file=source_file,
                    line=line,
                    column=column if isinstance(column, int) and column > 0 else 1,
                    start=getattr(e, 'pos_in_stream', 0) or 0,
                )
            raise ParseError(f"Parse error: {_describe(e)}", source_file, location) from e

        except VisitError as e:
            raise ParseError(f"Parse error: {e.orig_exc}", source_file) from e.orig_exc

        except LarkParseError as e:
            raise ParseError(f"Parse error: {e}", source_file) from e


def _describe(e: Exception) -> str:
    """First line of a Lark error, without the context dump"""
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return "unexpected end of input"
        return f"unexpected token {str(e.token)!r}"
    if isinstance(e, UnexpectedCharacters):
        return f"unexpected character {e.char!r}"
    if isinstance(e, UnexpectedEOF):
        return "unexpected end of input"
    return str(e).split("\n", 1)[0]
