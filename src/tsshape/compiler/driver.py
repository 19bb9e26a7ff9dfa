"""
Extraction Driver

tsc Pattern: ts.createProgram / program.getSemanticDiagnostics

Source text in, one ShapeDescriptor per class / interface / type alias out.
A failing declaration is reported and skipped; the others are still built.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..frontend.parser import Parser
from ..shared.nodes import SourceFile
from ..shared.errors import (
    Error, ErrorReporter, ParseError, DuplicateFieldError, UnsupportedConstruct,
    UnresolvedTypeQuery,
)
from ..analysis.normalizer import TypeNormalizer
from ..analysis.resolution import SymbolTable, TypeQueryResolver
from ..analysis.shapes import ShapeBuilder, ShapeDescriptor
from ..analysis.equivalence import EquivalenceChecker, EquivalenceResult
from ..utils.config import DEFAULT_SOURCE_FILE, SUPPORTED_EXTENSIONS
from ..utils.io_utils import read_source_file, is_supported_source

logger = logging.getLogger("tsshape.compiler.driver")

FormComparison = Tuple[ShapeDescriptor, ShapeDescriptor, EquivalenceResult]


class ExtractionResult:
    """Extraction result"""
    def __init__(
        self,
        shapes: Optional[List[ShapeDescriptor]] = None,
        reporter: Optional[ErrorReporter] = None,
        notices: Optional[List[UnresolvedTypeQuery]] = None,
        source: Optional[SourceFile] = None,
        success: bool = False,
    ):
        self.shapes = shapes if shapes is not None else []
        self.reporter = reporter if reporter is not None else ErrorReporter({})
        self.notices = notices if notices is not None else []
        self.source = source
        self.success = success

    @property
    def errors(self) -> List[Error]:
        return self.reporter.errors

    def has_errors(self) -> bool:
        return self.reporter.has_errors()

    def get_errors(self) -> List[str]:
        """Rendered diagnostics, one string per error"""
        return [self.reporter.format_error(e, color=False) for e in self.reporter.errors]

    @property
    def names(self) -> List[str]:
        """Declared shape names, first-seen order"""
        return list(dict.fromkeys(s.name for s in self.shapes))

    def shapes_named(self, name: str) -> List[ShapeDescriptor]:
        return [s for s in self.shapes if s.name == name]

    def compare_forms(self, name: str, checker: Optional[EquivalenceChecker] = None) -> List[FormComparison]:
        """Pairwise comparison of every descriptor declared under `name`"""
        checker = checker or EquivalenceChecker()
        forms = self.shapes_named(name)
        return [
            (forms[i], forms[j], checker.compare(forms[i], forms[j]))
            for i in range(len(forms))
            for j in range(i + 1, len(forms))
        ]


class ExtractionDriver:
    """
    Extraction driver (tsc naming: createProgram).

    Phases:
    1. Parsing (source -> declaration nodes)
    2. Symbol table from value declarations (for `typeof`)
    3. One ShapeDescriptor per shape declaration
    """

    def __init__(self, parser: Optional[Parser] = None, resolve_type_queries: bool = True):
        self.parser = parser or Parser()
        self.normalizer = TypeNormalizer()
        self.resolve_type_queries = resolve_type_queries

    def extract(self, source: str, source_file: str = DEFAULT_SOURCE_FILE) -> ExtractionResult:
        reporter = ErrorReporter({source_file: source})

        try:
            tree = self.parser.parse(source, source_file)
        except ParseError as e:
            reporter.report_exception(e)
            return ExtractionResult(reporter=reporter, success=False)

        resolver = None
        if self.resolve_type_queries:
            symbols = SymbolTable.from_declarations(tree.value_declarations(), self.normalizer)
            resolver = TypeQueryResolver(symbols)
        builder = ShapeBuilder(normalizer=self.normalizer, resolver=resolver)

        shapes: List[ShapeDescriptor] = []
        for decl in tree.shape_declarations():
            try:
                shapes.append(builder.build(decl))
            except (DuplicateFieldError, UnsupportedConstruct) as e:
                logger.debug(f"{source_file}: `{decl.name}` not built: {e.message}")
                reporter.report_exception(e)

        return ExtractionResult(
            shapes=shapes,
            reporter=reporter,
            notices=list(resolver.notices) if resolver else [],
            source=tree,
            success=not reporter.has_errors(),
        )

    def extract_file(self, path: Union[Path, str]) -> ExtractionResult:
        path = Path(path)
        if not is_supported_source(path):
            raise ValueError(f"unsupported source file {path.name!r} (expected one of {', '.join(SUPPORTED_EXTENSIONS)})")
        return self.extract(read_source_file(path), str(path))
