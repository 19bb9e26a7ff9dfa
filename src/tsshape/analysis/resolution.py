"""
Type-Query Resolution

tsc Pattern: ts.checker getTypeOfSymbol for `typeof` queries

Optional pass between normalization and descriptor building. A resolver
replaces `typeof X` with the declared type of value `X` when the symbol table
knows it; anything else stays a TypeQueryType and is reported as an
UnresolvedTypeQuery notice.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from ..shared.nodes import DeclarationNode, VariableDeclaration
from ..shared.types import TypeExpr, TypeQueryType
from ..shared.errors import UnsupportedConstruct, UnresolvedTypeQuery
from ..shared.source_location import SourceLocation
from .normalizer import CanonicalTransformer, TypeNormalizer

logger = logging.getLogger("tsshape.analysis.resolution")


class SymbolTable(Mapping[str, TypeExpr]):
    """Read-only value name -> declared type"""

    def __init__(self, symbols: Optional[Mapping[str, TypeExpr]] = None):
        self._symbols: Dict[str, TypeExpr] = dict(symbols or {})

    @classmethod
    def from_declarations(cls,
                          declarations: Iterable[DeclarationNode],
                          normalizer: Optional[TypeNormalizer] = None) -> 'SymbolTable':
        """
        Collect `declare const|let|var name: T` declarations.

        Values without an annotation, or whose annotation cannot be
        normalized, are left out; queries against them stay unresolved.
        """
        normalizer = normalizer or TypeNormalizer()
        symbols: Dict[str, TypeExpr] = {}
        for decl in declarations:
            if not isinstance(decl, VariableDeclaration):
                continue
            if decl.type_annotation is None:
                logger.debug(f"value `{decl.name}` has no annotation; not added to symbol table")
                continue
            try:
                symbols[decl.name] = normalizer.normalize(decl.type_annotation)
            except UnsupportedConstruct as e:
                logger.warning(f"value `{decl.name}` not added to symbol table: {e.message}")
        return cls(symbols)

    def __getitem__(self, name: str) -> TypeExpr:
        return self._symbols[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({sorted(self._symbols)})"


class TypeQueryResolver(CanonicalTransformer):
    """
    Replace resolvable `typeof X` references, recursively.

    A resolved member is folded back into its union or intersection, so
    `string | typeof x` with `x: string` is just `string`.

    The symbol table is only read; notices collected by resolve() belong to
    this resolver instance.
    """

    def __init__(self, symbols: Mapping[str, TypeExpr]):
        self.symbols = symbols
        self.notices: List[UnresolvedTypeQuery] = []
        self._location: Optional[SourceLocation] = None
        self._resolving: List[str] = []

    def resolve(self, expr: TypeExpr, location: Optional[SourceLocation] = None) -> TypeExpr:
        """Resolve every type query inside `expr`; `location` is attached to notices"""
        self._location = location
        try:
            return self.transform(expr)
        finally:
            self._location = None

    def visit_type_query_type(self, ty: TypeQueryType) -> TypeExpr:
        name = ty.referenced_name
        target = self.symbols.get(name)
        if target is None or name in self._resolving:
            self._report(name)
            return ty
        self._resolving.append(name)
        try:
            return self.transform(target)
        finally:
            self._resolving.pop()

    def _report(self, name: str) -> None:
        notice = UnresolvedTypeQuery(referenced_name=name, location=self._location)
        logger.info(str(notice))
        self.notices.append(notice)
