"""
Shape Descriptor Builder

tsc Pattern: ts.checker resolveStructuredTypeMembers

A ShapeDescriptor is the canonical, form-independent description of one
declaration: named fields with optionality and canonical type. Descriptors
are immutable once built and compare structurally (name set, optionality,
types); field order, the declaration name and the declaration form are
metadata.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from ..shared.nodes import DeclarationNode, DeclarationKind
from ..shared.types import TypeExpr, ObjectField, ObjectShapeType
from ..shared.errors import DuplicateFieldError
from ..shared.source_location import SourceLocation
from .reader import declaration_source
from .normalizer import TypeNormalizer
from .resolution import TypeQueryResolver

logger = logging.getLogger("tsshape.analysis.shapes")


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One named field. `optional` comes only from the `?` marker, never from
    the type (`a: string | undefined` is required).
    """
    name: str
    optional: bool
    type: TypeExpr
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        marker = "?" if self.optional else ""
        return f"{self.name}{marker}: {self.type}"


@dataclass(frozen=True, eq=False)
class ShapeDescriptor:
    """Canonical shape of one declaration; field names are unique"""
    name: str
    kind: DeclarationKind
    fields: Tuple[FieldDescriptor, ...]
    location: Optional[SourceLocation] = None

    def _key(self):
        return frozenset((f.name, f.optional, f.type) for f in self.fields)

    def __eq__(self, other):
        if not isinstance(other, ShapeDescriptor):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __getitem__(self, name: str) -> FieldDescriptor:
        found = self.get(name)
        if found is None:
            raise KeyError(name)
        return found

    def get(self, name: str) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def as_object_type(self) -> ObjectShapeType:
        """The shape as an inline object type (for nesting or comparison)"""
        return ObjectShapeType(ObjectField(f.name, f.optional, f.type) for f in self.fields)

    def __str__(self) -> str:
        body = "; ".join(str(f) for f in self.fields)
        return f"{self.kind.value} {self.name} {{ {body} }}" if body else f"{self.kind.value} {self.name} {{}}"


class ShapeBuilder:
    """
    Build a ShapeDescriptor from any declaration form.

    Duplicate field names are the only validation done here: the first
    repeat raises DuplicateFieldError and no partial descriptor escapes.
    """

    def __init__(self,
                 normalizer: Optional[TypeNormalizer] = None,
                 resolver: Optional[TypeQueryResolver] = None):
        self.normalizer = normalizer or TypeNormalizer()
        self.resolver = resolver

    def build(self, decl: DeclarationNode) -> ShapeDescriptor:
        source = declaration_source(decl)
        seen: Dict[str, FieldDescriptor] = {}
        for raw in source.fields():
            first = seen.get(raw.name)
            if first is not None:
                raise DuplicateFieldError(raw.name, source.name, raw.location, first.location)
            ty = self.normalizer.normalize(raw.raw_type)
            if self.resolver is not None:
                ty = self.resolver.resolve(ty, raw.location)
            seen[raw.name] = FieldDescriptor(raw.name, raw.optional, ty, raw.location)

        logger.debug(f"built {source.kind.value} `{source.name}` with {len(seen)} field(s)")
        return ShapeDescriptor(
            name=source.name,
            kind=source.kind,
            fields=tuple(seen.values()),
            location=getattr(decl, 'location', None),
        )
