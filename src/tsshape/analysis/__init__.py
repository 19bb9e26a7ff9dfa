"""
Shape analysis: reading declarations, normalizing types, building and
comparing shape descriptors.
"""

from .reader import RawField, DeclarationSource, ClassSource, InterfaceSource, TypeAliasSource, declaration_source, read_fields
from .normalizer import TypeNormalizer, CanonicalTransformer, make_union, make_intersection, merge_shapes, merge_types
from .resolution import SymbolTable, TypeQueryResolver
from .shapes import FieldDescriptor, ShapeDescriptor, ShapeBuilder
from .equivalence import EquivalenceChecker, EquivalenceResult, Mismatch, equivalent
