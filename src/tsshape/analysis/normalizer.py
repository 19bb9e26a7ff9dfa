"""
Type Normalizer

tsc Pattern: ts.checker getTypeFromTypeNode

Maps written type syntax (shared/nodes.py) to the canonical model
(shared/types.py). Pure and deterministic: the same node always yields an
equal TypeExpr, and nothing outside the node is consulted. `typeof X` is
recorded, never resolved here (see resolution.py).

Right-biased merge, used for `A & B` object members and for keys declared by
several intersected literals:

- equal types at a key: one entry, the later one kept
- two object shapes at a key: merged recursively
- anything else at a key: both candidates kept as a union
- a merged key is optional only if optional everywhere it appears
- a key keeps the position of its first occurrence
"""

import logging
from typing import Iterable, List, Dict

from ..shared.ast_visitor import TypeNodeVisitor
from ..shared.nodes import (
    TypeNode, KeywordTypeNode, TypeReferenceNode, ArrayTypeNode, TupleTypeNode,
    UnionTypeNode, IntersectionTypeNode, TypeLiteralNode, TypeQueryNode,
    LiteralTypeNode, ParenthesizedTypeNode, TypeOperatorNode,
    IndexedAccessTypeNode, FunctionTypeNode, TemplateLiteralTypeNode, MappedTypeNode,
    ImplicitTypeNode, MergedTypeNode,
    PropertyNode, MethodNode, IndexSignatureNode,
)
from ..shared.types import (
    TypeExpr, PrimitiveType, ArrayType, TupleElement, TupleType, UnionType,
    IntersectionType, ObjectField, ObjectShapeType, GenericType, TypeQueryType,
    LiteralType, TypeTransformer, IMPLICIT,
)
from ..shared.errors import UnsupportedConstruct
from ..utils.config import ARRAY_TYPE_NAMES

logger = logging.getLogger("tsshape.analysis.normalizer")


# =========================================================================
# CANONICAL CONSTRUCTORS
# =========================================================================

def make_union(members: Iterable[TypeExpr]) -> TypeExpr:
    """Flatten nested unions, deduplicate, unwrap a single survivor"""
    flat = set()
    for member in members:
        if isinstance(member, UnionType):
            flat.update(member.members)
        else:
            flat.add(member)
    if len(flat) == 1:
        return next(iter(flat))
    return UnionType(flat)


def make_intersection(members: Iterable[TypeExpr]) -> TypeExpr:
    """
    Flatten nested intersections and fold every object-shape member into one
    right-biased merge, placed where the first object member was written.
    Other members stay as opaque participants in written order.
    """
    flat: List[TypeExpr] = []
    for member in members:
        if isinstance(member, IntersectionType):
            flat.extend(member.members)
        else:
            flat.append(member)

    result: List[TypeExpr] = []
    merged_at = -1
    for member in flat:
        if isinstance(member, ObjectShapeType):
            if merged_at < 0:
                merged_at = len(result)
                result.append(member)
            else:
                result[merged_at] = merge_shapes(result[merged_at], member)
        elif member not in result:
            result.append(member)

    if len(result) == 1:
        return result[0]
    return IntersectionType(result)


def merge_shapes(left: ObjectShapeType, right: ObjectShapeType) -> ObjectShapeType:
    fields: Dict[str, ObjectField] = {f.name: f for f in left.fields}
    for f in right.fields:
        previous = fields.get(f.name)
        if previous is None:
            fields[f.name] = f
            continue
        fields[f.name] = ObjectField(
            name=f.name,
            optional=previous.optional and f.optional,
            type=merge_types(previous.type, f.type, key=f.name),
        )
    return ObjectShapeType(fields.values())


def merge_types(left: TypeExpr, right: TypeExpr, key: str = "") -> TypeExpr:
    if left == right:
        return right
    if isinstance(left, ObjectShapeType) and isinstance(right, ObjectShapeType):
        return merge_shapes(left, right)
    logger.debug(f"merge conflict at `{key}`: keeping {left} | {right}")
    return make_union([left, right])


class CanonicalTransformer(TypeTransformer):
    """
    TypeTransformer whose rebuilt unions and intersections go back through
    make_union / make_intersection, so a rewrite that changes a member
    (a resolved `typeof`, implicit read as `any`) still yields canonical form.
    """

    def visit_union_type(self, ty: UnionType) -> TypeExpr:
        return make_union(self.transform(m) for m in ty.members)

    def visit_intersection_type(self, ty: IntersectionType) -> TypeExpr:
        return make_intersection([self.transform(m) for m in ty.members])


# =========================================================================
# NORMALIZER
# =========================================================================

class TypeNormalizer(TypeNodeVisitor[TypeExpr]):
    """
    Written type syntax to canonical TypeExpr.

    Stateless; one instance can be shared by every builder.
    """

    def normalize(self, raw: TypeNode) -> TypeExpr:
        return raw.accept(self)

    def visit_keyword_type(self, node: KeywordTypeNode) -> TypeExpr:
        return PrimitiveType(node.keyword)

    def visit_type_reference(self, node: TypeReferenceNode) -> TypeExpr:
        args = tuple(self.normalize(a) for a in node.type_args)
        # Array<T> and T[] are the same type
        if node.name in ARRAY_TYPE_NAMES and len(args) == 1:
            return ArrayType(args[0])
        return GenericType(node.name, args)

    def visit_array_type(self, node: ArrayTypeNode) -> TypeExpr:
        return ArrayType(self.normalize(node.element_type))

    def visit_tuple_type(self, node: TupleTypeNode) -> TypeExpr:
        return TupleType(tuple(
            TupleElement(self.normalize(e.type), e.optional) for e in node.elements
        ))

    def visit_union_type(self, node: UnionTypeNode) -> TypeExpr:
        return make_union(self.normalize(t) for t in node.types)

    def visit_intersection_type(self, node: IntersectionTypeNode) -> TypeExpr:
        return make_intersection([self.normalize(t) for t in node.types])

    def visit_type_literal(self, node: TypeLiteralNode) -> TypeExpr:
        shape = ObjectShapeType(())
        for member in node.members:
            if isinstance(member, PropertyNode):
                raw = member.type_annotation
                field = ObjectField(
                    name=member.name,
                    optional=member.optional,
                    type=self.normalize(raw) if raw is not None else IMPLICIT,
                )
                shape = merge_shapes(shape, ObjectShapeType((field,)))
            elif isinstance(member, MethodNode):
                logger.debug(f"object literal: skipping method signature `{member.name}`")
            elif isinstance(member, IndexSignatureNode):
                raise UnsupportedConstruct("index signature", member.location)
        return shape

    def visit_type_query(self, node: TypeQueryNode) -> TypeExpr:
        return TypeQueryType(node.expr_name)

    def visit_literal_type(self, node: LiteralTypeNode) -> TypeExpr:
        return LiteralType(node.value)

    def visit_parenthesized_type(self, node: ParenthesizedTypeNode) -> TypeExpr:
        return self.normalize(node.type)

    def visit_type_operator(self, node: TypeOperatorNode) -> TypeExpr:
        raise UnsupportedConstruct(f"`{node.operator}` type operator", node.location)

    def visit_indexed_access_type(self, node: IndexedAccessTypeNode) -> TypeExpr:
        raise UnsupportedConstruct("indexed access type", node.location)

    def visit_function_type(self, node: FunctionTypeNode) -> TypeExpr:
        raise UnsupportedConstruct("function type", node.location)

    def visit_template_literal_type(self, node: TemplateLiteralTypeNode) -> TypeExpr:
        raise UnsupportedConstruct("template literal type", node.location)

    def visit_mapped_type(self, node: MappedTypeNode) -> TypeExpr:
        raise UnsupportedConstruct("mapped type", node.location, detail=f"over `{node.key_name}`")

    def visit_implicit_type(self, node: ImplicitTypeNode) -> TypeExpr:
        return IMPLICIT

    def visit_merged_type(self, node: MergedTypeNode) -> TypeExpr:
        candidates = [self.normalize(t) for t in node.types]
        merged = candidates[0]
        for candidate in candidates[1:]:
            merged = merge_types(merged, candidate)
        return merged
