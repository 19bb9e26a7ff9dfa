"""
Equivalence Checker

tsc Pattern: ts.checker isTypeIdenticalTo

Two descriptors are equivalent iff their canonical forms are equal, so the
relation is reflexive, symmetric and transitive. compare() additionally
walks both sides to say where they differ.

`ImplicitType` (no annotation) and `any` both carry no static guarantee and
are treated as the same type unless the checker is built with
implicit_matches_any=False.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..shared.types import (
    TypeExpr, ImplicitType, ArrayType, TupleType,
    ObjectShapeType, GenericType, ANY,
)
from ..utils.config import IMPLICIT_MATCHES_ANY
from .normalizer import CanonicalTransformer
from .shapes import ShapeDescriptor


@dataclass(frozen=True)
class Mismatch:
    """
    One difference between two descriptors.

    `path` locates the differing sub-expression inside the field type
    (`element`, `elements[0]`, `fields.data2`, `type_args[1]`); it is empty
    when the whole field differs.
    """
    field_name: str
    path: str
    left: Optional[TypeExpr]
    right: Optional[TypeExpr]
    reason: str

    def __str__(self) -> str:
        where = f"{self.field_name}.{self.path}" if self.path else self.field_name
        return f"{where}: {self.reason} ({_show(self.left)} vs {_show(self.right)})"


def _show(ty: Optional[TypeExpr]) -> str:
    return "<absent>" if ty is None else str(ty)


@dataclass
class EquivalenceResult:
    mismatches: List[Mismatch] = field(default_factory=list)

    @property
    def equivalent(self) -> bool:
        return not self.mismatches

    def __bool__(self) -> bool:
        return self.equivalent

    def __str__(self) -> str:
        if self.equivalent:
            return "equivalent"
        return "\n".join(str(m) for m in self.mismatches)


class _ImplicitAsAny(CanonicalTransformer):
    def visit_implicit_type(self, ty: ImplicitType) -> TypeExpr:
        return ANY


def _join(path: str, segment: str) -> str:
    return f"{path}.{segment}" if path else segment


class EquivalenceChecker:
    """Structural comparison of ShapeDescriptors"""

    def __init__(self, implicit_matches_any: bool = IMPLICIT_MATCHES_ANY):
        self.implicit_matches_any = implicit_matches_any
        self._implicit_as_any = _ImplicitAsAny()

    def canonical(self, ty: TypeExpr) -> TypeExpr:
        """Type as the checker sees it"""
        if self.implicit_matches_any:
            return self._implicit_as_any.transform(ty)
        return ty

    def types_equivalent(self, a: TypeExpr, b: TypeExpr) -> bool:
        return self.canonical(a) == self.canonical(b)

    def equivalent(self, a: ShapeDescriptor, b: ShapeDescriptor) -> bool:
        return self.compare(a, b).equivalent

    def compare(self, a: ShapeDescriptor, b: ShapeDescriptor) -> EquivalenceResult:
        result = EquivalenceResult()
        names = list(a.names) + [n for n in b.names if n not in a]
        for name in names:
            left, right = a.get(name), b.get(name)
            if left is None or right is None:
                result.mismatches.append(Mismatch(
                    field_name=name,
                    path="",
                    left=left.type if left else None,
                    right=right.type if right else None,
                    reason="missing on the right" if right is None else "missing on the left",
                ))
                continue
            if left.optional != right.optional:
                result.mismatches.append(Mismatch(
                    field_name=name,
                    path="",
                    left=left.type,
                    right=right.type,
                    reason="optionality differs",
                ))
            self._compare_types(name, "", self.canonical(left.type), self.canonical(right.type), result.mismatches)
        return result

    def _compare_types(self, name: str, path: str, left: TypeExpr, right: TypeExpr, out: List[Mismatch]) -> None:
        if left == right:
            return
        before = len(out)

        if isinstance(left, ArrayType) and isinstance(right, ArrayType):
            self._compare_types(name, _join(path, "element"), left.element, right.element, out)

        elif isinstance(left, TupleType) and isinstance(right, TupleType) \
                and len(left.elements) == len(right.elements):
            for i, (l, r) in enumerate(zip(left.elements, right.elements)):
                at = _join(path, f"elements[{i}]")
                if l.optional != r.optional:
                    out.append(Mismatch(name, at, l.type, r.type, "tuple element optionality differs"))
                self._compare_types(name, at, l.type, r.type, out)

        elif isinstance(left, ObjectShapeType) and isinstance(right, ObjectShapeType):
            keys = list(left.names) + [k for k in right.names if k not in left]
            for key in keys:
                at = _join(path, f"fields.{key}")
                lf, rf = left.get(key), right.get(key)
                if lf is None or rf is None:
                    out.append(Mismatch(
                        name, at,
                        lf.type if lf else None,
                        rf.type if rf else None,
                        "missing on the right" if rf is None else "missing on the left",
                    ))
                    continue
                if lf.optional != rf.optional:
                    out.append(Mismatch(name, at, lf.type, rf.type, "optionality differs"))
                self._compare_types(name, at, lf.type, rf.type, out)

        elif isinstance(left, GenericType) and isinstance(right, GenericType) \
                and left.name == right.name and len(left.type_args) == len(right.type_args):
            for i, (l, r) in enumerate(zip(left.type_args, right.type_args)):
                self._compare_types(name, _join(path, f"type_args[{i}]"), l, r, out)

        if len(out) == before:
            out.append(Mismatch(name, path, left, right, "type differs"))


def equivalent(a: ShapeDescriptor, b: ShapeDescriptor, implicit_matches_any: bool = IMPLICIT_MATCHES_ANY) -> bool:
    """Shorthand for EquivalenceChecker(implicit_matches_any).equivalent(a, b)"""
    return EquivalenceChecker(implicit_matches_any=implicit_matches_any).equivalent(a, b)
