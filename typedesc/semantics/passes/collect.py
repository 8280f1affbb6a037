# semantics/passes/collect.py
"""Descriptor collection.

Walks the declarations marked with the describe attribute and builds the
descriptor table consumed by code generation, the manifest writer and the
CLI describe mode. Validates:
- the declaration kind is class, struct or enum (UnsupportedDeclarationKind)
- no duplicate type, field or case names
- no members clashing with generated methods or Python keywords
- enums hold data only in associated values, cases live only in enums
- every stored field has a known or inferable type
"""

from __future__ import annotations
import keyword
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from typedesc.formatting import TypeDescriptor, TypeKind
from typedesc.internals import errors as er
from typedesc.internals.errors import ERR
from typedesc.internals.report import Reporter
from typedesc.semantics.ast import FieldDecl, NamedType, Program, TypeDecl, TypeRef

DEFAULT_ATTRIBUTE = "Foobar"

GENERATED_MEMBERS = frozenset({"to_string", "to_detail_string", "describe_fields", "describe_case"})
ENUM_RESERVED_MEMBERS = frozenset({"case_name", "associated_values"})

# Parameter names used by generated methods
GENERATED_PARAMS = frozenset({"self", "cls"})

_LITERAL_TYPES = {
    "string": "String",
    "int": "Int",
    "float": "Double",
    "bool": "Bool",
}


@dataclass
class DescribedType:
    """A validated declaration together with its descriptor."""
    descriptor: TypeDescriptor
    decl: TypeDecl

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def kind(self) -> TypeKind:
        return self.descriptor.kind


@dataclass
class DescriptorTable:
    """Described types in declaration order."""
    by_name: Dict[str, DescribedType] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)

    def __iter__(self):
        return (self.by_name[name] for name in self.order)

    def __len__(self) -> int:
        return len(self.order)

    def descriptors(self) -> List[TypeDescriptor]:
        return [t.descriptor for t in self]


def infer_field_type(fd: FieldDecl) -> Optional[TypeRef]:
    """Annotated type, or the type implied by a non-nil default literal."""
    if fd.ty is not None:
        return fd.ty
    if fd.default is not None and fd.default.kind in _LITERAL_TYPES:
        return NamedType(loc=fd.default.loc, name=_LITERAL_TYPES[fd.default.kind])
    return None


class DescriptorCollector:
    """Collector for attributed declarations.

    A declaration that fails validation is reported and left out of the
    table; callers check `reporter.has_errors` before generating anything.
    """

    def __init__(self, reporter: Reporter, table: DescriptorTable,
                 attribute: str = DEFAULT_ATTRIBUTE) -> None:
        self.r = reporter
        self.table = table
        self.attribute = attribute

    def collect(self, root: Program) -> None:
        marked = [decl for decl in root.types if decl.attributes_named(self.attribute)]
        if not marked:
            er.emit(self.r, ERR.CW1002, None, attribute=self.attribute)
            return
        for decl in marked:
            self._collect_decl(decl)

    def _collect_decl(self, decl: TypeDecl) -> None:
        uses = decl.attributes_named(self.attribute)
        if len(uses) > 1:
            er.emit(self.r, ERR.CW1001, uses[1].loc, attribute=self.attribute, name=decl.name)

        if decl.kind not in {k.value for k in TypeKind}:
            er.emit(self.r, ERR.CE1001, decl.name_span or decl.loc,
                    attribute=self.attribute, kind=decl.kind, name=decl.name)
            return

        if decl.name in self.table.by_name:
            er.emit(self.r, ERR.CE1002, decl.name_span, name=decl.name)
            return

        errors_before = self._error_count()

        self._check_identifier(decl.name, decl.name_span)
        kind = TypeKind(decl.kind)
        if kind is TypeKind.ENUM:
            self._check_enum(decl)
        else:
            self._check_fields(decl, kind)

        if self._error_count() > errors_before:
            return

        descriptor = TypeDescriptor(name=decl.name, kind=kind)
        self.table.by_name[decl.name] = DescribedType(descriptor=descriptor, decl=decl)
        self.table.order.append(decl.name)

    def _error_count(self) -> int:
        return sum(1 for d in self.r.items if d.kind == "error")

    def _check_identifier(self, ident: str, span) -> None:
        if keyword.iskeyword(ident) or ident in GENERATED_PARAMS:
            er.emit(self.r, ERR.CE1006, span, ident=ident)

    def _check_member_name(self, decl: TypeDecl, member: str, span, reserved=GENERATED_MEMBERS) -> None:
        if member in reserved:
            er.emit(self.r, ERR.CE1005, span, member=member, name=decl.name)
        self._check_identifier(member, span)

    def _check_fields(self, decl: TypeDecl, kind: TypeKind) -> None:
        for case in decl.cases:
            er.emit(self.r, ERR.CE1008, case.name_span, case=case.name, kind=kind.value, name=decl.name)

        seen = set()
        for fd in decl.fields:
            if fd.name in seen:
                er.emit(self.r, ERR.CE1003, fd.name_span, field=fd.name, kind=kind.value, name=decl.name)
                continue
            seen.add(fd.name)
            self._check_member_name(decl, fd.name, fd.name_span)

            if fd.is_static and fd.default is None:
                er.emit(self.r, ERR.CE1009, fd.name_span, field=fd.name, name=decl.name)
                continue

            ty = infer_field_type(fd)
            if ty is None:
                er.emit(self.r, ERR.CE1010, fd.name_span, field=fd.name, name=decl.name)
                continue
            fd.ty = ty

    def _check_enum(self, decl: TypeDecl) -> None:
        for fd in decl.fields:
            if fd.is_static:
                continue
            er.emit(self.r, ERR.CE1007, fd.name_span, name=decl.name, field=fd.name)

        # Static fields and cases share the enum class namespace
        seen = set()
        for fd in decl.fields:
            if not fd.is_static:
                continue
            if fd.name in seen:
                er.emit(self.r, ERR.CE1003, fd.name_span, field=fd.name, kind="enum", name=decl.name)
                continue
            seen.add(fd.name)
            self._check_member_name(decl, fd.name, fd.name_span,
                                    reserved=GENERATED_MEMBERS | ENUM_RESERVED_MEMBERS)
            if fd.default is None:
                er.emit(self.r, ERR.CE1009, fd.name_span, field=fd.name, name=decl.name)
                continue
            ty = infer_field_type(fd)
            if ty is None:
                er.emit(self.r, ERR.CE1010, fd.name_span, field=fd.name, name=decl.name)
                continue
            fd.ty = ty

        for case in decl.cases:
            if case.name in seen:
                er.emit(self.r, ERR.CE1004, case.name_span, case=case.name, name=decl.name)
                continue
            seen.add(case.name)
            self._check_member_name(decl, case.name, case.name_span,
                                    reserved=GENERATED_MEMBERS | ENUM_RESERVED_MEMBERS)
            labels = set()
            for value in case.values:
                if value.label is None:
                    continue
                if value.label in labels:
                    er.emit(self.r, ERR.CE1003, value.loc, field=value.label, kind="case", name=case.name)
                labels.add(value.label)
                self._check_identifier(value.label, value.loc)
