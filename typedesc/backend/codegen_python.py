"""Python module generation for described types.

Each described declaration becomes a Python class carrying the generated
members:

    to_string()          the summary, embedded as a literal
    describe_fields()    class/struct snapshot, in declaration order
    describe_case()      enum snapshot (active case + associated values)
    to_detail_string()   detail() over the snapshot

struct -> @dataclass(kw_only=True), class -> plain class with a keyword-only
__init__, enum -> tagged class with one constructor per case.
"""
from __future__ import annotations
from typing import List, Optional, Set

from typedesc import __version__
from typedesc.backend.type_mapping import python_annotation, python_literal
from typedesc.formatting import TypeKind, summary
from typedesc.semantics.ast import FieldDecl
from typedesc.semantics.passes.collect import DescribedType, DescriptorTable

INDENT = "    "


class PythonCodegen:
    """Emit one Python module for a descriptor table."""

    def __init__(self, table: DescriptorTable, source_name: Optional[str] = None) -> None:
        self.table = table
        self.source_name = source_name
        self.lines: List[str] = []
        self.typing_names: Set[str] = set()

    def generate(self) -> str:
        body: List[str] = []
        for described in self.table:
            self.lines = []
            if described.kind is TypeKind.ENUM:
                self._emit_enum(described)
            elif described.kind is TypeKind.STRUCT:
                self._emit_struct(described)
            else:
                self._emit_class(described)
            body.append("\n".join(self.lines))

        return "\n".join(self._header()) + "\n\n\n" + "\n\n\n".join(body) + self._footer()

    # ------------------------------------------------------------------
    # Module scaffolding

    def _header(self) -> List[str]:
        origin = f" from {self.source_name}" if self.source_name else ""
        lines = [
            f"# Generated by typedesc {__version__}{origin}. Do not edit.",
            "from __future__ import annotations",
            "",
        ]
        if any(t.kind is TypeKind.STRUCT for t in self.table):
            lines.append("from dataclasses import dataclass")
        typing_names = set(self.typing_names)
        if any(t.kind is TypeKind.ENUM for t in self.table):
            typing_names.add("Any")
        if typing_names:
            lines.append(f"from typing import {', '.join(sorted(typing_names))}")
        lines += [
            "",
            "from typedesc.formatting import (",
            f"{INDENT}CaseDescriptor, FieldEntry, TypeDescriptor, TypeKind, detail, render_value,",
            ")",
        ]
        return lines

    def _footer(self) -> str:
        names = [t.name for t in self.table]
        out = ["", "", ""]
        out.append("DESCRIPTORS = (")
        out += [f"{INDENT}{name}.__type_descriptor__," for name in names]
        out.append(")")
        out.append("")
        out.append("__all__ = [" + ", ".join(repr(n) for n in names + ["DESCRIPTORS"]) + "]")
        return "\n".join(out) + "\n"

    # ------------------------------------------------------------------
    # Emission helpers

    def _emit(self, line: str = "", depth: int = 0) -> None:
        self.lines.append(f"{INDENT * depth}{line}" if line else "")

    def _annotation(self, fd: FieldDecl) -> str:
        return python_annotation(fd.ty, self.typing_names)

    def _emit_descriptor(self, described: DescribedType) -> None:
        kind = described.kind.name
        self._emit(f"__type_descriptor__ = TypeDescriptor({described.name!r}, TypeKind.{kind})", 1)

    def _emit_static_fields(self, described: DescribedType) -> None:
        for fd in described.decl.fields:
            if fd.is_static:
                self._emit(f"{fd.name} = {python_literal(fd.default)}  # static {fd.ty}", 1)

    def _emit_to_string(self, described: DescribedType) -> None:
        self._emit()
        self._emit("def to_string(self) -> str:", 1)
        self._emit(f"return {summary(described.descriptor)!r}", 2)

    def _emit_describe_fields(self, described: DescribedType) -> None:
        stored = described.decl.stored_fields
        self._emit()
        self._emit("def describe_fields(self) -> list[FieldEntry]:", 1)
        if not stored:
            self._emit("return []", 2)
        else:
            self._emit("return [", 2)
            for fd in stored:
                self._emit(f"FieldEntry({fd.name!r}, render_value(self.{fd.name})),", 3)
            self._emit("]", 2)
        self._emit()
        self._emit("def to_detail_string(self) -> str:", 1)
        self._emit("return detail(self.__type_descriptor__, self.describe_fields())", 2)

    # ------------------------------------------------------------------
    # struct / class

    def _emit_struct(self, described: DescribedType) -> None:
        self._emit("@dataclass(kw_only=True)")
        self._emit(f"class {described.name}:")
        self._emit_descriptor(described)
        self._emit_static_fields(described)

        stored = described.decl.stored_fields
        if stored:
            self._emit()
        for fd in stored:
            default = f" = {python_literal(fd.default)}" if fd.default is not None else ""
            self._emit(f"{fd.name}: {self._annotation(fd)}{default}", 1)

        self._emit_to_string(described)
        self._emit_describe_fields(described)

    def _emit_class(self, described: DescribedType) -> None:
        self._emit(f"class {described.name}:")
        self._emit_descriptor(described)
        self._emit_static_fields(described)

        stored = described.decl.stored_fields
        if stored:
            params = []
            for fd in stored:
                default = f" = {python_literal(fd.default)}" if fd.default is not None else ""
                params.append(f"{fd.name}: {self._annotation(fd)}{default}")
            self._emit()
            self._emit(f"def __init__(self, *, {', '.join(params)}) -> None:", 1)
            for fd in stored:
                self._emit(f"self.{fd.name} = {fd.name}", 2)

        self._emit_to_string(described)
        self._emit_describe_fields(described)

    # ------------------------------------------------------------------
    # enum

    def _emit_enum(self, described: DescribedType) -> None:
        name = described.name
        cases = described.decl.cases

        self._emit(f"class {name}:")
        self._emit_descriptor(described)
        self._emit_static_fields(described)
        self._emit("__cases__ = {", 1)
        for case in cases:
            labels = "".join(f"{v.label!r}, " for v in case.values).rstrip(" ")
            self._emit(f"{case.name!r}: ({labels}),", 2)
        self._emit("}", 1)

        self._emit()
        self._emit("def __init__(self, case_name: str, *associated_values: Any) -> None:", 1)
        self._emit("labels = self.__cases__.get(case_name)", 2)
        self._emit("if labels is None:", 2)
        self._emit(f"raise ValueError(f\"{name} has no case '{{case_name}}'\")", 3)
        self._emit("if len(associated_values) != len(labels):", 2)
        self._emit(f"raise TypeError(f\"{name}.{{case_name}} takes {{len(labels)}} associated value(s), \"", 3)
        self._emit("                f\"got {len(associated_values)}\")", 3)
        self._emit("self.case_name = case_name", 2)
        self._emit("self.associated_values = associated_values", 2)

        for case in cases:
            if not case.values:
                continue
            params = []
            args = []
            taken = {v.label for v in case.values if v.label is not None}
            for i, value in enumerate(case.values):
                param = value.label
                if param is None:
                    # Unlabeled values get a positional name no label uses
                    param = f"_{i}"
                    while param in taken:
                        param += "_"
                    taken.add(param)
                params.append(f"{param}: {python_annotation(value.ty, self.typing_names)}")
                args.append(param)
            self._emit()
            self._emit("@classmethod", 1)
            self._emit(f"def {case.name}(cls, {', '.join(params)}) -> {name}:", 1)
            self._emit(f"return cls({case.name!r}, {', '.join(args)})", 2)

        self._emit()
        self._emit("def __eq__(self, other: object) -> bool:", 1)
        self._emit(f"if not isinstance(other, {name}):", 2)
        self._emit("return NotImplemented", 3)
        self._emit("return (self.case_name, self.associated_values) == (other.case_name, other.associated_values)", 2)
        self._emit()
        self._emit("def __hash__(self) -> int:", 1)
        self._emit("return hash((self.case_name, self.associated_values))", 2)
        self._emit()
        self._emit("def __repr__(self) -> str:", 1)
        self._emit("if not self.associated_values:", 2)
        self._emit(f"return f\"{name}.{{self.case_name}}\"", 3)
        self._emit("args = \", \".join(", 2)
        self._emit("repr(value) if label is None else f\"{label}={value!r}\"", 3)
        self._emit("for label, value in zip(self.__cases__[self.case_name], self.associated_values)", 3)
        self._emit(")", 2)
        self._emit(f"return f\"{name}.{{self.case_name}}({{args}})\"", 2)

        self._emit_to_string(described)
        self._emit()
        self._emit("def describe_case(self) -> CaseDescriptor:", 1)
        self._emit("labels = self.__cases__[self.case_name]", 2)
        self._emit("return CaseDescriptor(self.case_name, tuple(", 2)
        self._emit("FieldEntry(label, render_value(value))", 3)
        self._emit("for label, value in zip(labels, self.associated_values)", 3)
        self._emit("))", 2)
        self._emit()
        self._emit("def to_detail_string(self) -> str:", 1)
        self._emit("return detail(self.__type_descriptor__, self.describe_case())", 2)

        # Payload-free cases are values, not constructors
        plain = [case for case in cases if not case.values]
        if plain:
            self._emit()
            self._emit()
            for case in plain:
                self._emit(f"{name}.{case.name} = {name}({case.name!r})")


def generate_module(table: DescriptorTable, source_name: Optional[str] = None) -> str:
    return PythonCodegen(table, source_name).generate()
