"""--dump-ast output: the parsed declarations printed back in declaration syntax.

Each type is preceded by a `// line:col` comment pointing at its name, so the
dump shows what the AST builder kept (normalized types, processed string
escapes, one case per line) and where it came from.
"""
from __future__ import annotations
from typing import List

from typedesc.semantics.ast import AssociatedValueDecl, CaseDecl, FieldDecl, Literal, Program, TypeDecl

INDENT = "    "

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r", "\0": "\\0"}


def format_literal(lit: Literal) -> str:
    if lit.kind == "string":
        return '"' + "".join(_ESCAPES.get(ch, ch) for ch in lit.value) + '"'
    if lit.kind == "bool":
        return "true" if lit.value else "false"
    if lit.kind == "nil":
        return "nil"
    return str(lit.value)


def format_field(fd: FieldDecl) -> str:
    parts = ["static " if fd.is_static else "", "let " if fd.is_constant else "var ", fd.name]
    if fd.ty is not None:
        parts.append(f": {fd.ty}")
    if fd.default is not None:
        parts.append(f" = {format_literal(fd.default)}")
    return "".join(parts)


def _format_value(value: AssociatedValueDecl) -> str:
    return f"{value.label}: {value.ty}" if value.label is not None else str(value.ty)


def format_case(case: CaseDecl) -> str:
    if not case.values:
        return f"case {case.name}"
    return f"case {case.name}({', '.join(_format_value(v) for v in case.values)})"


def format_decl(decl: TypeDecl) -> List[str]:
    lines = []
    if decl.name_span is not None:
        lines.append(f"// {decl.name_span.line}:{decl.name_span.col}")
    for attr in decl.attributes:
        lines.append(f"@{attr.name}({', '.join(attr.args)})" if attr.args else f"@{attr.name}")

    inherits = f": {', '.join(str(t) for t in decl.inherits)}" if decl.inherits else ""
    members = [format_field(fd) for fd in decl.fields] + [format_case(c) for c in decl.cases]
    if not members:
        lines.append(f"{decl.kind} {decl.name}{inherits} {{}}")
        return lines

    lines.append(f"{decl.kind} {decl.name}{inherits} {{")
    lines += [f"{INDENT}{member}" for member in members]
    lines.append("}")
    return lines


def dump_ast(program: Program) -> str:
    blocks = ["\n".join(format_decl(decl)) for decl in program.types]
    header = f"// {len(program.types)} declaration(s)"
    return "\n\n".join([header] + blocks)
