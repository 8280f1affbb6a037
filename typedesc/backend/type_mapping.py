"""Declaration types and literals rendered as Python source."""
from __future__ import annotations
import math
from typing import Set

from typedesc.internals import errors as er
from typedesc.semantics.ast import ArrayType, DictType, Literal, NamedType, OptionalType, TypeRef

BUILTIN_TYPES = {
    "String": "str",
    "Character": "str",
    "Substring": "str",
    "Int": "int",
    "Int8": "int",
    "Int16": "int",
    "Int32": "int",
    "Int64": "int",
    "UInt": "int",
    "UInt8": "int",
    "UInt16": "int",
    "UInt32": "int",
    "UInt64": "int",
    "Double": "float",
    "Float": "float",
    "CGFloat": "float",
    "Bool": "bool",
    "Any": "Any",
}

# Names the generated module must import from typing
TYPING_NAMES = {"Any", "Optional"}


def python_annotation(ty: TypeRef, typing_names: Set[str]) -> str:
    """Python annotation text for `ty`; typing imports it needs go into `typing_names`."""
    if isinstance(ty, NamedType):
        mapped = BUILTIN_TYPES.get(ty.name, ty.name)
        if mapped in TYPING_NAMES:
            typing_names.add(mapped)
        return mapped
    if isinstance(ty, OptionalType):
        typing_names.add("Optional")
        return f"Optional[{python_annotation(ty.inner, typing_names)}]"
    if isinstance(ty, ArrayType):
        return f"list[{python_annotation(ty.element, typing_names)}]"
    if isinstance(ty, DictType):
        key = python_annotation(ty.key, typing_names)
        value = python_annotation(ty.value, typing_names)
        return f"dict[{key}, {value}]"
    er.raise_internal_error("CE0002", node=type(ty).__name__)


def python_literal(lit: Literal) -> str:
    """Python source for a default value literal."""
    if lit.kind == "float" and not math.isfinite(lit.value):
        # repr gives inf/nan, which are not Python names
        return f"float({repr(lit.value)!r})"
    if lit.kind in ("string", "int", "float", "bool"):
        return repr(lit.value)
    if lit.kind == "nil":
        return "None"
    er.raise_internal_error("CE0003", kind=lit.kind)
