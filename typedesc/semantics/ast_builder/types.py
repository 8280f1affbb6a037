"""Type reference and literal parsing."""
from __future__ import annotations
from lark import Tree, Token

from typedesc.internals import errors as er
from typedesc.internals.report import span_of
from typedesc.semantics.ast import (
    ArrayType, DictType, Literal, NamedType, OptionalType, TypeRef,
)
from typedesc.semantics.ast_builder.utils.string_processing import parse_string_token

TYPE_NODE_NAMES = {"named_type", "optional_type", "array_type", "dict_type"}
LITERAL_NODE_NAMES = {"string_lit", "int_lit", "float_lit", "true_lit", "false_lit", "nil_lit"}


def parse_type_ref(t: Tree) -> TypeRef:
    """Parse one of the aliased type_ref alternatives."""
    loc = span_of(t)
    if t.data == "named_type":
        return NamedType(loc=loc, name=str(t.children[0]))
    if t.data == "optional_type":
        return OptionalType(loc=loc, inner=parse_type_ref(t.children[0]))
    if t.data == "array_type":
        return ArrayType(loc=loc, element=parse_type_ref(t.children[0]))
    if t.data == "dict_type":
        key, value = t.children
        return DictType(loc=loc, key=parse_type_ref(key), value=parse_type_ref(value))
    er.raise_internal_error("CE0002", node=t.data)


def parse_literal(t: Tree) -> Literal:
    """Parse a literal node into its Python value."""
    loc = span_of(t)
    tok: Token = t.children[0] if t.children else None
    if t.data == "string_lit":
        return Literal(loc=loc, kind="string", value=parse_string_token(str(tok)))
    if t.data == "int_lit":
        return Literal(loc=loc, kind="int", value=int(str(tok)))
    if t.data == "float_lit":
        return Literal(loc=loc, kind="float", value=float(str(tok)))
    if t.data == "true_lit":
        return Literal(loc=loc, kind="bool", value=True)
    if t.data == "false_lit":
        return Literal(loc=loc, kind="bool", value=False)
    if t.data == "nil_lit":
        return Literal(loc=loc, kind="nil", value=None)
    er.raise_internal_error("CE0001", node=t.data)
