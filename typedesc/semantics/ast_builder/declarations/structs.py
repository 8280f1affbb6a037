"""Stored field parsing."""
from __future__ import annotations
from lark import Tree

from typedesc.internals.report import span_of
from typedesc.semantics.ast import FieldDecl
from typedesc.semantics.ast_builder.types import (
    LITERAL_NODE_NAMES, TYPE_NODE_NAMES, parse_literal, parse_type_ref,
)
from typedesc.semantics.ast_builder.utils.tree_navigation import first, first_name, first_token


def parse_fielddecl(t: Tree) -> FieldDecl:
    """Parse field_decl: STATIC? (VAR | LET) NAME (":" type_ref)? ("=" literal)?"""
    assert t.data == "field_decl"

    name_tok = first_name(t.children)
    type_node = first(t.children, lambda c: isinstance(c, Tree) and c.data in TYPE_NODE_NAMES)
    default_node = first(t.children, lambda c: isinstance(c, Tree) and c.data in LITERAL_NODE_NAMES)

    return FieldDecl(
        loc=span_of(t),
        name=str(name_tok),
        ty=parse_type_ref(type_node) if type_node is not None else None,
        default=parse_literal(default_node) if default_node is not None else None,
        is_static=first_token(t.children, "STATIC") is not None,
        is_constant=first_token(t.children, "LET") is not None,
        name_span=span_of(name_tok),
    )
