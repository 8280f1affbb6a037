"""Type declaration, attribute and inheritance parsing."""
from __future__ import annotations
from typing import List

from lark import Tree, Token

from typedesc.internals import errors as er
from typedesc.internals.report import span_of
from typedesc.semantics.ast import Attribute, CaseDecl, FieldDecl, TypeDecl, TypeRef
from typedesc.semantics.ast_builder.declarations.enums import parse_casedecl
from typedesc.semantics.ast_builder.declarations.structs import parse_fielddecl
from typedesc.semantics.ast_builder.types import (
    LITERAL_NODE_NAMES, TYPE_NODE_NAMES, parse_literal, parse_type_ref,
)
from typedesc.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees


def parse_typedecl(t: Tree) -> TypeDecl:
    """Parse decl: attribute* decl_kind NAME inherits? "{" member* "}" """
    assert t.data == "decl"

    kind_node = first_tree(t.children, "decl_kind")
    name_tok = first_name(t.children)
    if kind_node is None or name_tok is None:
        er.raise_internal_error("CE0001", node=t.data)

    attributes = [parse_attribute(a) for a in trees(t.children, "attribute")]

    inherits: List[TypeRef] = []
    inherits_node = first_tree(t.children, "inherits")
    if inherits_node is not None:
        inherits = [parse_type_ref(c) for c in trees(inherits_node.children, *TYPE_NODE_NAMES)]

    # Members keep source order within their own kind
    fields: List[FieldDecl] = []
    cases: List[CaseDecl] = []
    for child in trees(t.children, "field_decl", "case_decl"):
        if child.data == "field_decl":
            fields.append(parse_fielddecl(child))
        else:
            cases.extend(parse_casedecl(child))

    return TypeDecl(
        loc=span_of(t),
        kind=str(kind_node.children[0]),
        name=str(name_tok),
        attributes=attributes,
        inherits=inherits,
        fields=fields,
        cases=cases,
        name_span=span_of(name_tok),
    )


def parse_attribute(t: Tree) -> Attribute:
    """Parse attribute: "@" NAME attribute_args?

    Arguments are kept as source text; only the attribute name matters for
    collection.
    """
    name_tok = first_name(t.children)
    args: List[str] = []
    args_node = first_tree(t.children, "attribute_args")
    if args_node is not None:
        for arg in trees(args_node.children, "attribute_arg"):
            args.append(_attribute_arg_text(arg))
    return Attribute(loc=span_of(t), name=str(name_tok), args=args)


def _attribute_arg_text(t: Tree) -> str:
    parts: List[str] = []
    for child in t.children:
        if isinstance(child, Token):
            parts.append(str(child))
        elif isinstance(child, Tree) and child.data in LITERAL_NODE_NAMES:
            parts.append(repr(parse_literal(child).value))
    if len(parts) == 2:
        return f"{parts[0]}: {parts[1]}"
    return parts[0] if parts else ""
