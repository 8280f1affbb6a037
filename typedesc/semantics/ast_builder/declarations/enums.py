"""Enum case and associated value parsing."""
from __future__ import annotations
from typing import List

from lark import Tree

from typedesc.internals.report import span_of
from typedesc.semantics.ast import AssociatedValueDecl, CaseDecl
from typedesc.semantics.ast_builder.types import parse_type_ref
from typedesc.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees


def parse_casedecl(t: Tree) -> List[CaseDecl]:
    """Parse case_decl: "case" case_item ("," case_item)*

    `case red, green, blue` yields three cases.
    """
    assert t.data == "case_decl"
    return [parse_caseitem(item) for item in trees(t.children, "case_item")]


def parse_caseitem(t: Tree) -> CaseDecl:
    """Parse case_item: NAME associated_values?"""
    name_tok = first_name(t.children)

    values: List[AssociatedValueDecl] = []
    values_node = first_tree(t.children, "associated_values")
    if values_node is not None:
        for child in trees(values_node.children, "labeled_value", "unlabeled_value"):
            values.append(parse_associated_value(child))

    return CaseDecl(
        loc=span_of(t),
        name=str(name_tok),
        values=values,
        name_span=span_of(name_tok),
    )


def parse_associated_value(t: Tree) -> AssociatedValueDecl:
    if t.data == "labeled_value":
        label_tok, type_node = t.children
        return AssociatedValueDecl(loc=span_of(t), label=str(label_tok), ty=parse_type_ref(type_node))
    return AssociatedValueDecl(loc=span_of(t), label=None, ty=parse_type_ref(t.children[0]))
