"""ASTBuilder orchestrator for declaration files.

Turns the Lark parse tree into AST dataclasses. Declaration parsing is
delegated to:

- semantics.ast_builder.declarations.typedecls (type headers, attributes)
- semantics.ast_builder.declarations.structs   (stored fields)
- semantics.ast_builder.declarations.enums     (cases, associated values)
- semantics.ast_builder.types                  (type references, literals)
"""
from __future__ import annotations
from typing import List

from lark import Tree

from typedesc.internals import errors as er
from typedesc.internals.report import span_of
from typedesc.semantics.ast import Program, TypeDecl


class ASTBuilder:
    def build(self, tree: Tree) -> Program:
        """Build Program AST from parse tree."""
        from typedesc.semantics.ast_builder.declarations import typedecls

        assert isinstance(tree, Tree) and tree.data == "program"
        types: List[TypeDecl] = []
        for child in tree.children:
            if isinstance(child, Tree) and child.data == "decl":
                types.append(typedecls.parse_typedecl(child))
            else:
                er.raise_internal_error("CE0001", node=getattr(child, "data", child))

        return Program(loc=span_of(tree), types=types)
