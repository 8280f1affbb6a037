"""Parse tree to AST conversion for declaration files."""
from typedesc.semantics.ast_builder.builder import ASTBuilder

__all__ = ["ASTBuilder"]
