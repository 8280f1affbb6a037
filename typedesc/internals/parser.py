"""Lark parser setup and AST construction."""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, UnexpectedInput, UnexpectedToken

from typedesc.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"

# Member keywords that users commonly write inside a type body
_UNSUPPORTED_MEMBERS = {"func", "init", "deinit", "subscript", "typealias", "private", "public"}


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    return Lark.open(
        str(GRAMMAR_PATH),
        start="program",
        parser="lalr",
        lexer="basic",
        propagate_positions=True,
        maybe_placeholders=False,
    )


def improve_parse_error(e: UnexpectedInput) -> str:
    """Improve parsing error messages for common cases."""
    error_text = str(e)

    if isinstance(e, UnexpectedToken) and e.token.type == "NAME" and e.token.value in _UNSUPPORTED_MEMBERS:
        location = f"line {e.line}, column {e.column}"
        return (f"{error_text}\nParsing error: '{e.token.value}' at {location} is not a stored field.\n"
                "Hint: only 'var'/'let' fields and 'case' declarations are supported inside a type body")

    if "Expected one of:" in error_text and "LBRACE" in error_text:
        lines = error_text.split('\n')
        location_line = lines[0] if lines else ""
        line_match = re.search(r'at line (\d+)', location_line)
        if line_match:
            return f"{location_line}\nParsing error: Missing '{{' after the type name.\nHint: Use 'struct Name {{ ... }}'"

    return error_text


def parse_to_ast(src: str, dump_parse: bool = False):
    """Parse declaration source into an AST.

    Returns:
        Tuple of (ast, parse_tree).
    """
    tree = get_parser().parse(src)
    if dump_parse:
        print(tree.pretty())

    ast_builder = ASTBuilder()
    return ast_builder.build(tree), tree
