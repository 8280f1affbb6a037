"""Source file loading."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from typedesc.internals import errors as er
from typedesc.internals.parse_errors import handle_parse_exception
from typedesc.internals.parser import parse_to_ast
from typedesc.internals.report import Reporter
from typedesc.semantics.ast import Program


def get_effective_cwd() -> Path:
    """Get the effective current working directory for file resolution.

    TYPEDESC_CWD, when set, replaces os.getcwd() for resolving relative
    source paths and finding typedesc.toml.
    """
    typedesc_cwd = os.environ.get('TYPEDESC_CWD')
    if typedesc_cwd:
        return Path(typedesc_cwd)
    return Path.cwd()


def resolve_source(source: str) -> Path:
    src_path = Path(source)
    if not src_path.is_absolute():
        src_path = get_effective_cwd() / src_path
    return src_path.resolve()


def load_program(src: str, reporter: Reporter, dump_parse: bool = False) -> Optional[Program]:
    """Parse `src`; returns None after printing a parse error."""
    try:
        ast, _tree = parse_to_ast(src, dump_parse=dump_parse)
    except Exception as exc:
        if handle_parse_exception(exc, reporter):
            return None
        raise

    if src and not src.endswith('\n'):
        er.emit(reporter, er.ERR.CW0001, None)
    return ast
