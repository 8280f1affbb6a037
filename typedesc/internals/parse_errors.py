"""Shared parse exception handling for loader and CLI."""
from __future__ import annotations

import sys

from lark import UnexpectedInput


def handle_parse_exception(exc: Exception, reporter, source_path=None) -> bool:
    """Handle a parse exception by printing an improved Lark message.

    Args:
        exc: The exception to handle.
        reporter: Reporter whose filename names the source in the message.
        source_path: Optional path overriding the reporter filename.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from typedesc.internals.parser import improve_parse_error

    if isinstance(exc, UnexpectedInput):
        print(f"Parse error in {source_path or reporter.filename}:", file=sys.stderr)
        print(improve_parse_error(exc), file=sys.stderr)
        return True

    return False
