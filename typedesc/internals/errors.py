# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from typedesc.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    SOURCE    = "source"
    DECL      = "declaration"
    MEMBER    = "member"
    TYPE      = "type"
    MANIFEST  = "manifest"
    CONFIG    = "config"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = format_message(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal generator errors.

    Internal errors (CE0xxx) indicate bugs in typedesc itself, not in the
    declaration file being processed.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = format_message(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def format_message(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors (generator bugs) - CE0xxx range
_add(ErrorMessage("CE0001", Severity.ERROR,
    "unknown declaration node '{node}'",
    Category.INTERNAL, "Found an unexpected parse tree node (bug or unsupported feature)."))

_add(ErrorMessage("CE0002", Severity.ERROR,
    "unknown type reference '{node}'",
    Category.INTERNAL, "Type reference node without a Python mapping."))

_add(ErrorMessage("CE0003", Severity.ERROR,
    "unknown literal kind '{kind}'",
    Category.INTERNAL, "Literal node produced by the AST builder has no Python rendering."))

# Source warnings - CW0xxx
_add(ErrorMessage("CW0001", Severity.WARNING,
    "missing trailing newline at end of file",
    Category.SOURCE, "Declaration files should end with a newline."))

# Declarations - CE1xxx / CW1xxx
_add(ErrorMessage("CE1001", Severity.ERROR,
    "@{attribute} can only be applied to a class, struct, or enum (found {kind} '{name}')",
    Category.DECL, "UnsupportedDeclarationKind: only class, struct and enum declarations are describable."))

_add(ErrorMessage("CE1002", Severity.ERROR,
    "type '{name}' is already declared",
    Category.DECL, "Each described type name must be unique within a declaration file."))

_add(ErrorMessage("CE1003", Severity.ERROR,
    "duplicate field '{field}' in {kind} '{name}'",
    Category.MEMBER, "Stored field names must be unique within a type."))

_add(ErrorMessage("CE1004", Severity.ERROR,
    "duplicate case '{case}' in enum '{name}'",
    Category.MEMBER, "Enum case names must be unique within an enum and must not reuse a static field name."))

_add(ErrorMessage("CE1005", Severity.ERROR,
    "member '{member}' of '{name}' conflicts with a generated method",
    Category.MEMBER, "to_string, to_detail_string, describe_fields and describe_case are generated."))

_add(ErrorMessage("CE1006", Severity.ERROR,
    "'{ident}' is a reserved word in generated Python code",
    Category.MEMBER, "Type, field and case names must be valid Python identifiers."))

_add(ErrorMessage("CE1007", Severity.ERROR,
    "enum '{name}' cannot declare stored field '{field}'",
    Category.MEMBER, "Enums carry data only through associated values."))

_add(ErrorMessage("CE1008", Severity.ERROR,
    "case '{case}' declared outside of an enum ({kind} '{name}')",
    Category.MEMBER, "Only enums can declare cases."))

_add(ErrorMessage("CE1009", Severity.ERROR,
    "static field '{field}' of '{name}' requires a default value",
    Category.MEMBER, "Static fields are class attributes and must be initialized."))

_add(ErrorMessage("CE1010", Severity.ERROR,
    "cannot infer type of field '{field}' of '{name}'",
    Category.TYPE, "Add a type annotation or a non-nil default value."))

_add(ErrorMessage("CW1001", Severity.WARNING,
    "@{attribute} applied more than once to '{name}'",
    Category.DECL, "Repeated attributes have no additional effect."))

_add(ErrorMessage("CW1002", Severity.WARNING,
    "no declarations marked with @{attribute}",
    Category.DECL, "The generated module will be empty."))

# Descriptor manifest - CE30xx
_add(ErrorMessage("CE3001", Severity.ERROR,
    "'{path}' is not a typedesc manifest",
    Category.MANIFEST, "The JSON document has no typedesc_manifest_version key."))

_add(ErrorMessage("CE3002", Severity.ERROR,
    "manifest '{path}' has format version {version}, supported version is {supported}",
    Category.MANIFEST, "Regenerate the manifest with this version of typedesc."))

_add(ErrorMessage("CE3003", Severity.ERROR,
    "manifest '{path}' is not valid JSON: {reason}",
    Category.MANIFEST, "The file is not a UTF-8 JSON document."))

_add(ErrorMessage("CE3004", Severity.ERROR,
    "manifest '{path}' has corrupt metadata: {reason}",
    Category.MANIFEST, "The types list is missing or has an entry without a name or describable kind."))

# Configuration - CE31xx
_add(ErrorMessage("CE3101", Severity.ERROR,
    "invalid configuration in '{path}': {reason}",
    Category.CONFIG, "See [generate] in typedesc.toml."))
