"""Exceptions carrying error catalog codes."""
from __future__ import annotations


class TypedescError(Exception):
    """Base exception; the message is formatted from the error catalog."""

    code = "CE0000"

    def __init__(self, code: str | None = None, **kwargs):
        from typedesc.internals.errors import format_message

        self.code = code or self.code
        self.kwargs = kwargs
        self.message = format_message(self.code, **kwargs)
        super().__init__(f"{self.code}: {self.message}")


class UnsupportedDeclarationKind(TypedescError):
    """Raised when something other than a class, struct or enum is registered."""

    code = "CE1001"

    def __init__(self, kind, name: str = "<anonymous>", attribute: str = "Foobar"):
        self.kind = kind
        self.name = name
        super().__init__(kind=kind, name=name, attribute=attribute)


class ManifestError(TypedescError):
    pass


class ConfigError(TypedescError):
    code = "CE3101"
