"""Summary and detail strings for described types.

A described type is identified by a TypeDescriptor (name + kind). Its summary
is fixed per type; its detail appends a snapshot of one instance:

    struct/class:  Foo is Person bar is struct { name: Alice, age: 30 }
    enum:          Foo is NetworkState bar is enum (case: loading, values: progress: 0.75)

Snapshots are built on demand by the caller (generated code, the runtime
decorator, or the CLI) and never stored.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union

from typedesc.internals.exceptions import UnsupportedDeclarationKind


SUMMARY_TEMPLATE = "Foo is {name} bar is {kind}"


class TypeKind(str, Enum):
    CLASS  = "class"
    STRUCT = "struct"
    ENUM   = "enum"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, kind: Union[str, "TypeKind"], name: str = "<anonymous>") -> "TypeKind":
        """Resolve a declaration kind, rejecting anything that is not describable."""
        if isinstance(kind, TypeKind):
            return kind
        try:
            return cls(kind)
        except ValueError:
            raise UnsupportedDeclarationKind(kind=kind, name=name) from None


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    kind: TypeKind

    def __post_init__(self) -> None:
        # Accept plain strings but always store the enum member
        object.__setattr__(self, "kind", TypeKind.parse(self.kind, self.name))


@dataclass(frozen=True)
class FieldEntry:
    """One rendered stored field or associated value."""
    label: Optional[str]
    value: str


@dataclass(frozen=True)
class CaseDescriptor:
    """Active enum case plus its associated values in declaration order."""
    case_name: str
    associated_values: Tuple[FieldEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "associated_values", tuple(self.associated_values))


Snapshot = Union[Sequence[FieldEntry], CaseDescriptor]


def render_value(value: Any) -> str:
    """Render a field value the way string interpolation shows it.

    Strings are used verbatim, booleans are lowercase and None is ``nil``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "nil"
    return str(value)


def summary(descriptor: TypeDescriptor) -> str:
    return SUMMARY_TEMPLATE.format(name=descriptor.name, kind=descriptor.kind.value)


def detail(descriptor: TypeDescriptor, snapshot: Snapshot) -> str:
    """Summary followed by the instance snapshot.

    Unlabeled entries are dropped for classes and structs but rendered bare
    for enum associated values.
    """
    base = summary(descriptor)

    if descriptor.kind is TypeKind.ENUM:
        if not isinstance(snapshot, CaseDescriptor):
            raise TypeError(f"enum '{descriptor.name}' needs a CaseDescriptor snapshot, "
                            f"got {type(snapshot).__name__}")
        if not snapshot.associated_values:
            return f"{base} (case: {snapshot.case_name})"
        values = ", ".join(
            f"{entry.label}: {entry.value}" if entry.label is not None else entry.value
            for entry in snapshot.associated_values
        )
        return f"{base} (case: {snapshot.case_name}, values: {values})"

    if isinstance(snapshot, CaseDescriptor):
        raise TypeError(f"{descriptor.kind.value} '{descriptor.name}' needs a field snapshot, "
                        f"got CaseDescriptor")

    entries = list(snapshot)
    if not entries:
        return base
    props = ", ".join(
        f"{entry.label}: {entry.value}" for entry in entries if entry.label is not None
    )
    return f"{base} {{ {props} }}"
