"""Runtime registration of describable Python classes.

    @describable
    @dataclass
    class Person:
        name: str
        age: int

    Person("Alice", 30).to_detail_string()
    # 'Foo is Person bar is struct { name: Alice, age: 30 }'

The kind is inferred (Enum subclass -> enum, dataclass -> struct, any other
class -> class) unless given explicitly. A class can supply its own snapshot
by defining describe_fields() or describe_case().
"""
from __future__ import annotations
import dataclasses
import enum
import inspect
from typing import Any, Callable, List, Optional, Union

from typedesc.formatting import (
    CaseDescriptor, FieldEntry, Snapshot, TypeDescriptor, TypeKind,
    detail, render_value, summary,
)
from typedesc.internals.exceptions import UnsupportedDeclarationKind

_GENERATED = ("to_string", "to_detail_string")


class Formatter:
    """Summary/detail formatting bound to one TypeDescriptor."""

    __slots__ = ("descriptor",)

    def __init__(self, descriptor: TypeDescriptor) -> None:
        self.descriptor = descriptor

    def summary(self) -> str:
        return summary(self.descriptor)

    def detail(self, snapshot: Snapshot) -> str:
        return detail(self.descriptor, snapshot)

    def __repr__(self) -> str:
        return f"Formatter({self.descriptor.name!r}, {self.descriptor.kind.value!r})"


def register(name: str, kind: Union[str, TypeKind]) -> Formatter:
    """Register a type once and get its formatter.

    Raises:
        UnsupportedDeclarationKind: kind is not class, struct or enum.
    """
    return Formatter(TypeDescriptor(name=name, kind=TypeKind.parse(kind, name)))


def infer_kind(target: Any) -> TypeKind:
    name = getattr(target, "__name__", type(target).__name__)
    if not inspect.isclass(target):
        found = "function" if callable(target) else type(target).__name__
        raise UnsupportedDeclarationKind(kind=found, name=name)
    if getattr(target, "_is_protocol", False):
        raise UnsupportedDeclarationKind(kind="protocol", name=name)
    if issubclass(target, enum.Enum):
        return TypeKind.ENUM
    if dataclasses.is_dataclass(target):
        return TypeKind.STRUCT
    return TypeKind.CLASS


# --- Snapshots

def _own_method(obj: Any, name: str) -> Optional[Callable]:
    """A snapshot hook the class itself defines, skipping the ones we attach."""
    method = getattr(type(obj), name, None)
    if method is None or getattr(method, "__typedesc_generated__", False):
        return None
    return getattr(obj, name)


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in ("__dict__", "__weakref__") and slot not in names:
                names.append(slot)
    return names


def field_snapshot(obj: Any) -> List[FieldEntry]:
    """Stored fields of a class/struct instance in declaration order."""
    hook = _own_method(obj, "describe_fields")
    if hook is not None:
        return list(hook())

    if dataclasses.is_dataclass(obj):
        # field(init=False) stays unset until assigned
        return [FieldEntry(f.name, render_value(getattr(obj, f.name)))
                for f in dataclasses.fields(obj) if hasattr(obj, f.name)]

    entries = [FieldEntry(k, render_value(v)) for k, v in getattr(obj, "__dict__", {}).items()]
    for slot in _slot_names(type(obj)):
        if hasattr(obj, slot):
            entries.append(FieldEntry(slot, render_value(getattr(obj, slot))))
    return entries


def case_snapshot(obj: Any) -> CaseDescriptor:
    """Active case of an enum value."""
    hook = _own_method(obj, "describe_case")
    if hook is not None:
        return hook()
    if isinstance(obj, enum.Enum):
        return CaseDescriptor(obj.name)
    raise TypeError(f"{type(obj).__name__} is registered as an enum but is not an Enum "
                    "and defines no describe_case()")


def snapshot_of(obj: Any, kind: TypeKind) -> Snapshot:
    if kind is TypeKind.ENUM:
        return case_snapshot(obj)
    return field_snapshot(obj)


# --- Decorator

def _attach(cls: type, formatter: Formatter) -> None:
    for name in _GENERATED:
        if name in cls.__dict__:
            raise TypeError(f"{cls.__name__} already defines {name}()")

    base = formatter.summary()
    kind = formatter.descriptor.kind

    def to_string(self) -> str:
        return base

    def to_detail_string(self) -> str:
        return formatter.detail(snapshot_of(self, kind))

    for fn in (to_string, to_detail_string):
        fn.__qualname__ = f"{cls.__qualname__}.{fn.__name__}"
        fn.__typedesc_generated__ = True
        setattr(cls, fn.__name__, fn)
    cls.__type_descriptor__ = formatter.descriptor


def describable(cls: Optional[type] = None, *, kind: Union[str, TypeKind, None] = None):
    """Class decorator attaching to_string() and to_detail_string().

    Usable bare (``@describable``) or with an explicit kind
    (``@describable(kind="struct")``).

    Raises:
        UnsupportedDeclarationKind: applied to something that is not a
            class, to a Protocol, or given a kind other than class, struct
            or enum.
    """
    def wrap(target: Any) -> type:
        if kind is None:
            resolved = infer_kind(target)
        else:
            infer_kind(target)
            resolved = TypeKind.parse(kind, getattr(target, "__name__", "<anonymous>"))
        _attach(target, register(target.__name__, resolved))
        return target

    if cls is None:
        return wrap
    return wrap(cls)
