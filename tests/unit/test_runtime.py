import enum
from dataclasses import dataclass, field
from typing import Protocol

import pytest

from typedesc.formatting import CaseDescriptor, FieldEntry, TypeKind
from typedesc.internals.exceptions import UnsupportedDeclarationKind
from typedesc.runtime import Formatter, describable, field_snapshot, infer_kind, register


def test_register_returns_formatter():
    formatter = register("Person", "struct")
    assert isinstance(formatter, Formatter)
    assert formatter.summary() == "Foo is Person bar is struct"
    assert formatter.detail([FieldEntry("name", "Alice")]) == (
        "Foo is Person bar is struct { name: Alice }"
    )
    assert repr(formatter) == "Formatter('Person', 'struct')"


def test_register_rejects_protocol():
    with pytest.raises(UnsupportedDeclarationKind):
        register("Shape", "protocol")


def test_dataclass_is_struct():
    @describable
    @dataclass
    class Person:
        name: str
        age: int

    person = Person("Alice", 30)
    assert person.to_string() == "Foo is Person bar is struct"
    assert person.to_detail_string() == "Foo is Person bar is struct { name: Alice, age: 30 }"
    assert Person.__type_descriptor__.kind is TypeKind.STRUCT


def test_plain_class_uses_instance_attributes():
    @describable
    class AClass:
        def __init__(self):
            self.title = "hello"
            self.count = 42

    obj = AClass()
    assert obj.to_string() == "Foo is AClass bar is class"
    assert obj.to_detail_string() == "Foo is AClass bar is class { title: hello, count: 42 }"


def test_class_with_slots():
    @describable
    class Point:
        __slots__ = ("x", "y")

        def __init__(self, x, y):
            self.x = x
            self.y = y

    assert Point(1, 2).to_detail_string() == "Foo is Point bar is class { x: 1, y: 2 }"


def test_snapshot_reflects_current_state():
    @describable
    @dataclass
    class Counter:
        value: int = 0

    counter = Counter()
    assert counter.to_detail_string() == "Foo is Counter bar is struct { value: 0 }"
    counter.value = 5
    assert counter.to_detail_string() == "Foo is Counter bar is struct { value: 5 }"


def test_values_render_like_interpolation():
    @describable
    @dataclass
    class Flags:
        enabled: bool = True
        note: object = None

    assert Flags().to_detail_string() == "Foo is Flags bar is struct { enabled: true, note: nil }"


def test_describe_fields_hook():
    @describable
    class Hidden:
        def __init__(self):
            self.secret = "x"

        def describe_fields(self):
            return [FieldEntry("public", "yes"), FieldEntry(None, "dropped")]

    assert Hidden().to_detail_string() == "Foo is Hidden bar is class { public: yes }"


def test_empty_class_detail_is_summary():
    @describable
    class Marker:
        pass

    assert Marker().to_detail_string() == Marker().to_string()


def test_python_enum():
    @describable
    class Color(enum.Enum):
        red = 1
        green = 2

    assert Color.red.to_string() == "Foo is Color bar is enum"
    assert Color.green.to_detail_string() == "Foo is Color bar is enum (case: green)"


def test_describe_case_hook():
    @describable(kind="enum")
    class NetworkState:
        def __init__(self, case_name, **values):
            self.case_name = case_name
            self.values = values

        def describe_case(self):
            return CaseDescriptor(
                self.case_name,
                [FieldEntry(k, str(v)) for k, v in self.values.items()],
            )

    state = NetworkState("loading", progress=0.75)
    assert state.to_detail_string() == (
        "Foo is NetworkState bar is enum (case: loading, values: progress: 0.75)"
    )


def test_enum_kind_without_case_source():
    @describable(kind="enum")
    class NotAnEnum:
        pass

    with pytest.raises(TypeError):
        NotAnEnum().to_detail_string()


def test_explicit_kind_overrides_inference():
    @describable(kind="struct")
    class Plain:
        pass

    assert Plain().to_string() == "Foo is Plain bar is struct"


def test_rejects_function():
    def not_a_type():
        pass

    with pytest.raises(UnsupportedDeclarationKind) as info:
        describable(not_a_type)
    assert info.value.kind == "function"
    assert info.value.name == "not_a_type"


def test_rejects_protocol():
    class Shape(Protocol):
        def area(self) -> float: ...

    with pytest.raises(UnsupportedDeclarationKind) as info:
        describable(Shape)
    assert info.value.kind == "protocol"


def test_rejects_unknown_explicit_kind():
    with pytest.raises(UnsupportedDeclarationKind):
        @describable(kind="actor")
        class Counter:
            pass


def test_rejects_existing_to_string():
    with pytest.raises(TypeError, match="already defines to_string"):
        @describable
        class Named:
            def to_string(self):
                return "mine"


def test_infer_kind():
    @dataclass
    class S:
        pass

    class C:
        pass

    class E(enum.Enum):
        a = 1

    assert infer_kind(S) is TypeKind.STRUCT
    assert infer_kind(C) is TypeKind.CLASS
    assert infer_kind(E) is TypeKind.ENUM


def test_field_snapshot_of_dataclass_keeps_declaration_order():
    @dataclass
    class Pair:
        second: int = 2
        first: int = 1

    assert field_snapshot(Pair()) == [FieldEntry("second", "2"), FieldEntry("first", "1")]


def test_field_snapshot_skips_unset_init_false_fields():
    @dataclass
    class Ticket:
        title: str = "bug"
        note: str = field(init=False)

    ticket = Ticket()
    assert field_snapshot(ticket) == [FieldEntry("title", "bug")]
    ticket.note = "triaged"
    assert field_snapshot(ticket) == [FieldEntry("title", "bug"), FieldEntry("note", "triaged")]
