# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Union

from typedesc.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

# === Type references ===

@dataclass
class NamedType(Node):
    name: str

    def __str__(self) -> str:
        return self.name

@dataclass
class OptionalType(Node):
    inner: "TypeRef"

    def __str__(self) -> str:
        return f"{self.inner}?"

@dataclass
class ArrayType(Node):
    element: "TypeRef"

    def __str__(self) -> str:
        return f"[{self.element}]"

@dataclass
class DictType(Node):
    key: "TypeRef"
    value: "TypeRef"

    def __str__(self) -> str:
        return f"[{self.key}: {self.value}]"

TypeRef = Union[NamedType, OptionalType, ArrayType, DictType]

# === Literals ===

@dataclass
class Literal(Node):
    kind: str                        # "string" | "int" | "float" | "bool" | "nil"
    value: Union[str, int, float, bool, None]

# === Members ===

@dataclass
class FieldDecl(Node):
    name: str
    ty: Optional[TypeRef]
    default: Optional[Literal] = None
    is_static: bool = False
    is_constant: bool = False        # 'let' rather than 'var'
    name_span: Optional[Span] = None

@dataclass
class AssociatedValueDecl(Node):
    label: Optional[str]
    ty: TypeRef

@dataclass
class CaseDecl(Node):
    name: str
    values: List[AssociatedValueDecl] = field(default_factory=list)
    name_span: Optional[Span] = None

# === Declarations ===

@dataclass
class Attribute(Node):
    name: str
    args: List[str] = field(default_factory=list)

@dataclass
class TypeDecl(Node):
    kind: str                        # class | struct | enum | protocol | extension | actor
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    inherits: List[TypeRef] = field(default_factory=list)
    fields: List[FieldDecl] = field(default_factory=list)
    cases: List[CaseDecl] = field(default_factory=list)
    name_span: Optional[Span] = None

    def attributes_named(self, name: str) -> List[Attribute]:
        return [a for a in self.attributes if a.name == name]

    @property
    def stored_fields(self) -> List[FieldDecl]:
        return [f for f in self.fields if not f.is_static]

@dataclass
class Program(Node):
    types: List[TypeDecl]
