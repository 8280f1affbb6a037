import pytest

from typedesc.formatting import TypeKind


def test_collects_marked_declarations_in_order(collect_decl):
    table, reporter = collect_decl("""
        @Foobar
        class AClass {
            var title: String = "hello"
        }

        struct Ignored {}

        @Foobar
        enum SimpleEnum {
            case red, green, blue
        }
    """)
    assert reporter.items == []
    assert [(t.name, t.kind) for t in table] == [
        ("AClass", TypeKind.CLASS),
        ("SimpleEnum", TypeKind.ENUM),
    ]
    assert len(table) == 2
    assert [d.name for d in table.descriptors()] == ["AClass", "SimpleEnum"]


def test_custom_attribute(collect_decl):
    table, reporter = collect_decl("""
        @Describe
        struct A {}

        @Foobar
        struct B {}
    """, attribute="Describe")
    assert [t.name for t in table] == ["A"]
    assert reporter.exit_code() == 0


def test_field_types_are_inferred(collect_decl):
    table, _ = collect_decl("""
        @Foobar
        struct S {
            var s = "x"
            var i = 1
            var f = 1.5
            var b = false
        }
    """)
    (described,) = table
    assert [str(fd.ty) for fd in described.decl.fields] == ["String", "Int", "Double", "Bool"]


@pytest.mark.parametrize("src, code", [
    ("@Foobar\nprotocol Shape {}\n", "CE1001"),
    ("struct P {}\n@Foobar\nextension P {}\n", "CE1001"),
    ("@Foobar\nactor A {}\n", "CE1001"),
    ("@Foobar\nstruct P {}\n@Foobar\nclass P {}\n", "CE1002"),
    ("@Foobar\nstruct P {\n  var a: Int\n  var a: Int\n}\n", "CE1003"),
    ("@Foobar\nenum E {\n  case pair(x: Int, x: Int)\n}\n", "CE1003"),
    ("@Foobar\nenum E {\n  case a, b\n  case a\n}\n", "CE1004"),
    ("@Foobar\nenum E {\n  static var red = 1\n  case red\n}\n", "CE1004"),
    ("@Foobar\nenum E {\n  static var red = 1\n  static let red = 2\n  case a\n}\n", "CE1003"),
    ("@Foobar\nenum E {\n  static var case_name = 1\n  case a\n}\n", "CE1005"),
    ("@Foobar\nstruct P {\n  var to_string: String\n}\n", "CE1005"),
    ("@Foobar\nenum E {\n  case case_name\n}\n", "CE1005"),
    ("@Foobar\nstruct P {\n  var from: String\n}\n", "CE1006"),
    ("@Foobar\nstruct P {\n  var self: Int\n}\n", "CE1006"),
    ("@Foobar\nclass None {}\n", "CE1006"),
    ("@Foobar\nenum E {\n  case a\n  var level: Int = 1\n}\n", "CE1007"),
    ("@Foobar\nstruct P {\n  case a\n}\n", "CE1008"),
    ("@Foobar\nclass C {\n  static var total: Int\n}\n", "CE1009"),
    ("@Foobar\nstruct P {\n  var value = nil\n}\n", "CE1010"),
    ("@Foobar\nstruct P {\n  var value\n}\n", "CE1010"),
])
def test_collection_errors(collect_decl, src, code):
    table, reporter = collect_decl(src)
    assert code in reporter.codes()
    assert reporter.exit_code() == 2


def test_unsupported_kind_message(collect_decl):
    _, reporter = collect_decl("@Foobar\nprotocol Shape {}\n")
    (diag,) = reporter.items
    assert diag.message == "@Foobar can only be applied to a class, struct, or enum (found protocol 'Shape')"
    assert (diag.span.line, diag.span.col) == (2, 10)


def test_failed_declaration_is_left_out(collect_decl):
    table, reporter = collect_decl("""
        @Foobar
        struct Good {}

        @Foobar
        struct Bad {
            var a: Int
            var a: Int
        }
    """)
    assert [t.name for t in table] == ["Good"]
    assert reporter.codes() == ["CE1003"]


def test_static_enum_field_is_allowed(collect_decl):
    table, reporter = collect_decl("""
        @Foobar
        enum E {
            static var fallback = "a"
            case a
        }
    """)
    assert reporter.items == []
    assert str(table.by_name["E"].decl.fields[0].ty) == "String"


def test_no_marked_declarations_warns(collect_decl):
    table, reporter = collect_decl("struct S {}\n")
    assert len(table) == 0
    assert reporter.codes() == ["CW1002"]
    assert reporter.exit_code() == 1


def test_repeated_attribute_warns(collect_decl):
    table, reporter = collect_decl("@Foobar\n@Foobar\nstruct S {}\n")
    assert [t.name for t in table] == ["S"]
    assert reporter.codes() == ["CW1001"]
    assert reporter.exit_code() == 1


def test_reporter_format_ascii(collect_decl):
    _, reporter = collect_decl("@Foobar\nprotocol Shape {}\n")
    text = reporter.format(use_color=False, use_unicode=False)
    assert text.splitlines() == [
        "<input>:2:10: error [CE1001]: @Foobar can only be applied to a class, struct, or enum "
        "(found protocol 'Shape').",
        "  | protocol Shape {}",
        "  `          ^",
    ]
