from pathlib import Path

import pytest

from typedesc.compiler.cli import main

MACRO_CLIENT = """\
@Foobar
class AClass {
    var title: String = "hello"
    var count: Int = 42
}

@Foobar
enum NetworkState {
    case idle
    case loading(progress: Double)
}
"""


@pytest.fixture
def source(tmp_path) -> Path:
    path = tmp_path / "macro_client.decl"
    path.write_text(MACRO_CLIENT, encoding="utf-8")
    return path


def test_describe(source, capsys):
    assert main(["--quiet", "--describe", str(source)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Foo is AClass bar is class",
        "Foo is AClass bar is class { title: hello, count: 42 }",
        "Foo is NetworkState bar is enum",
        "Foo is NetworkState bar is enum (case: idle)",
    ]
    assert not source.with_suffix(".py").exists()


def test_generate_next_to_source(source, capsys):
    assert main(["--quiet", str(source)]) == 0
    module = source.with_suffix(".py")
    manifest = source.with_name("macro_client.descriptors.json")
    assert module.exists() and manifest.exists()
    out = capsys.readouterr().out
    assert f"Wrote {module}" in out
    assert f"Wrote {manifest}" in out


def test_out_and_no_manifest(source, tmp_path):
    out = tmp_path / "gen" / "described.py"
    assert main(["--quiet", "--no-manifest", "-o", str(out), str(source)]) == 0
    assert "class AClass:" in out.read_text(encoding="utf-8")
    assert not (out.parent / "described.descriptors.json").exists()


def test_config_and_effective_cwd(source, tmp_path, monkeypatch):
    (tmp_path / "typedesc.toml").write_text(
        '[generate]\noutput_dir = "gen"\nmanifest = false\n', encoding="utf-8"
    )
    monkeypatch.setenv("TYPEDESC_CWD", str(tmp_path))
    assert main(["--quiet", source.name]) == 0
    assert (tmp_path / "gen" / "macro_client.py").exists()
    assert not (tmp_path / "gen" / "macro_client.descriptors.json").exists()


def test_attribute_flag(source, capsys):
    assert main(["--quiet", "--describe", "--attribute", "Describe", str(source)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "CW1002" in captured.err


def test_invalid_config(source, tmp_path, capsys):
    bad = tmp_path / "bad.toml"
    bad.write_text("[generate]\nunknown = 1\n", encoding="utf-8")
    assert main(["--quiet", "--config", str(bad), str(source)]) == 2
    assert "CE3101" in capsys.readouterr().err


def test_unsupported_kind_writes_nothing(tmp_path, capsys):
    path = tmp_path / "shape.decl"
    path.write_text("@Foobar\nprotocol Shape {}\n", encoding="utf-8")
    assert main(["--quiet", str(path)]) == 2
    err = capsys.readouterr().err
    assert "error [CE1001]" in err
    assert "found protocol 'Shape'" in err
    assert not path.with_suffix(".py").exists()


def test_missing_trailing_newline_warns(tmp_path, capsys):
    path = tmp_path / "s.decl"
    path.write_text("@Foobar\nstruct S {}", encoding="utf-8")
    assert main(["--quiet", "--describe", str(path)]) == 1
    assert "CW0001" in capsys.readouterr().err


def test_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.decl"
    path.write_text("@Foobar\nstruct S {\n    func greet() {}\n}\n", encoding="utf-8")
    assert main(["--quiet", str(path)]) == 2
    err = capsys.readouterr().err
    assert f"Parse error in {path}" in err
    assert "Hint:" in err


def test_missing_source(tmp_path, capsys):
    assert main(["--quiet", str(tmp_path / "nope.decl")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_source_required(capsys):
    assert main(["--quiet"]) == 2
    assert "source file required" in capsys.readouterr().err


def test_manifest_info(source, capsys):
    assert main(["--quiet", str(source)]) == 0
    capsys.readouterr()
    manifest = source.with_name("macro_client.descriptors.json")
    assert main(["--quiet", "--manifest-info", str(manifest)]) == 0
    out = capsys.readouterr().out
    assert "Module: macro_client" in out
    assert "Types (2):" in out
    assert "  class AClass" in out
    assert "    var title: String" in out
    assert "    case loading(progress: Double)" in out


def test_manifest_info_rejects_other_files(source, capsys):
    assert main(["--quiet", "--manifest-info", str(source)]) == 2
    assert "CE3003" in capsys.readouterr().err


def test_dump_ast(source, capsys):
    assert main(["--quiet", "--dump-ast", "--describe", str(source)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "// 2 declaration(s)"
    assert "class AClass {" in out
    assert "    case loading(progress: Double)" in out


def test_version_banner(capsys):
    assert main(["--version"]) == 0
    assert "typedesc" in capsys.readouterr().out
