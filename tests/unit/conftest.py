import textwrap

import pytest

from typedesc.compiler.pipeline import collect_descriptors
from typedesc.internals.parser import parse_to_ast
from typedesc.internals.report import Reporter
from typedesc.semantics.passes.collect import DEFAULT_ATTRIBUTE


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("TYPEDESC_CWD", raising=False)


@pytest.fixture
def parse_decl():
    """Parse a dedented declaration snippet into a Program."""
    def parse(src: str):
        ast, _tree = parse_to_ast(textwrap.dedent(src))
        return ast
    return parse


@pytest.fixture
def collect_decl():
    """Collect a declaration snippet; returns (descriptor table, reporter)."""
    def collect(src: str, attribute: str = DEFAULT_ATTRIBUTE):
        src = textwrap.dedent(src)
        reporter = Reporter(source=src, filename="<input>")
        ast, _tree = parse_to_ast(src)
        return collect_descriptors(ast, reporter, attribute), reporter
    return collect
