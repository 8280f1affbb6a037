"""Run tests/cases/*.decl in-process; run_tests.py does the same in subprocesses."""
from pathlib import Path

import pytest

from case_metadata import parse_case_metadata
from run_tests import get_expected_exit_code
from typedesc.compiler.cli import main

CASES_DIR = Path(__file__).parent.parent / "cases"
CASES = sorted(CASES_DIR.glob("test_*.decl"))


@pytest.mark.parametrize("case_file", CASES, ids=[c.stem for c in CASES])
def test_case(case_file, capsys):
    metadata = parse_case_metadata(case_file)

    exit_code = main(["--quiet", "--describe", str(case_file)])
    captured = capsys.readouterr()

    assert exit_code == get_expected_exit_code(case_file), captured.err
    for expected in metadata.expect_stdout_contains:
        assert expected in captured.out
    for expected in metadata.expect_stderr_contains:
        assert expected in captured.err
