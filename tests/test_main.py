"""Test the command-line driver."""
from pathlib import Path

import pytest

from polish_notation.main import DEMO_EXPRESSIONS, build_output_path, main, parse_args


def test_evaluate_arguments(capsys) -> None:
    """Expressions given as arguments are printed with their result."""
    assert main(["+ 15 2", "/ 1 2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["+ 15 2 = 17", "/ 1 2 = 0.5"]


def test_demo(capsys) -> None:
    """--demo prints the reference scenarios."""
    assert main(["--demo"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == len(DEMO_EXPRESSIONS)
    assert out == ["+ 15 2 = 17", "(+ 3 (* 3 2)) = 9", "+ 3 * 3 2 = 9", "+ * 3 3 2 = 11"]


def test_strict_failure(capsys) -> None:
    """Strict mode reports malformed expressions and exits with 1."""
    assert main(["--strict", "+ 1"]) == 1
    assert "-> ERROR:" in capsys.readouterr().out


def test_permissive_does_not_fail(capsys) -> None:
    """Without --strict a malformed expression still prints a value."""
    assert main(["+ 1"]) == 0
    assert capsys.readouterr().out.strip() == "+ 1 = nan"


def test_no_arguments(capsys) -> None:
    """Running with nothing to do prints usage and exits with status 2."""
    with pytest.raises(SystemExit) as exc_info:
        parse_args([])
    assert exc_info.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("usage: polish-notation")
    assert "error: give expressions, --file or --demo" in err


def test_missing_file(tmp_path: Path) -> None:
    """A missing input file is rejected by validation."""
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--file", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 2


def test_run_file(tmp_path: Path, capsys) -> None:
    """--file evaluates every line and writes the results file."""
    input_file = tmp_path / "ops.txt"
    input_file.write_text("+ 15 2\n+ * 3 3 2\n")
    output_file = tmp_path / "out.txt"

    assert main(["--file", str(input_file), "--output", str(output_file)]) == 0
    assert sorted(output_file.read_text().splitlines()) == ["+ * 3 3 2 = 11", "+ 15 2 = 17"]
    assert "2 expressions evaluated, 0 failed" in capsys.readouterr().out


def test_run_file_unsupported_format(tmp_path: Path) -> None:
    """An unsupported archive format exits with 1."""
    input_file = tmp_path / "ops.rar"
    input_file.write_text("+ 1 1")
    assert main(["--file", str(input_file)]) == 1


@pytest.mark.parametrize("name,expected", [
    ("ops.txt", "ops_txt_results.txt"),
    ("ops.7z", "ops_7z_results.txt"),
    ("ops.tar.xz", "ops_tar_xz_results.txt"),
    ("ops", "ops_results.txt"),
])
def test_build_output_path(tmp_path: Path, name: str, expected: str) -> None:
    """The output path sits next to the input with its suffixes flattened."""
    assert build_output_path(tmp_path / name) == tmp_path / expected
