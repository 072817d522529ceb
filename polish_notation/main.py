"""
Command-line driver for the prefix expression evaluator.

This script can:
- Evaluate expressions given as arguments
- Batch-evaluate a text file or archive with one expression per line
- Print the reference scenarios with ``--demo``
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from polish_notation.batch.loader import ExpressionLoader
from polish_notation.batch.runner import BatchRunner
from polish_notation.common.errors import ExpressionError
from polish_notation.common.evaluator import PrefixEvaluator
from polish_notation.common.logger import logger
from polish_notation.common.models import EvaluationRequest

DEMO_EXPRESSIONS: List[str] = [
    "+ 15 2",
    "(+ 3 (* 3 2))",
    # Parentheses are not required, prefix notation is unambiguous
    "+ 3 * 3 2",
    "+ * 3 3 2",
]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions to evaluate in-process.
    file_path : Optional[FilePath]
        Path to a file or archive containing one expression per line.
    output_path : Optional[Path]
        Where batch results are written.
    strict : bool
        Raise on malformed input.
    demo : bool
        Print the reference scenarios.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    strict: bool = False
    demo: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polish-notation",
        description="Evaluate arithmetic expressions written in prefix (Polish) notation",
    )
    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate, e.g. '+ 3 * 3 2'")
    parser.add_argument("-f", "--file", dest="file_path", help="File or archive with one expression per line")
    parser.add_argument("-o", "--output", dest="output_path", help="Output file for --file results")
    parser.add_argument("--strict", action="store_true", help="Fail on malformed expressions")
    parser.add_argument("--demo", action="store_true", help="Print the reference examples")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.expressions or args.file_path or args.demo):
        parser.error("give expressions, --file or --demo")

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct an output file path next to the input file.

    Examples
    --------
    input: resources/operations.7z
    output: resources/operations_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes = "".join(input_path.suffixes)
    stem = input_path.name[: -len(suffixes)] if suffixes else input_path.name
    suffix_safe = suffixes.replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_expressions(expressions: List[str], strict: bool) -> int:
    """
    Evaluate expressions in-process and print one line per expression.

    :return: Exit code, 1 if any expression failed
    :rtype: int
    """
    exit_code = 0
    for expr in expressions:
        try:
            request = EvaluationRequest(expression=expr, strict=strict)
            print(f"{expr} = {PrefixEvaluator.evaluate(request.expression, strict=request.strict)}")
        except (ExpressionError, ZeroDivisionError) as exc:
            print(f"{expr} -> ERROR: {exc}")
            exit_code = 1
    return exit_code


def run_file(input_path: Path, output_path: Optional[Path], strict: bool) -> int:
    """
    Batch-evaluate a file or archive and print where results went.

    :return: Exit code, 1 if any expression failed
    :rtype: int
    """
    output_path = output_path or build_output_path(input_path)
    expressions = ExpressionLoader.load(input_path)
    payloads = BatchRunner(output_file=output_path, strict=strict).run(expressions)
    failures = sum(1 for payload in payloads if "error" in payload)
    print(f"{len(payloads)} expressions evaluated, {failures} failed, results in {output_path}")
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    cli_args = parse_args(argv)

    if cli_args.demo:
        return run_expressions(DEMO_EXPRESSIONS, strict=cli_args.strict)

    exit_code = 0
    if cli_args.expressions:
        exit_code = run_expressions(cli_args.expressions, strict=cli_args.strict)
    if cli_args.file_path is not None:
        try:
            exit_code = max(exit_code, run_file(cli_args.file_path, cli_args.output_path, cli_args.strict))
        except ValueError as exc:
            logger.error(f"📄❌ Could not load {cli_args.file_path}: {exc}")
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
