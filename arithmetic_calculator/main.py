"""
Command-line entrypoint.

Three modes:
- expressions passed as arguments are evaluated in-process
- ``--file`` evaluates an operations file (or archive) with worker processes
- without either, expressions are read from stdin, one per line

Exit status is 0 when every expression evaluated, 1 otherwise.
"""

import argparse
from pathlib import Path
import sys
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from pydantic import BaseModel, Field, FilePath, ValidationError

from arithmetic_calculator.batch.reader import ExpressionFileReader
from arithmetic_calculator.batch.runner import BatchRunner
from arithmetic_calculator.common.calculator import evaluate_request
from arithmetic_calculator.common.config import CalculatorSettings, LogLevel
from arithmetic_calculator.common.logger import configure_logging, logger
from arithmetic_calculator.common.operations import OperationRequest, OperationResult


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions given on the command line.
    file_path : FilePath, optional
        Path to the file containing arithmetic operations.
    output : Path, optional
        Where batch results are written.
    workers : int, optional
        Maximum number of simultaneous worker processes.
    log_level : str, optional
        Level of the package logger.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    output: Optional[Path] = None
    workers: Optional[int] = Field(default=None, ge=1)
    log_level: Optional[LogLevel] = None


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path next to the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    input: resources/operations.tar.xz
    output: resources/operations_tar_xz_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem: str = input_path.name
    for suffix in input_path.suffixes:
        stem = stem[: -len(suffix)]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


# Options taking a value, and flags, recognized before expressions
VALUE_OPTIONS: Tuple[str, ...] = ("-f", "--file", "-o", "--output", "-w", "--workers", "--log-level")
FLAG_OPTIONS: Tuple[str, ...] = ("-h", "--help")


def separate_expressions(argv: Sequence[str]) -> List[str]:
    """
    Move expressions behind a ``--`` separator so a leading sign is not read as an option.

    Known options (and their values) keep their place; every other argument is an
    expression, e.g. ``--5`` or ``-(2+3)``. Arguments already after ``--`` are kept.

    :param Sequence[str] argv: Raw command-line arguments

    :return: Options first, then ``--`` and the expressions
    :rtype: List[str]
    """
    options: List[str] = []
    expressions: List[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            expressions.extend(args)
        elif arg in VALUE_OPTIONS:
            options.append(arg)
            value = next(args, None)
            if value is not None:
                options.append(value)
        elif arg in FLAG_OPTIONS or ("=" in arg and arg.split("=", 1)[0] in VALUE_OPTIONS):
            options.append(arg)
        else:
            expressions.append(arg)
    return options + ["--"] + expressions if expressions else options


def parse_args(argv: Optional[Sequence[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    Expressions may start with a sign (``-5+3``, ``--5``); they are never taken for options.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="arithmetic-calculator",
        description="Evaluate arithmetic expressions (+ - * / and parentheses)",
        epilog="Expressions may start with a sign, e.g. arithmetic-calculator '-(2+3)' '--5'. A -- separator is accepted before expressions.",
    )

    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate")
    parser.add_argument("-f", "--file", dest="file_path", help="File or archive with one expression per line")
    parser.add_argument("-o", "--output", help="Results file for --file, defaults to <input>_results.txt")
    parser.add_argument("-w", "--workers", type=int, help="Maximum number of worker processes for --file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")

    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(separate_expressions(argv))

    if args.expressions and args.file_path:
        parser.error("expressions and --file are mutually exclusive")

    try:
        return CliArgs(
            expressions=args.expressions,
            file_path=args.file_path,
            output=args.output,
            workers=args.workers,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def _print_results(results: Iterable[OperationResult], stream: TextIO) -> bool:
    """Print one line per result and return True if all succeeded."""
    all_ok = True
    for outcome in results:
        print(outcome.format_line(), file=stream)
        all_ok = all_ok and outcome.ok
    return all_ok


def run_expressions(expressions: Iterable[str], stream: Optional[TextIO] = None) -> bool:
    """
    Evaluate expressions in-process and print each result.

    :return: True if every expression evaluated
    :rtype: bool
    """
    stream = sys.stdout if stream is None else stream
    results = (evaluate_request(OperationRequest(expression=expr)) for expr in expressions)
    return _print_results(results, stream)


def run_prompt(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> bool:
    """
    Read expressions line by line until EOF and print each result.

    Blank lines are skipped.

    :return: True if every expression evaluated
    :rtype: bool
    """
    stdin = sys.stdin if stdin is None else stdin
    lines = (line.strip() for line in stdin)
    return run_expressions((line for line in lines if line), stdout)


def run_file(input_path: Path, output_path: Path, max_workers: Optional[int] = None) -> bool:
    """
    Evaluate an operations file with worker processes and write the results file.

    :return: True if every expression evaluated
    :rtype: bool
    """
    expressions: List[str] = ExpressionFileReader().read_expressions(input_path)
    runner = BatchRunner(output_file=output_path, max_workers=max_workers)
    results = runner.run(expressions)
    return len(results) == len(expressions) and all(outcome.ok for outcome in results)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function of the ``arithmetic-calculator`` command.

    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)

    try:
        settings = CalculatorSettings.from_env()
    except ValidationError as exc:
        print(f"Invalid environment settings:\n{exc}", file=sys.stderr)
        return 2

    # Command-line flags win over the environment
    overrides = {"log_level": cli_args.log_level, "max_workers": cli_args.workers}
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    configure_logging(settings.log_level)

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        output_path = cli_args.output or build_output_path(input_path)
        try:
            ok = run_file(input_path, output_path, settings.max_workers)
        except (OSError, ValueError) as exc:
            logger.error(f"📄❌ Could not process {input_path}: {exc}")
            return 1
        print(f"Results written to {output_path}")
        return 0 if ok else 1

    if cli_args.expressions:
        return 0 if run_expressions(cli_args.expressions) else 1

    return 0 if run_prompt() else 1


if __name__ == "__main__":
    sys.exit(main())
