#!/usr/bin/env python3
"""
Command line front end for the expression evaluator.

Usage:
    exprcalc [EXPR ...] [options]

Options:
    --file PATH     Evaluate one expression per line from a file
    --precision N   Significant digits in printed results (default 15)
    --verbose       Enable debug logging
    --version       Show version and exit

With no expressions and no --file, expressions are read from stdin:
interactively when stdin is a terminal, one per line otherwise.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import __version__
from .evaluator import ExpressionEvaluator, EvaluationError, evaluate_file

logger = logging.getLogger(__name__)

PROMPT = "> "
QUIT_COMMANDS = {"quit", "exit"}


def format_result(value: float, precision: int = 15) -> str:
    """Format a result with the given number of significant digits."""
    return format(value, f".{precision}g")


def _report_error(error: EvaluationError):
    sys.stderr.write(error.diagnostic.render())


def _evaluate_all(evaluator: ExpressionEvaluator, expressions: List[str], precision: int) -> int:
    status = 0
    for expression in expressions:
        try:
            result = evaluator.evaluate(expression)
        except EvaluationError as e:
            _report_error(e)
            status = 1
            continue
        print(format_result(result, precision))
    return status


def _run_file(path: str, precision: int) -> int:
    try:
        results = evaluate_file(path)
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        return 2
    except EvaluationError as e:
        _report_error(e)
        return 1

    for _, _, value in results:
        print(format_result(value, precision))
    return 0


def _run_interactive(evaluator: ExpressionEvaluator, stream: TextIO, precision: int) -> int:
    print(f"exprcalc {__version__} - type 'quit' to exit")
    while True:
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        line = stream.readline()
        if not line:
            print()
            break

        expression = line.strip()
        if not expression:
            continue
        if expression.lower() in QUIT_COMMANDS:
            break

        try:
            print(format_result(evaluator.evaluate(expression), precision))
        except EvaluationError as e:
            _report_error(e)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprcalc",
        description="Evaluate arithmetic expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    exprcalc "2 + 3 * 4"                 # 14
    exprcalc "2^3^2" "sqrt(16)"          # 512 and 4
    exprcalc --file expressions.txt      # One expression per line
    echo "ln(1)" | exprcalc              # Read from stdin
        """
    )

    parser.add_argument('expressions', nargs='*', metavar='EXPR',
                        help='Expressions to evaluate')
    parser.add_argument('--file', '-f', metavar='PATH',
                        help='Evaluate one expression per line from PATH')
    parser.add_argument('--precision', '-p', type=int, default=15,
                        help='Significant digits in printed results (default: 15)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.precision < 1:
        parser.error("--precision must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    evaluator = ExpressionEvaluator("<argv>")

    try:
        if args.file:
            status = _run_file(args.file, args.precision)
            if status or not args.expressions:
                return status
            return _evaluate_all(evaluator, args.expressions, args.precision)

        if args.expressions:
            return _evaluate_all(evaluator, args.expressions, args.precision)

        if sys.stdin.isatty():
            return _run_interactive(ExpressionEvaluator("<stdin>"), sys.stdin, args.precision)

        lines = [line.strip() for line in sys.stdin]
        expressions = [line for line in lines if line and not line.startswith("#")]
        return _evaluate_all(ExpressionEvaluator("<stdin>"), expressions, args.precision)

    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
