"""
Expression Evaluator Package

Implements a recursive descent evaluator for arithmetic expressions.
Each grammar level is a method reading from a per-call cursor, so values
are produced directly while parsing.

Key Features:
- + - * / % with the usual precedence, left associative
- Right associative exponentiation spelled ^ or **
- Unary minus, parenthesized grouping
- sin, cos, tan, abs, sqrt, exp, ln and log10 with domain checks
- Closed error taxonomy with caret diagnostics

Author: xwest
"""

from .evaluator import ExpressionEvaluator, evaluate_string, evaluate_file
from .errors import EvaluationError, ErrorKind, Diagnostic
from .functions import MathFunction, SUPPORTED_FUNCTIONS, apply_function, lookup_function

__all__ = [
    # Core evaluator
    "ExpressionEvaluator",
    "evaluate_string",
    "evaluate_file",

    # Functions
    "MathFunction",
    "SUPPORTED_FUNCTIONS",
    "apply_function",
    "lookup_function",

    # Error handling
    "EvaluationError",
    "ErrorKind",
    "Diagnostic",
]
