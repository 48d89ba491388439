"""
exprcalc Package

A small recursive descent evaluator for arithmetic expressions with
named math functions and precise error diagnostics.

Architecture:
    exprcalc/
    ├── evaluator/       # Grammar, function table and error taxonomy
    └── cli.py           # Command line front end

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .evaluator import ExpressionEvaluator, EvaluationError, ErrorKind, evaluate_string

__all__ = [
    # Core classes
    "ExpressionEvaluator",
    "EvaluationError",
    "ErrorKind",
    "evaluate_string",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
