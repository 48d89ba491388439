"""
Error handling for the expression evaluator.

Every failure is reported as an EvaluationError carrying one of a closed
set of error kinds, the cursor position where it was detected, and a
diagnostic that can be rendered with a caret under the offending column.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Closed set of evaluation failures."""
    UNEXPECTED_END = "E001"
    INVALID_EXPRESSION = "E002"
    MISSING_CLOSING_PAREN = "E003"
    MISSING_OPENING_PAREN = "E004"
    INVALID_NUMBER = "E005"
    DIVISION_BY_ZERO = "E006"
    MODULO_BY_ZERO = "E007"
    DOMAIN_ERROR = "E008"
    UNKNOWN_FUNCTION = "E009"
    INVALID_POWER = "E010"
    NUMERIC_OVERFLOW = "E011"
    NESTING_TOO_DEEP = "E012"

    @property
    def code(self) -> str:
        return self.value


@dataclass
class Diagnostic:
    """Location-aware description of an evaluation failure."""
    message: str
    expression: str
    position: int
    source_name: str = "<expression>"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def column(self) -> int:
        """1-based column of the failure."""
        return self.position + 1

    def render(self) -> str:
        header = "ERROR"
        if self.code:
            header += f"[{self.code}]"
        result = f"{header}: {self.message}\n"
        result += f"  --> {self.source_name}, column {self.column}\n"
        # One column per character, so tabs and newlines render as spaces
        shown = "".join(" " if char.isspace() else char for char in self.expression)
        result += f"   | {shown}\n"
        result += f"   | {' ' * self.position}^\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result

    def __str__(self) -> str:
        return self.render()


class EvaluationError(Exception):
    """
    Exception raised when an expression cannot be evaluated.

    ``str(error)`` is the short message; the full report is available
    through ``error.diagnostic``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        expression: str = "",
        position: int = 0,
        source_name: str = "<expression>",
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.expression = expression
        self.position = position
        self.diagnostic = Diagnostic(
            message=message,
            expression=expression,
            position=position,
            source_name=source_name,
            code=kind.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> str:
        return self.kind.code

    def with_source(self, source_name: str) -> "EvaluationError":
        """Return a copy of this error reported against another source label."""
        return EvaluationError(
            self.kind,
            self.message,
            expression=self.expression,
            position=self.position,
            source_name=source_name,
            help_text=self.diagnostic.help_text,
            suggestions=self.diagnostic.suggestions
        )


# Helper functions for creating common evaluation errors

def create_unexpected_end_error(expression: str, position: int) -> EvaluationError:
    """Create an error for running off the end of the input."""
    return EvaluationError(
        ErrorKind.UNEXPECTED_END,
        "Unexpected end of expression",
        expression=expression,
        position=position,
        help_text="The expression ended where a number, '(' or function call was expected.",
        suggestions=["Check for a trailing operator", "Ensure all operators have operands"]
    )


def create_invalid_expression_error(expression: str, position: int) -> EvaluationError:
    """Create an error for a character that cannot appear at this position."""
    found = expression[position] if position < len(expression) else ""
    return EvaluationError(
        ErrorKind.INVALID_EXPRESSION,
        "Invalid expression",
        expression=expression,
        position=position,
        help_text=f"Unexpected character '{found}'." if found else None
    )


def create_missing_closing_paren_error(expression: str, position: int,
                                       after_argument: bool = False) -> EvaluationError:
    """Create an error for an unclosed group or function call."""
    message = "Missing closing parenthesis"
    if after_argument:
        message += " after function argument"
    return EvaluationError(
        ErrorKind.MISSING_CLOSING_PAREN,
        message,
        expression=expression,
        position=position,
        suggestions=["Add a closing parenthesis ')'"]
    )


def create_missing_opening_paren_error(expression: str, position: int,
                                       name: str) -> EvaluationError:
    """Create an error for a function name not followed by '('."""
    return EvaluationError(
        ErrorKind.MISSING_OPENING_PAREN,
        "Missing opening parenthesis after function",
        expression=expression,
        position=position,
        help_text=f"Function '{name}' must be called as {name}(argument)."
    )


def create_invalid_number_error(expression: str, position: int) -> EvaluationError:
    """Create an error for a malformed numeric literal."""
    return EvaluationError(
        ErrorKind.INVALID_NUMBER,
        "Invalid number format",
        expression=expression,
        position=position,
        help_text="A decimal point must be preceded or followed by at least one digit."
    )


def create_division_by_zero_error(expression: str, position: int,
                                  modulo: bool = False) -> EvaluationError:
    """Create an error for '/' or '%' with a zero right operand."""
    if modulo:
        return EvaluationError(ErrorKind.MODULO_BY_ZERO, "Modulo by zero",
                               expression=expression, position=position)
    return EvaluationError(ErrorKind.DIVISION_BY_ZERO, "Division by zero",
                           expression=expression, position=position)


def create_domain_error(message: str, name: str, value: float,
                        expression: str, position: int) -> EvaluationError:
    """Create an error for a function argument outside its domain."""
    return EvaluationError(
        ErrorKind.DOMAIN_ERROR,
        message,
        expression=expression,
        position=position,
        help_text=f"{name}() is not defined for {value!r}."
    )


def create_unknown_function_error(name: str, expression: str, position: int,
                                  known: Optional[List[str]] = None) -> EvaluationError:
    """Create an error for a function name missing from the dispatch table."""
    suggestions = None
    if known:
        suggestions = [f"Supported functions: {', '.join(known)}"]
    return EvaluationError(
        ErrorKind.UNKNOWN_FUNCTION,
        f"Unknown function: {name}",
        expression=expression,
        position=position,
        suggestions=suggestions
    )


def create_invalid_power_error(base: float, exponent: float,
                               expression: str, position: int) -> EvaluationError:
    """Create an error for a power with no real result."""
    return EvaluationError(
        ErrorKind.INVALID_POWER,
        "Power result is undefined",
        expression=expression,
        position=position,
        help_text=f"{base!r} raised to {exponent!r} has no real value."
    )


def create_overflow_error(expression: str, position: int) -> EvaluationError:
    """Create an error for a result too large to represent."""
    return EvaluationError(
        ErrorKind.NUMERIC_OVERFLOW,
        "Numeric overflow",
        expression=expression,
        position=position
    )


def create_nesting_too_deep_error(expression: str, position: int) -> EvaluationError:
    """Create an error for nesting deeper than the interpreter stack allows."""
    return EvaluationError(
        ErrorKind.NESTING_TOO_DEEP,
        "Expression is nested too deeply",
        expression=expression,
        position=position,
        suggestions=["Remove redundant parentheses or repeated unary minus signs"]
    )
