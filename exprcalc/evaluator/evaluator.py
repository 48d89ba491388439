"""
Recursive descent expression evaluator.

Grammar, lowest to highest precedence:

    Expression := Term (('+' | '-') Term)*
    Term       := Factor (('*' | '/' | '%') Factor)*
    Factor     := ['-'] Primary [('^' | '**') Factor]
    Primary    := Number | '(' Expression ')' | Function
    Function   := Identifier '(' Expression ')'
    Number     := Digit+ ['.' Digit*] | '.' Digit+

Values are computed while parsing; there is no intermediate tree.

Author: xwest
"""

import logging
import math
from typing import List, Tuple

from .errors import (
    EvaluationError, create_unexpected_end_error, create_invalid_expression_error,
    create_missing_closing_paren_error, create_missing_opening_paren_error,
    create_invalid_number_error, create_division_by_zero_error,
    create_invalid_power_error, create_overflow_error, create_domain_error,
    create_nesting_too_deep_error
)
from .functions import apply_function

logger = logging.getLogger(__name__)


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class _ExpressionParser:
    """
    Parsing state for a single evaluation.

    Owns the input text and the cursor. A new instance is created for every
    call to ExpressionEvaluator.evaluate and the cursor only moves forward.
    """

    def __init__(self, expression: str):
        self.expression = expression
        self.pos = 0

    def parse(self) -> float:
        """Evaluate the whole input; trailing characters are an error."""
        result = self._parse_expression()

        self._skip_whitespace()
        if not self._is_at_end():
            raise create_invalid_expression_error(self.expression, self.pos)

        return result

    def _parse_expression(self) -> float:
        """Expression := Term (('+' | '-') Term)*"""
        result = self._parse_term()

        while not self._is_at_end():
            self._skip_whitespace()
            op = self._peek()
            if op not in ("+", "-"):
                break

            op_pos = self.pos
            self._advance()
            term = self._parse_term()

            if op == "+":
                result += term
            else:
                result -= term
            self._check_finite(result, op_pos)

        return result

    def _parse_term(self) -> float:
        """Term := Factor (('*' | '/' | '%') Factor)*"""
        result = self._parse_factor()

        while not self._is_at_end():
            self._skip_whitespace()
            op = self._peek()
            if op not in ("*", "/", "%"):
                break

            op_pos = self.pos
            self._advance()
            factor = self._parse_factor()

            if op == "*":
                result *= factor
            elif op == "/":
                if factor == 0:
                    raise create_division_by_zero_error(self.expression, op_pos)
                result /= factor
            else:
                if factor == 0:
                    raise create_division_by_zero_error(self.expression, op_pos, modulo=True)
                result = self._modulo(result, factor, op_pos)
            self._check_finite(result, op_pos)

        return result

    def _parse_factor(self) -> float:
        """Factor := ['-'] Primary [('^' | '**') Factor]"""
        self._skip_whitespace()

        if self._is_at_end():
            raise create_unexpected_end_error(self.expression, self.pos)

        # Unary minus negates a whole factor, so -2^2 is -(2^2)
        if self._peek() == "-":
            self._advance()
            return -self._parse_factor()

        result = self._parse_primary()

        # Right associative: the exponent is itself a full factor
        self._skip_whitespace()
        op_pos = self.pos
        if self._match_power_operator():
            exponent = self._parse_factor()
            result = self._power(result, exponent, op_pos)

        return result

    def _parse_primary(self) -> float:
        """Primary := Number | '(' Expression ')' | Function"""
        char = self._peek()

        if char == "(":
            self._advance()
            result = self._parse_expression()
            self._skip_whitespace()

            if self._peek() != ")":
                raise create_missing_closing_paren_error(self.expression, self.pos)
            self._advance()
            return result

        if _is_alpha(char):
            return self._parse_function()

        if _is_digit(char) or char == ".":
            return self._parse_number()

        raise create_invalid_expression_error(self.expression, self.pos)

    def _parse_number(self) -> float:
        """Number := Digit+ ['.' Digit*] | '.' Digit+"""
        start = self.pos

        while _is_digit(self._peek()):
            self._advance()

        if self._peek() == ".":
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        lexeme = self.expression[start:self.pos]
        if lexeme in ("", "."):
            raise create_invalid_number_error(self.expression, start)

        value = float(lexeme)
        if math.isinf(value):
            raise create_overflow_error(self.expression, start)
        return value

    def _parse_function(self) -> float:
        """Function := Identifier '(' Expression ')'"""
        start = self.pos

        while _is_alnum(self._peek()):
            self._advance()
        name = self.expression[start:self.pos]

        self._skip_whitespace()
        if self._peek() != "(":
            raise create_missing_opening_paren_error(self.expression, self.pos, name)
        self._advance()

        argument = self._parse_expression()

        self._skip_whitespace()
        if self._peek() != ")":
            raise create_missing_closing_paren_error(
                self.expression, self.pos, after_argument=True
            )
        self._advance()

        return apply_function(name, argument, self.expression, start)

    def _match_power_operator(self) -> bool:
        """Consume '^' or an adjacent '**'."""
        if self._peek() == "^":
            self._advance()
            return True
        if self._peek() == "*" and self._peek(1) == "*":
            self._advance(2)
            return True
        return False

    def _power(self, base: float, exponent: float, position: int) -> float:
        try:
            return math.pow(base, exponent)
        except ValueError:
            raise create_invalid_power_error(base, exponent, self.expression, position) from None
        except OverflowError:
            raise create_overflow_error(self.expression, position) from None

    def _check_finite(self, value: float, position: int):
        """Float + - * / overflow to inf instead of raising."""
        if math.isinf(value):
            raise create_overflow_error(self.expression, position)

    def _modulo(self, dividend: float, divisor: float, position: int) -> float:
        try:
            return math.fmod(dividend, divisor)
        except ValueError:
            # fmod(inf, y)
            raise create_domain_error(
                "Modulo of infinite value", "fmod", dividend, self.expression, position
            ) from None

    def _skip_whitespace(self):
        while not self._is_at_end() and self.expression[self.pos].isspace():
            self.pos += 1

    def _peek(self, offset: int = 0) -> str:
        """Character at cursor + offset, or '' past the end."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.expression):
            return self.expression[peek_pos]
        return ""

    def _advance(self, count: int = 1):
        self.pos = min(self.pos + count, len(self.expression))

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.expression)


class ExpressionEvaluator:
    """
    Evaluates arithmetic expressions to floats.

    The evaluator holds no per-call state, so one instance can be reused
    and shared between threads.
    """

    def __init__(self, source_name: str = "<expression>"):
        """
        Args:
            source_name: Label used for this evaluator's error diagnostics
        """
        self.source_name = source_name

    def evaluate(self, expression: str) -> float:
        """
        Evaluate an expression string.

        Args:
            expression: Expression text

        Returns:
            The numeric result

        Raises:
            EvaluationError: If the expression is malformed or cannot be computed
            TypeError: If expression is not a string
        """
        if not isinstance(expression, str):
            raise TypeError(f"expression must be str, not {type(expression).__name__}")

        logger.debug("Evaluating %r", expression)
        parser = _ExpressionParser(expression)
        try:
            try:
                result = parser.parse()
            except RecursionError:
                raise create_nesting_too_deep_error(expression, parser.pos) from None
        except EvaluationError as e:
            logger.debug("Evaluation of %r failed: [%s] %s", expression, e.code, e.message)
            if e.diagnostic.source_name != self.source_name:
                raise e.with_source(self.source_name) from None
            raise

        logger.debug("Evaluated %r = %r", expression, result)
        return result


def evaluate_string(expression: str, source_name: str = "<string>") -> float:
    """
    Convenience function to evaluate a single expression.

    Raises:
        EvaluationError: If evaluation fails
    """
    return ExpressionEvaluator(source_name).evaluate(expression)


def evaluate_file(filepath: str) -> List[Tuple[int, str, float]]:
    """
    Evaluate every expression in a file, one per line.

    Blank lines and lines starting with '#' are skipped.

    Args:
        filepath: Path to the expression file

    Returns:
        (line number, expression, result) for each evaluated line

    Raises:
        EvaluationError: On the first line that fails, labelled path:line
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        lines = f.read().splitlines()

    results = []
    for line_number, line in enumerate(lines, start=1):
        expression = line.strip()
        if not expression or expression.startswith("#"):
            continue

        evaluator = ExpressionEvaluator(f"{filepath}:{line_number}")
        results.append((line_number, expression, evaluator.evaluate(expression)))

    logger.debug("Evaluated %d expressions from %s", len(results), filepath)
    return results
