"""
Named single-argument functions available to expressions.

Dispatch goes through a static table; each entry may carry a domain check
that runs before the underlying ``math`` primitive is called.

Author: xwest
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .errors import (
    create_domain_error, create_overflow_error, create_unknown_function_error
)


@dataclass(frozen=True)
class MathFunction:
    """A supported function and its domain restriction."""
    name: str
    primitive: Callable[[float], float]
    domain: Optional[Callable[[float], bool]] = None
    domain_message: Optional[str] = None

    def accepts(self, value: float) -> bool:
        return self.domain is None or self.domain(value)


_FUNCTION_TABLE: Dict[str, MathFunction] = {
    "sin": MathFunction("sin", math.sin),
    "cos": MathFunction("cos", math.cos),
    "tan": MathFunction("tan", math.tan),
    "abs": MathFunction("abs", math.fabs),
    "sqrt": MathFunction(
        "sqrt", math.sqrt,
        lambda x: x >= 0, "Square root of negative number"
    ),
    "exp": MathFunction("exp", math.exp),
    "ln": MathFunction(
        "ln", math.log,
        lambda x: x > 0, "Natural logarithm of non-positive number"
    ),
    "log10": MathFunction(
        "log10", math.log10,
        lambda x: x > 0, "Logarithm of non-positive number"
    ),
}

SUPPORTED_FUNCTIONS: Tuple[str, ...] = tuple(sorted(_FUNCTION_TABLE))


def lookup_function(name: str, expression: str = "", position: int = 0) -> MathFunction:
    """
    Find a function by exact name.

    Raises:
        EvaluationError: If the name is not in the table
    """
    func = _FUNCTION_TABLE.get(name)
    if func is None:
        raise create_unknown_function_error(
            name, expression, position, list(SUPPORTED_FUNCTIONS)
        )
    return func


def apply_function(name: str, value: float, expression: str = "", position: int = 0) -> float:
    """
    Apply a named function to an already evaluated argument.

    Args:
        name: Function name as written in the expression
        value: Argument value
        expression: Expression text, for error reporting
        position: Offset of the function name, for error reporting

    Returns:
        The function result

    Raises:
        EvaluationError: Unknown name, argument outside the domain, or overflow
    """
    func = lookup_function(name, expression, position)

    if math.isnan(value):
        raise create_domain_error(
            f"Math domain error in {name}", name, value, expression, position
        )

    if not func.accepts(value):
        raise create_domain_error(func.domain_message, name, value, expression, position)

    try:
        return func.primitive(value)
    except OverflowError:
        raise create_overflow_error(expression, position) from None
    except ValueError:
        # math raises for infinite arguments, e.g. sin(inf)
        raise create_domain_error(
            f"Math domain error in {name}", name, value, expression, position
        ) from None
