"""Expression engine for arithmetic over complex numbers."""

from .ComplexNumber import Complex
from .MathEngine import (
    tokenize,
    parse,
    parse_expression,
    render,
    collect_free_variables,
    evaluate,
    calculate,
    run,
)
from .EquivalenceEngine import EquivalenceResult, check_equivalence, compare

__version__ = "1.0.0"
