# ScientificEngine.py
"""""
Builtin functions callable from expressions.

The set is closed: names are looked up lower-cased in BUILTIN_FUNCTIONS and
anything else is an UnknownFunction. Every builtin takes exactly one argument.
"""""

from enum import Enum

from .ComplexNumber import Complex
from . import error as E


class Builtin(Enum):
    CONJUGATE = "conj"
    SQRT = "sqrt"


# Aliases map onto the same builtin ('raiz' is the Portuguese name for sqrt)
BUILTIN_FUNCTIONS = {
    "conj": Builtin.CONJUGATE,
    "conjugate": Builtin.CONJUGATE,
    "sqrt": Builtin.SQRT,
    "raiz": Builtin.SQRT,
}


def lookup(name):
    """Return the Builtin for a function name as written in the expression."""
    try:
        return BUILTIN_FUNCTIONS[name.lower()]
    except KeyError:
        raise E.UnknownFunction(f"Unknown function: {name}", fragment=name)


def apply_builtin(name, args):
    """Resolve `name` and apply it to the already evaluated arguments."""
    builtin = lookup(name)
    if len(args) != 1:
        raise E.ArityError(f"{name}() takes exactly 1 argument ({len(args)} given)", fragment=name)
    argument = args[0]

    if builtin is Builtin.CONJUGATE:
        return argument.conj()
    elif builtin is Builtin.SQRT:
        return Complex.sqrt(argument)
