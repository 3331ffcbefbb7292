# MathEngine.py
"""""
Core engine for the complex calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of token strings.
2) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
3) Evaluator: computes a Complex from the AST and a dict of variable bindings.
4) Printer: renders the AST in prefix (LISP-like) notation.

The AST nodes share an abstract base, so each node kind has to implement
evaluation, rendering and variable collection.
"""""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .ComplexNumber import Complex
from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)


# -----------------------------
# Token patterns
# -----------------------------

# Tried in order at each position. '**' comes before the single-character
# operators so it is not split into two '*'.
TOKEN_PATTERN = re.compile(
    r"[A-Za-z_][A-Za-z0-9_]*"   # identifier (also the imaginary unit 'i')
    r"|[0-9]+\.[0-9]+|\.[0-9]+"  # decimal
    r"|[0-9]+"                   # integer
    r"|\*\*"                     # power
    r"|[()+\-*/^,]"              # single-character punctuation
)
WHITESPACE = re.compile(r"\s*")
NUMBER_TOKEN = re.compile(r"[0-9]+(?:\.[0-9]+)?|\.[0-9]+")
IDENTIFIER_TOKEN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

IMAGINARY_UNIT = "i"
POWER_OPERATORS = ("**", "^")


# -----------------------------
# AST node types
# -----------------------------

class UnaryOperator(Enum):
    NEGATE = "-"


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"


class Node(ABC):
    """Base class of all AST nodes."""

    @abstractmethod
    def evaluate(self, bindings):
        """Return the Complex value of this subtree."""

    @abstractmethod
    def to_prefix(self):
        """Return this subtree in prefix notation."""

    @abstractmethod
    def collect_variables(self, names):
        """Add the names of all variables in this subtree to the set `names`."""


@dataclass(frozen=True)
class NumberLiteral(Node):
    """Fully resolved complex literal."""
    value: Complex

    def evaluate(self, bindings):
        return self.value

    def to_prefix(self):
        return self.value.to_string()

    def collect_variables(self, names):
        pass


@dataclass(frozen=True)
class Variable(Node):
    """Free variable, resolved from the bindings at evaluation time."""
    name: str

    def evaluate(self, bindings):
        if self.name not in bindings:
            raise E.UnboundVariable(f"Variable '{self.name}' has no value.", fragment=self.name)
        # Bindings are text; they go through the same grammar as literals
        return Complex.from_string(str(bindings[self.name]))

    def to_prefix(self):
        return self.name

    def collect_variables(self, names):
        names.add(self.name)


@dataclass(frozen=True)
class UnaryOp(Node):
    operator: UnaryOperator
    operand: Node

    def evaluate(self, bindings):
        return self.operand.evaluate(bindings).neg()

    def to_prefix(self):
        return f"({self.operator.value} {self.operand.to_prefix()})"

    def collect_variables(self, names):
        self.operand.collect_variables(names)


@dataclass(frozen=True)
class BinOp(Node):
    """Binary operation: left <operator> right."""
    operator: BinaryOperator
    left: Node
    right: Node

    def evaluate(self, bindings):
        """Evaluate left then right, then apply the operator.

        Division is the exception: the divisor is evaluated and checked for
        zero before the dividend is touched.
        """
        if self.operator is BinaryOperator.DIV:
            right_value = self.right.evaluate(bindings)
            if right_value.re == 0 and right_value.im == 0:
                raise E.DivisionByZero("Division by zero during evaluation.", fragment=self.right.to_prefix())
            return self.left.evaluate(bindings).div(right_value)

        left_value = self.left.evaluate(bindings)
        right_value = self.right.evaluate(bindings)

        if self.operator is BinaryOperator.ADD:
            return left_value.add(right_value)
        elif self.operator is BinaryOperator.SUB:
            return left_value.sub(right_value)
        elif self.operator is BinaryOperator.MUL:
            return left_value.mul(right_value)
        elif self.operator is BinaryOperator.POW:
            if right_value.im != 0:
                raise E.ComplexExponentUnsupported("Only real exponents are supported.",
                                                   fragment=right_value.to_string())
            return left_value.pow(right_value.re)
        else:
            raise E.CalculationError(f"Unknown operator: {self.operator}", code="9999")

    def to_prefix(self):
        return f"({self.operator.value} {self.left.to_prefix()} {self.right.to_prefix()})"

    def collect_variables(self, names):
        self.left.collect_variables(names)
        self.right.collect_variables(names)


@dataclass(frozen=True)
class Call(Node):
    """Call of a builtin function; `name` keeps the casing of the source."""
    name: str
    args: Tuple[Node, ...]

    def evaluate(self, bindings):
        values = [argument.evaluate(bindings) for argument in self.args]
        return ScientificEngine.apply_builtin(self.name, values)

    def to_prefix(self):
        parts = [self.name] + [argument.to_prefix() for argument in self.args]
        return "(" + " ".join(parts) + ")"

    def collect_variables(self, names):
        for argument in self.args:
            argument.collect_variables(names)


# -----------------------------
# Tokenizer
# -----------------------------

def tokenize(problem):
    """Convert a raw input string into a list of token strings.

    Whitespace between tokens is skipped. Raises InvalidToken with the next
    20 characters when nothing matches at the current position.
    """
    tokens = []
    b = WHITESPACE.match(problem, 0).end()

    while b < len(problem):
        match = TOKEN_PATTERN.match(problem, b)
        if not match:
            remaining = problem[b:b + 20]
            raise E.InvalidToken(f"Invalid token near: {remaining}", fragment=remaining)
        tokens.append(match.group())
        b = WHITESPACE.match(problem, match.end()).end()

    logger.debug("Tokens: %s", tokens)
    return tokens


# -----------------------------
# Parser (recursive descent)
# -----------------------------

class TokenStream:
    """Cursor over a token list with one token of lookahead."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.position = 0

    def peek(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def consume(self, expected=None):
        token = self.peek()
        if expected is not None and token != expected:
            found = "end of input" if token is None else token
            raise E.UnexpectedToken(f"Expected '{expected}' but found '{found}'",
                                    fragment=f"'{expected}' / '{found}'")
        self.position += 1
        return token

    def remaining(self):
        return self.tokens[self.position:]


def parse(tokens):
    """Parse a token list into an AST.

    Implements precedence via nested functions: primary -> power -> term -> sum.
    """
    stream = TokenStream(tokens)

    def parse_primary():
        """Groups, literals, 'i', calls, variables and unary signs."""
        token = stream.peek()

        # Parenthesized sub-expression
        if token == "(":
            stream.consume("(")
            subtree = parse_sum()
            if stream.peek() != ")":
                raise E.UnclosedParenthesis("Missing closing parenthesis ')'", fragment=token)
            stream.consume(")")
            return subtree

        # Number, possibly followed by 'i' ("3 i" -> 3i)
        if token is not None and NUMBER_TOKEN.fullmatch(token):
            number = stream.consume()
            if stream.peek() == IMAGINARY_UNIT:
                stream.consume(IMAGINARY_UNIT)
                return NumberLiteral(Complex.from_string(number + IMAGINARY_UNIT))
            return NumberLiteral(Complex(float(number), 0))

        if token == IMAGINARY_UNIT:
            stream.consume(IMAGINARY_UNIT)
            return NumberLiteral(Complex(0, 1))

        # Identifier: function call or variable
        if token is not None and IDENTIFIER_TOKEN.fullmatch(token):
            name = stream.consume()
            if stream.peek() != "(":
                return Variable(name)

            stream.consume("(")
            args = []
            if stream.peek() != ")":
                while True:
                    args.append(parse_sum())
                    if stream.peek() == ",":
                        stream.consume(",")
                        continue
                    break
            if stream.peek() != ")":
                raise E.UnclosedParenthesis(f"Missing closing parenthesis after function '{name}'",
                                            code="3217", fragment=name)
            stream.consume(")")
            return Call(name, tuple(args))

        # Unary sign binds to the next primary only
        if token in ("+", "-"):
            operator = stream.consume()
            operand = parse_primary()
            if operator == "-":
                return UnaryOp(UnaryOperator.NEGATE, operand)
            return operand

        found = "end of input" if token is None else token
        raise E.InvalidPrimary(f"Invalid primary: {found}", fragment=found)

    def parse_power():
        """Exponentiation '**' / '^', right-associative."""
        current_tree = parse_primary()
        while stream.peek() in POWER_OPERATORS:
            stream.consume()
            right_part = parse_power()
            current_tree = BinOp(BinaryOperator.POW, current_tree, right_part)
        return current_tree

    def parse_term():
        """Multiplication and division."""
        current_tree = parse_power()
        while stream.peek() in ("*", "/"):
            operator = BinaryOperator(stream.consume())
            right_part = parse_power()
            current_tree = BinOp(operator, current_tree, right_part)
        return current_tree

    def parse_sum():
        """Addition and subtraction."""
        current_tree = parse_term()
        while stream.peek() in ("+", "-"):
            operator = BinaryOperator(stream.consume())
            right_side = parse_term()
            current_tree = BinOp(operator, current_tree, right_side)
        return current_tree

    try:
        final_tree = parse_sum()
    except RecursionError:
        raise _too_deep("parse")

    if stream.remaining():
        leftover = " ".join(stream.remaining())
        raise E.TrailingTokens(f"Unconsumed tokens: {leftover}", fragment=leftover)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Final AST: %s", render(final_tree))
    return final_tree


# -----------------------------
# Public operations on the AST
# -----------------------------

# parse(), render(), evaluate() and collect_free_variables() recurse once per
# nesting level; hitting the interpreter recursion limit is reported as
# ExpressionTooDeep.

def _too_deep(stage):
    return E.ExpressionTooDeep(f"Expression nested too deeply to {stage}.", fragment=stage)


def render(tree):
    """Render an AST in prefix notation, e.g. '(+ 3 (* 4 i))'."""
    try:
        return tree.to_prefix()
    except RecursionError:
        raise _too_deep("render")


def collect_free_variables(tree):
    """Return the set of variable names referenced anywhere in the AST."""
    names = set()
    try:
        tree.collect_variables(names)
    except RecursionError:
        raise _too_deep("collect variables")
    return names


def evaluate(tree, bindings=None):
    """Evaluate an AST; `bindings` maps variable names to complex literal text."""
    if bindings is None:
        bindings = {}
    try:
        return tree.evaluate(bindings)
    except RecursionError:
        raise _too_deep("evaluate")


def parse_expression(problem):
    """Tokenize and parse in one step."""
    return parse(tokenize(problem))


# -----------------------------
# Facade used by the presentation layer
# -----------------------------

def _attach_equation(error, problem):
    if error.equation is None:
        error.equation = problem
    return error


def validate_bindings(bindings):
    """Check every bound value against the complex literal grammar."""
    for name, value in bindings.items():
        try:
            Complex.from_string(str(value))
        except E.ComplexLiteralError as e:
            raise E.InvalidBinding(f"Invalid value for variable {name}: {e.message}", fragment=name)


def calculate(problem):
    """Parse `problem` and return its prefix form."""
    try:
        return render(parse_expression(problem))
    except E.MathError as e:
        raise _attach_equation(e, problem)
    except Exception as e:
        raise E.MathError(message=f"Unexpected crash: {e}", code="9999", equation=problem, fragment=str(e))


def run(problem, bindings=None):
    """Parse `problem`, validate the bindings and evaluate it."""
    if bindings is None:
        bindings = {}
    try:
        tree = parse_expression(problem)
        validate_bindings(bindings)
        result = evaluate(tree, bindings)
        logger.debug("Result of %r: %s", problem, result)
        return result
    except E.MathError as e:
        raise _attach_equation(e, problem)
    except Exception as e:
        raise E.MathError(message=f"Unexpected crash: {e}", code="9999", equation=problem, fragment=str(e))
