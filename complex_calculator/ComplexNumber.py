# ComplexNumber.py
"""""
Complex value type used by the whole engine.

A Complex is an immutable (re, im) pair of floats. Arithmetic follows plain
IEEE-754 float semantics, so non-finite values propagate instead of raising.
Only approximate equality is meaningful; use approx_equals().

Text form
---------
- "3", "-2.5"            -> pure real
- "i", "-i", "4i"        -> pure imaginary
- "3+4i", "-2-i", "1e-07+2i" -> real part and imaginary part
"""""

import math
import re
from dataclasses import dataclass

from . import error as E


WHITESPACE = re.compile(r"\s+")
# Signed integer or decimal numeral, with the exponent that repr() may emit
NUMERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _to_float(numeral, literal):
    """Convert one numeral of a complex literal; only plain digit numerals are accepted."""
    if not NUMERAL.fullmatch(numeral):
        raise E.InvalidComplexLiteral(f"Invalid complex number: {literal}", fragment=literal)
    return float(numeral)


def _format_part(value):
    """Render a float the short way: integral values without '.0', -0.0 as '0'."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _find_separator(core):
    """Index of the last '+'/'-' splitting real and imaginary part, or -1.

    Index 0 is a leading sign, and a sign right after an exponent marker
    belongs to the numeral ('1e-07'), so neither counts.
    """
    for b in range(len(core) - 1, 0, -1):
        if core[b] in "+-" and core[b - 1] not in "eE":
            return b
    return -1


@dataclass(frozen=True, eq=False)
class Complex:
    re: float = 0.0
    im: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "re", float(self.re))
        object.__setattr__(self, "im", float(self.im))

    # -----------------------------
    # Arithmetic
    # -----------------------------

    def add(self, other):
        return Complex(self.re + other.re, self.im + other.im)

    def sub(self, other):
        return Complex(self.re - other.re, self.im - other.im)

    def mul(self, other):
        return Complex(self.re * other.re - self.im * other.im,
                       self.re * other.im + self.im * other.re)

    def div(self, other):
        denominator = other.re * other.re + other.im * other.im
        if denominator == 0:
            raise E.DivisionByZero("Division by zero (complex zero).", fragment=str(other))
        return Complex((self.re * other.re + self.im * other.im) / denominator,
                       (self.im * other.re - self.re * other.im) / denominator)

    def conj(self):
        return Complex(self.re, -self.im)

    def abs(self):
        return math.hypot(self.re, self.im)

    def neg(self):
        return Complex(-self.re, -self.im)

    def pow(self, n):
        """Raise to a real power through the polar form.

        The argument comes from atan2, so the origin has argument 0 and
        negative reals have argument +pi; no other branch convention applies.
        """
        modulus = self.abs()
        theta = math.atan2(self.im, self.re)
        if modulus == 0 and n < 0:
            modulus_n = math.inf
        else:
            try:
                modulus_n = modulus ** n
            except OverflowError:
                modulus_n = math.inf
        theta_n = theta * n
        if not math.isfinite(theta_n):
            # cos/sin of an infinite angle is undefined
            return Complex(math.nan, math.nan)
        return Complex(modulus_n * math.cos(theta_n), modulus_n * math.sin(theta_n))

    def approx_equals(self, other, eps=1e-8):
        return abs(self.re - other.re) < eps and abs(self.im - other.im) < eps

    @staticmethod
    def sqrt(z):
        """Principal square root. A zero or NaN imaginary part counts as positive."""
        modulus = z.abs()
        sign = 1.0 if (z.im or 1) > 0 or math.isnan(z.im) else -1.0
        return Complex(math.sqrt((modulus + z.re) / 2),
                       sign * math.sqrt((modulus - z.re) / 2))

    # -----------------------------
    # Text form
    # -----------------------------

    @classmethod
    def from_string(cls, text):
        """Parse the canonical text form ("3+4i", "-i", "2.5", "4i", ...)."""
        if not text.strip():
            raise E.EmptyComplexLiteral("Empty string for complex number.", fragment=text)
        literal = WHITESPACE.sub("", text)

        if literal == "i":
            return cls(0, 1)
        if literal == "-i":
            return cls(0, -1)

        if not literal.endswith("i"):
            return cls(_to_float(literal, literal), 0)

        core = literal[:-1]
        if core in ("", "+"):
            return cls(0, 1)
        if core == "-":
            return cls(0, -1)

        separator = _find_separator(core)
        if separator == -1:
            # No real part, e.g. "4i" or "-2.5i"
            return cls(0, _to_float(core, literal))

        real_part = core[:separator]
        imag_part = core[separator:]
        if imag_part in ("+", "-"):
            imag_part += "1"
        return cls(_to_float(real_part, literal), _to_float(imag_part, literal))

    def to_string(self):
        re_str = _format_part(self.re)
        if self.im == 0:
            return re_str
        if self.re == 0:
            if self.im == 1:
                return "i"
            if self.im == -1:
                return "-i"
            return f"{_format_part(self.im)}i"
        sign = "+" if self.im >= 0 else "-"
        im_abs = abs(self.im)
        im_part = "i" if im_abs == 1 else f"{_format_part(im_abs)}i"
        return f"{re_str}{sign}{im_part}"

    def __str__(self):
        return self.to_string()
