import math

import pytest

from complex_calculator.ComplexNumber import Complex
from complex_calculator.MathEngine import calculate, evaluate, parse_expression, run
from complex_calculator import error as E


def value_of(problem, bindings=None):
    return evaluate(parse_expression(problem), bindings)


def test_precedence():
    assert value_of("1+2*3").approx_equals(Complex(7, 0))


def test_power_is_right_associative():
    assert value_of("2**3**2").approx_equals(Complex(512, 0))
    assert value_of("2^3^2").approx_equals(Complex(512, 0))


def test_negation_binds_to_primary():
    assert value_of("-2**2").approx_equals(Complex(4, 0))
    assert value_of("-(2**2)").approx_equals(Complex(-4, 0))


def test_complex_arithmetic():
    assert value_of("(1+2i)*(3-i)").approx_equals(Complex(5, 5))
    assert value_of("i*i").approx_equals(Complex(-1, 0))
    assert value_of("(5+5i)/(3-i)").approx_equals(Complex(1, 2))


def test_variables_are_parsed_from_text():
    assert value_of("x*conj(x)", {"x": "3+4i"}).approx_equals(Complex(25, 0))
    assert value_of("x+y", {"x": "i", "y": "-2"}).approx_equals(Complex(-2, 1))


def test_builtins():
    assert value_of("sqrt(-4)").approx_equals(Complex(0, 2))
    assert value_of("SQRT(3+4i)").approx_equals(Complex(2, 1))
    assert value_of("raiz(4)").approx_equals(Complex(2, 0))
    assert value_of("conjugate(3+4i)").approx_equals(Complex(3, -4))
    assert value_of("Conj(i)").approx_equals(Complex(0, -1))


def test_division_by_zero_literal():
    with pytest.raises(E.DivisionByZero):
        value_of("1/0")


def test_division_by_zero_bound():
    with pytest.raises(E.DivisionByZero):
        value_of("1/x", {"x": "0"})
    with pytest.raises(E.DivisionByZero):
        value_of("1/(x-x)", {"x": "3+4i"})


def test_unbound_variable():
    with pytest.raises(E.UnboundVariable) as info:
        value_of("x+1")
    assert info.value.fragment == "x"


def test_left_operand_fails_first():
    with pytest.raises(E.UnboundVariable) as info:
        value_of("x+y")
    assert info.value.fragment == "x"


def test_division_evaluates_divisor_first():
    with pytest.raises(E.UnboundVariable) as info:
        value_of("x/y")
    assert info.value.fragment == "y"
    # The zero check runs before the dividend is looked at
    with pytest.raises(E.DivisionByZero):
        value_of("x/0")
    assert value_of("x/y", {"x": "1", "y": "2"}).approx_equals(Complex(0.5, 0))


def test_arguments_are_evaluated_before_dispatch():
    with pytest.raises(E.UnboundVariable):
        value_of("foo(x)")


@pytest.mark.parametrize("problem", ["conj(1,2)", "sqrt()", "raiz(1, 2, 3)"])
def test_arity(problem):
    with pytest.raises(E.ArityError) as info:
        value_of(problem)
    assert info.value.code == "3218"


def test_unknown_function():
    with pytest.raises(E.UnknownFunction) as info:
        value_of("foo(1)")
    assert info.value.fragment == "foo"


@pytest.mark.parametrize("problem", ["2**(1+1i)", "2**i", "x^y"])
def test_complex_exponent_rejected(problem):
    with pytest.raises(E.ComplexExponentUnsupported):
        value_of(problem, {"x": "2", "y": "3-i"})


def test_infinite_exponent_gives_nan():
    result = value_of("(-2)**" + "9" * 400)
    assert math.isnan(result.re)
    assert math.isnan(result.im)


def test_non_finite_binding_text_is_rejected():
    with pytest.raises(E.InvalidComplexLiteral):
        value_of("(-2)**x", {"x": "inf"})


def test_deeply_nested_group():
    with pytest.raises(E.ExpressionTooDeep) as info:
        parse_expression("(" * 2000 + "1" + ")" * 2000)
    assert info.value.code == "3014"


def test_deep_operator_chain():
    tree = parse_expression("+".join(["1"] * 5000))
    with pytest.raises(E.ExpressionTooDeep):
        evaluate(tree)
    with pytest.raises(E.ExpressionTooDeep):
        calculate("+".join(["1"] * 5000))


def test_malformed_binding_text():
    with pytest.raises(E.InvalidComplexLiteral):
        value_of("x", {"x": "abc"})
    with pytest.raises(E.EmptyComplexLiteral):
        value_of("x", {"x": " "})


def test_evaluation_leaves_tree_reusable():
    tree = parse_expression("x*2")
    assert evaluate(tree, {"x": "1"}).approx_equals(Complex(2, 0))
    assert evaluate(tree, {"x": "i"}).approx_equals(Complex(0, 2))


def test_run_validates_bindings():
    assert run("x+1", {"x": "2"}).approx_equals(Complex(3, 0))
    with pytest.raises(E.InvalidBinding) as info:
        run("x+1", {"x": "abc"})
    assert info.value.fragment == "x"
    assert info.value.equation == "x+1"


def test_facade_attaches_equation():
    with pytest.raises(E.UnclosedParenthesis) as info:
        calculate("(1+2")
    assert info.value.equation == "(1+2"
    assert calculate("3+4*i") == "(+ 3 (* 4 i))"
