import random

from complex_calculator.ComplexNumber import Complex
from complex_calculator.EquivalenceEngine import check_equivalence, compare, sample_bindings
from complex_calculator.MathEngine import parse_expression


def equivalent(problem1, problem2, trials=20, seed=1):
    return check_equivalence(parse_expression(problem1), parse_expression(problem2),
                             trials, rng=random.Random(seed))


def test_difference_of_squares():
    result = equivalent("(x+1)*(x-1)", "x**2-1")
    assert result.equal
    assert result.counterexample is None
    assert result.trials_run == 20
    assert result.discarded == 0


def test_several_variables():
    assert equivalent("(x+y)*(x-y)", "x*x - y*y").equal
    assert equivalent("conj(x*y)", "conj(x)*conj(y)").equal
    assert equivalent("sqrt(x)**2", "x").equal


def test_not_equivalent_reports_first_trial():
    result = equivalent("x+1", "x+2")
    assert not result.equal
    assert result.trials_run == 1
    assert set(result.counterexample) == {"x"}

    x = Complex.from_string(result.counterexample["x"])
    assert Complex.from_string(result.value1).approx_equals(x.add(Complex(1, 0)))
    assert Complex.from_string(result.value2).approx_equals(x.add(Complex(2, 0)))


def test_counterexample_binds_union_of_variables():
    result = equivalent("x", "y")
    assert not result.equal
    assert set(result.counterexample) == {"x", "y"}


def test_constant_expressions():
    assert equivalent("2*3", "6").equal
    assert not equivalent("2", "3").equal


def test_seeded_rng_replays_the_same_counterexample():
    first = equivalent("x*y", "x+y", seed=42)
    second = equivalent("x*y", "x+y", seed=42)
    assert first.counterexample == second.counterexample
    assert first.value1 == second.value1


def test_failed_trials_are_discarded():
    # Known limitation: a pair that never evaluates is reported as equivalent
    result = equivalent("1/(x-x)", "5", trials=6)
    assert result.equal
    assert result.discarded == 6
    assert result.trials_run == 6


def test_sample_bindings_within_range():
    bindings = sample_bindings({"b", "a"}, random.Random(7), sample_range=2.0)
    assert list(bindings) == ["a", "b"]
    for text in bindings.values():
        value = Complex.from_string(text)
        assert -2.0 <= value.re <= 2.0
        assert -2.0 <= value.im <= 2.0


def test_compare_uses_configured_trials():
    result = compare("x+x", "2*x", rng=random.Random(3))
    assert result.equal
    assert result.trials_run == 12


def test_compare_with_explicit_trials():
    result = compare("x**2", "x*x", trials=4, rng=random.Random(3))
    assert result.equal
    assert result.trials_run == 4


def test_infinite_exponent_does_not_escape():
    # x ** inf evaluates to NaN, which never matches x
    result = equivalent("x**" + "9" * 400, "x", trials=4)
    assert not result.equal
    assert result.trials_run == 1
