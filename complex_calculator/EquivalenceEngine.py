# EquivalenceEngine.py
"""""
Numeric equivalence test for two expressions.

Both trees are evaluated on the same random bindings for a number of trials.
The first disagreement is a counterexample. Trials where either side fails
to evaluate (e.g. a sampled division by zero) are discarded and count as
neither equal nor unequal, so a pair that fails on every trial is reported
as equivalent. This is a probabilistic check, not a proof.
"""""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional

from .ComplexNumber import Complex
from . import MathEngine
from . import config_manager as config_manager
from . import error as E

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 8
DEFAULT_SAMPLE_RANGE = 5.0
DEFAULT_EPSILON = 1e-6


@dataclass
class EquivalenceResult:
    equal: bool
    counterexample: Optional[Dict[str, str]] = None
    value1: Optional[str] = None
    value2: Optional[str] = None
    trials_run: int = 0
    discarded: int = 0


def sample_bindings(names, rng, sample_range=DEFAULT_SAMPLE_RANGE):
    """Draw one random complex value per name, as canonical text.

    Names are visited in sorted order so a seeded rng replays the same bindings.
    """
    bindings = {}
    for name in sorted(names):
        re_part = rng.uniform(-sample_range, sample_range)
        im_part = rng.uniform(-sample_range, sample_range)
        bindings[name] = Complex(re_part, im_part).to_string()
    return bindings


def check_equivalence(tree1, tree2, trials=DEFAULT_TRIALS, rng=None,
                      sample_range=DEFAULT_SAMPLE_RANGE, epsilon=DEFAULT_EPSILON):
    """Compare two ASTs on `trials` random bindings of their free variables."""
    if rng is None:
        rng = random.Random()

    names = MathEngine.collect_free_variables(tree1) | MathEngine.collect_free_variables(tree2)
    discarded = 0

    for trial in range(trials):
        bindings = sample_bindings(names, rng, sample_range)
        try:
            value1 = MathEngine.evaluate(tree1, bindings)
            value2 = MathEngine.evaluate(tree2, bindings)
        except E.MathError as e:
            # Degenerate sample, try the next one
            logger.debug("Trial %d discarded (%s): %s", trial, e.code, bindings)
            discarded += 1
            continue

        if not value1.approx_equals(value2, epsilon):
            logger.debug("Counterexample in trial %d: %s", trial, bindings)
            return EquivalenceResult(equal=False, counterexample=bindings,
                                     value1=value1.to_string(), value2=value2.to_string(),
                                     trials_run=trial + 1, discarded=discarded)

    if discarded:
        logger.debug("%d of %d trials discarded", discarded, trials)
    return EquivalenceResult(equal=True, trials_run=trials, discarded=discarded)


def compare(problem1, problem2, trials=None, rng=None):
    """Parse two expressions and test them with the configured defaults."""
    settings = config_manager.load_setting_value("all")
    if trials is None:
        trials = settings["equivalence_trials"]
    try:
        tree1 = MathEngine.parse_expression(problem1)
    except E.MathError as e:
        e.equation = problem1
        raise e
    try:
        tree2 = MathEngine.parse_expression(problem2)
    except E.MathError as e:
        e.equation = problem2
        raise e

    return check_equivalence(tree1, tree2, trials, rng=rng,
                             sample_range=settings["sample_range"],
                             epsilon=settings["equivalence_epsilon"])
