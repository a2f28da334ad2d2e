"""
Polynomial Tests

Covers evaluation, the value semantics of push/shift_constant and the secant
root finder's convergence, divergence and division-by-zero outcomes.
"""
import logging
import math

import numpy as np
import pytest
from scipy.optimize import brentq

from brewcalc.config import SecantSettings
from brewcalc.exceptions import DegenerateSecantError, DivergenceError, RootFindError
from brewcalc.numerics.polynomial import Polynomial, RootResult, RootStatus


# ==================== CONSTRUCTION ====================

def test_push_chains_terms_by_increasing_degree():
    p = Polynomial().push(2).push(3).push(4)
    assert p.coefficients == (2.0, 3.0, 4.0)
    assert p.degree == 2


def test_push_does_not_modify_the_original():
    base = Polynomial([1.0, 2.0])
    extended = base.push(3.0)
    assert base.coefficients == (1.0, 2.0)
    assert extended.coefficients == (1.0, 2.0, 3.0)


def test_empty_polynomial_has_degree_minus_one():
    assert Polynomial().degree == -1


def test_zero_polynomial_of_given_order():
    p = Polynomial.zero(3)
    assert p.coefficients == (0.0, 0.0, 0.0, 0.0)
    assert Polynomial.zero(-1).degree == -1
    with pytest.raises(ValueError):
        Polynomial.zero(-2)


def test_from_polynomial_copies_coefficients():
    original = Polynomial([1.0, -1.0])
    copy = Polynomial.from_polynomial(original)
    assert copy == original
    assert copy is not original


def test_coefficient_access():
    p = Polynomial([5.0, 6.0, 7.0])
    assert p.coefficient(0) == 5.0
    assert p.coefficient(2) == 7.0
    with pytest.raises(IndexError):
        p.coefficient(3)
    with pytest.raises(IndexError):
        p.coefficient(-1)


def test_shift_constant_returns_new_polynomial():
    p = Polynomial([1.0, 2.0, 3.0])
    shifted = p.shift_constant(-4.0)
    assert shifted.coefficients == (-3.0, 2.0, 3.0)
    assert p.coefficients == (1.0, 2.0, 3.0)


def test_shift_constant_on_empty_polynomial():
    assert Polynomial().shift_constant(2.5).coefficients == (2.5,)


def test_polynomials_are_hashable_values():
    assert hash(Polynomial([1.0, 2.0])) == hash(Polynomial([1, 2]))
    assert {Polynomial([1.0]), Polynomial([1.0])} == {Polynomial([1.0])}


# ==================== EVALUATION ====================

def test_eval_quadratic():
    p = Polynomial().push(2).push(3).push(4)
    result = p.eval(2.0)
    assert result == 24.0
    assert isinstance(result, float)


def test_call_is_eval():
    p = Polynomial([1.0, 1.0])
    assert p(3.0) == p.eval(3.0) == 4.0


def test_eval_empty_polynomial_is_zero():
    assert Polynomial().eval(12.0) == 0.0
    np.testing.assert_array_equal(Polynomial().eval(np.array([1.0, 2.0])), np.zeros(2))


def test_eval_constant_term_at_zero():
    p = Polynomial([-616.868, 1111.14, -630.272, 135.997])
    assert p.eval(0.0) == -616.868


def test_eval_accepts_arrays():
    p = Polynomial([1.0, -2.0, 1.0])  # (x - 1)^2
    xs = np.array([0.0, 1.0, 2.0, 3.0])
    np.testing.assert_allclose(p.eval(xs), (xs - 1.0) ** 2)


# ==================== ROOT FINDING ====================

def test_root_find_linear():
    result = Polynomial([-5.0, 1.0]).root_find(0.0, 10.0)
    assert result.status == RootStatus.CONVERGED
    assert result.value == pytest.approx(5.0, abs=1e-6)
    assert result.unwrap() == pytest.approx(5.0, abs=1e-6)
    assert bool(result)


def test_root_find_matches_brentq_reference():
    p = Polynomial([-2.0, 0.0, 1.0])  # x^2 - 2
    root = p.root_find(1.0, 2.0).unwrap()
    reference = brentq(p.eval, 1.0, 2.0, xtol=1e-12)
    assert root == pytest.approx(reference, abs=1e-7)
    assert root == pytest.approx(math.sqrt(2.0), abs=1e-7)


def test_root_find_guesses_need_not_bracket_the_root():
    p = Polynomial([-2.0, 0.0, 1.0])
    assert p.root_find(3.0, 4.0).unwrap() == pytest.approx(math.sqrt(2.0), abs=1e-7)


def test_constant_polynomial_reports_division_by_zero():
    result = Polynomial([3.0]).root_find(0.0, 1.0)
    assert result.status == RootStatus.DIVISION_BY_ZERO
    assert result.value is None
    assert not result
    with pytest.raises(DegenerateSecantError):
        result.unwrap()


def test_degenerate_secant_error_is_a_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        Polynomial([3.0]).root_find(-1.0, 1.0).unwrap()


def test_divergence_guard_stops_runaway_steps():
    # The first secant step lands near -1e6, a million times the initial separation
    p = Polynomial([1.0, 1e-6])
    result = p.root_find(0.0, 1.0)
    assert result.status == RootStatus.DIVERGED
    assert result.iterations == 1
    with pytest.raises(DivergenceError) as excinfo:
        result.unwrap()
    assert isinstance(excinfo.value, RootFindError)
    assert excinfo.value.iterations == 1


def test_wider_separation_factor_lets_far_root_converge():
    p = Polynomial([1.0, 1e-6])
    settings = SecantSettings(max_separation_factor=1e7)
    assert p.root_find(0.0, 1.0, settings=settings).unwrap() == pytest.approx(-1e6, rel=1e-9)


def test_coarser_precision_takes_no_more_iterations():
    p = Polynomial([-616.868, 1111.14, -630.272, 135.997]).shift_constant(-12.0)
    fine = p.root_find(1.0, 1.05)
    coarse = p.root_find(1.0, 1.05, settings=SecantSettings(precision=1e-3))
    assert coarse.converged and fine.converged
    assert coarse.iterations <= fine.iterations
    assert coarse.value == pytest.approx(fine.value, abs=1e-3)


def test_close_guesses_still_take_a_secant_step():
    # Guesses 5e-8 apart are already within precision; the step lands on the root
    result = Polynomial([-1e-8, 1.0]).root_find(0.0, 5e-8)
    assert result.status == RootStatus.CONVERGED
    assert result.iterations == 1
    assert result.value == pytest.approx(1e-8, abs=1e-15)


def test_close_guesses_far_from_root_are_not_reported_as_root():
    # x - 5 with guesses 5e-8 apart: the step to 5 exceeds the separation bound
    result = Polynomial([-5.0, 1.0]).root_find(0.0, 5e-8)
    assert result.status == RootStatus.DIVERGED
    assert result.value is None


def test_root_find_rejects_identical_guesses():
    with pytest.raises(ValueError, match="distinct"):
        Polynomial([-5.0, 1.0]).root_find(2.0, 2.0)


def test_root_find_rejects_non_finite_guesses():
    with pytest.raises(ValueError, match="finite"):
        Polynomial([-5.0, 1.0]).root_find(0.0, math.inf)
    with pytest.raises(ValueError, match="finite"):
        Polynomial([-5.0, 1.0]).root_find(math.nan, 1.0)


def test_root_find_is_repeatable():
    p = Polynomial([-2.0, 0.0, 1.0])
    assert p.root_find(1.0, 2.0) == p.root_find(1.0, 2.0)


def test_divergence_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="brewcalc"):
        Polynomial([1.0, 1e-6]).root_find(0.0, 1.0)
    assert "diverged" in caplog.text


def test_root_result_defaults():
    result = RootResult(RootStatus.DIVERGED)
    assert result.value is None
    assert result.iterations == 0
    assert not result.converged
