"""
Real Polynomials in a Single Variable
=====================================
Immutable polynomial values with evaluation and secant-method root finding.

Coefficients are stored lowest exponent first, so ``c[i]`` multiplies
``x**i``. Every "modifying" operation (push, shift_constant) returns a new
polynomial; fitted models can therefore be shared freely between threads.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
import math
from typing import TYPE_CHECKING, Iterable, Optional, Union

import numpy as np

from brewcalc.config import SecantSettings, DEFAULT_SECANT_SETTINGS
from brewcalc.exceptions import DivergenceError, DegenerateSecantError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, "npt.NDArray[np.float64]"]


class RootStatus(StrEnum):
    CONVERGED = "converged"
    DIVERGED = "diverged"
    DIVISION_BY_ZERO = "division_by_zero"


@dataclass(frozen=True)
class RootResult:
    """
    Outcome of a secant root search.

    Attributes:
        status: How the iteration ended.
        value: The root, only set when status is CONVERGED.
        iterations: Number of secant steps taken.
        guesses: The last pair of guesses (g0, g1).
    """
    status: RootStatus
    value: Optional[float] = None
    iterations: int = 0
    guesses: tuple[float, float] = (math.nan, math.nan)

    @property
    def converged(self) -> bool:
        return self.status == RootStatus.CONVERGED

    def __bool__(self) -> bool:
        return self.converged

    def unwrap(self) -> float:
        """
        Return the root or raise the error matching the failure.

        Raises:
            DivergenceError: If the guesses drifted apart beyond the bound.
            DegenerateSecantError: If the secant slope was zero.
        """
        if self.status == RootStatus.CONVERGED:
            return self.value
        if self.status == RootStatus.DIVISION_BY_ZERO:
            raise DegenerateSecantError(
                f"Secant step divided by zero at guesses {self.guesses} "
                f"after {self.iterations} iterations.",
                guesses=self.guesses,
                iterations=self.iterations,
            )
        raise DivergenceError(
            f"Secant iteration diverged at guesses {self.guesses} "
            f"after {self.iterations} iterations.",
            guesses=self.guesses,
            iterations=self.iterations,
        )


@dataclass(frozen=True, init=False)
class Polynomial:
    """
    A real polynomial ``c[0] + c[1]*x + ... + c[n]*x**n``.

    Examples:
        >>> p = Polynomial().push(2).push(3).push(4)
        >>> p.eval(2.0)
        24.0
    """
    coefficients: tuple[float, ...] = field(default=())

    def __init__(self, coefficients: Iterable[float] = ()) -> None:
        object.__setattr__(self, "coefficients", tuple(float(c) for c in coefficients))

    @classmethod
    def zero(cls, order: int) -> Polynomial:
        """The zero polynomial with ``order + 1`` coefficients."""
        if order < -1:
            raise ValueError(f"Polynomial order must be >= -1, got {order}.")
        return cls([0.0] * (order + 1))

    @classmethod
    def from_polynomial(cls, other: Polynomial) -> Polynomial:
        return cls(other.coefficients)

    @property
    def degree(self) -> int:
        """Highest exponent; -1 for the empty polynomial."""
        return len(self.coefficients) - 1

    def coefficient(self, n: int) -> float:
        """Coefficient of ``x**n`` for ``0 <= n <= degree``."""
        if n < 0 or n > self.degree:
            raise IndexError(f"No coefficient for x^{n} in a polynomial of degree {self.degree}.")
        return self.coefficients[n]

    def push(self, coeff: float) -> Polynomial:
        """Return a copy with ``coeff`` added as the next higher-degree term."""
        return Polynomial(self.coefficients + (float(coeff),))

    def shift_constant(self, delta: float) -> Polynomial:
        """
        Return a copy with ``delta`` added to the constant term.

        Solving ``P(x) = target`` is the same as finding a root of
        ``P.shift_constant(-target)``.
        """
        if not self.coefficients:
            return Polynomial([delta])
        return Polynomial((self.coefficients[0] + delta,) + self.coefficients[1:])

    def eval(self, x: ArrayOrFloat) -> ArrayOrFloat:
        """
        Evaluate the polynomial at ``x``.

        Args:
            x: A scalar or an array of evaluation points.

        Returns:
            A float for scalar input, otherwise an array of the same shape.
        """
        if not self.coefficients:
            if np.isscalar(x):
                return 0.0
            return np.zeros_like(np.asarray(x, dtype=np.float64))

        values = np.polynomial.polynomial.polyval(x, self.coefficients)
        if np.isscalar(x):
            return float(values)
        return values

    def __call__(self, x: ArrayOrFloat) -> ArrayOrFloat:
        return self.eval(x)

    def root_find(
        self,
        x0: float,
        x1: float,
        settings: Optional[SecantSettings] = None
    ) -> RootResult:
        """
        Find a root near two distinct initial guesses by the secant method.

        At least one secant step is taken. The iteration then stops once two
        successive guesses are within ``settings.precision`` of each other.
        It is abandoned as divergent when their separation exceeds
        ``settings.max_separation_factor`` times ``|x0 - x1|`` or a step is not
        finite, and reported as DIVISION_BY_ZERO when two successive guesses
        evaluate to the same value.

        Args:
            x0: First initial guess.
            x1: Second initial guess, distinct from ``x0``.
            settings: Tolerances; defaults to DEFAULT_SECANT_SETTINGS.

        Raises:
            ValueError: If the guesses are equal or not finite.

        Returns:
            A RootResult; call ``unwrap()`` to get the root or an exception.
        """
        settings = settings or DEFAULT_SECANT_SETTINGS
        g0, g1 = float(x0), float(x1)

        if not (math.isfinite(g0) and math.isfinite(g1)):
            raise ValueError(f"Initial guesses must be finite, got ({x0}, {x1}).")
        if g0 == g1:
            raise ValueError(f"Initial guesses must be distinct, got ({x0}, {x1}).")

        max_separation = abs(g0 - g1) * settings.max_separation_factor
        f0 = self.eval(g0)
        f1 = self.eval(g1)
        iterations = 0

        while True:
            if f1 == f0:
                logger.warning(f"Secant slope vanished at guesses ({g0}, {g1}) after {iterations} iterations.")
                return RootResult(RootStatus.DIVISION_BY_ZERO, iterations=iterations, guesses=(g0, g1))

            new_guess = g1 - (g1 - g0) * f1 / (f1 - f0)
            iterations += 1
            g0, g1 = g1, new_guess

            if not math.isfinite(g1) or abs(g0 - g1) > max_separation:
                logger.warning(
                    f"Secant iteration diverged from ({x0}, {x1}): "
                    f"separation {abs(g0 - g1)} exceeds {max_separation}."
                )
                return RootResult(RootStatus.DIVERGED, iterations=iterations, guesses=(g0, g1))

            if abs(g0 - g1) <= settings.precision:
                break

            f0, f1 = f1, self.eval(g1)

        logger.debug(f"Secant iteration converged to {g1} in {iterations} iterations.")
        return RootResult(RootStatus.CONVERGED, value=g1, iterations=iterations, guesses=(g0, g1))

    def __repr__(self) -> str:
        return f"Polynomial({list(self.coefficients)})"
