"""
Error types raised by brewcalc.

Root-finding failures are reported as exceptions (or as a non-converged
RootResult) and never as an in-band numeric value.
"""


class BrewCalcError(Exception):
    """Base class for all brewcalc errors."""


class RootFindError(BrewCalcError):
    """The secant iteration did not produce a root."""

    def __init__(self, message: str, guesses: tuple[float, float] | None = None, iterations: int = 0):
        super().__init__(message)
        self.guesses = guesses
        self.iterations = iterations


class DivergenceError(RootFindError):
    """Successive guesses moved further apart than the allowed bound."""


class DegenerateSecantError(RootFindError, ZeroDivisionError):
    """Two successive guesses evaluated to the same value, so the secant is flat."""


class InputRangeError(BrewCalcError, ValueError):
    """An input lies outside the range the fitted model is valid for."""

    def __init__(self, name: str, value: float, lower: float, upper: float):
        super().__init__(f"{name}={value} is outside the supported range [{lower}, {upper}].")
        self.name = name
        self.value = value
        self.lower = lower
        self.upper = upper
