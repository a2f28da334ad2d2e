"""
Configuration & Tuning Constants
================================
This module serves as the central registry for the numeric tuning constants
of the root finder.

Why is this file needed?
------------------------
1. Abstraction: It prevents the secant tolerances from being scattered as
   magic numbers through the numerics and conversion code.
2. Flexibility: The defaults were tuned for brewing ranges (SG ~1.0-1.1,
   Plato ~0-30). Callers working far outside those ranges can build their
   own SecantSettings instead of patching the solver.

Exports:
    ROOT_PRECISION (float): Absolute separation between successive guesses
        at which the secant iteration stops.
    MAX_SEPARATION_FACTOR (float): Multiple of the initial guess separation
        beyond which the iteration is declared divergent.
    DEFAULT_SECANT_SETTINGS (SecantSettings): Settings built from the above.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
import math
from typing import Any, Dict


# Global Constants
ROOT_PRECISION: float = 1e-7
MAX_SEPARATION_FACTOR: float = 1e3


@dataclass(frozen=True)
class SecantSettings:
    """
    Tolerances for the secant root finder.

    Attributes:
        precision: Stop once |g0 - g1| <= precision (absolute, not relative).
        max_separation_factor: Abort once |g0 - g1| exceeds this multiple of
            the initial guess separation |x0 - x1|.
    """
    precision: float = ROOT_PRECISION
    max_separation_factor: float = MAX_SEPARATION_FACTOR

    def __post_init__(self) -> None:
        if not math.isfinite(self.precision) or self.precision <= 0.0:
            raise ValueError(f"precision must be a positive finite number, got {self.precision}.")
        if not math.isfinite(self.max_separation_factor) or self.max_separation_factor <= 0.0:
            raise ValueError(
                f"max_separation_factor must be a positive finite number, got {self.max_separation_factor}."
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SecantSettings:
        """Build settings from a dictionary, falling back to the defaults for missing keys."""
        return SecantSettings(
            precision=float(data.get("precision", ROOT_PRECISION)),
            max_separation_factor=float(data.get("max_separation_factor", MAX_SEPARATION_FACTOR)),
        )


DEFAULT_SECANT_SETTINGS = SecantSettings()
