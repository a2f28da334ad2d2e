"""
Fitted Brewing Curves
=====================
The fixed polynomial fits the conversions are built on, each paired with the
input domain it is considered trustworthy for.

The fits are module-level immutable values. Every ConversionService instance
reads the same objects, which is safe because neither Polynomial nor
FittedPolynomial can be mutated after construction.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Union

import numpy as np

from brewcalc.exceptions import InputRangeError
from brewcalc.numerics.polynomial import Polynomial

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, "npt.NDArray[np.float64]"]


@dataclass(frozen=True)
class InputDomain:
    """
    Closed interval of plausible values for one formula input.

    The fits extrapolate silently outside their domain; this only decides
    whether such an input is rejected or merely logged.
    """
    name: str
    lower: float
    upper: float
    unit: str = ""

    def contains(self, value: ArrayOrFloat) -> bool:
        values = np.asarray(value, dtype=np.float64)
        return bool(np.all((values >= self.lower) & (values <= self.upper)))

    def check(self, value: ArrayOrFloat, strict: bool = False) -> None:
        """
        Validate ``value`` against the domain.

        Args:
            value: Scalar or array input.
            strict: Raise instead of logging a warning.

        Raises:
            InputRangeError: If ``strict`` and any value lies outside the domain.
        """
        if self.contains(value):
            return
        if strict:
            offending = np.asarray(value, dtype=np.float64)
            outside = offending[(offending < self.lower) | (offending > self.upper) | np.isnan(offending)]
            raise InputRangeError(self.name, float(outside.flat[0]), self.lower, self.upper)
        logger.warning(f"{self.name}={value} is outside [{self.lower}, {self.upper}] {self.unit}; extrapolating.")


# Input domains shared by the fits and the closed-form formulas
SG_DOMAIN = InputDomain(name="sg", lower=0.990, upper=1.130)
PLATO_DOMAIN = InputDomain(name="plato", lower=-2.0, upper=35.0, unit="°P")
WATER_CELSIUS_DOMAIN = InputDomain(name="celsius", lower=0.0, upper=100.0, unit="°C")
HYDROMETER_CELSIUS_DOMAIN = InputDomain(name="celsius", lower=0.0, upper=60.0, unit="°C")


@dataclass(frozen=True)
class FittedPolynomial:
    """
    A named empirical fit.

    Attributes:
        name: Identifier of the fit.
        polynomial: The fitted polynomial in the input variable.
        domain: Input range the fit was made for.
        scale: Factor applied to the polynomial value.
        unit: Unit of the (scaled) output.
    """
    name: str
    polynomial: Polynomial
    domain: InputDomain
    scale: float = 1.0
    unit: str = ""

    def evaluate(self, x: ArrayOrFloat) -> ArrayOrFloat:
        return self.polynomial.eval(x) * self.scale

    def get_preview_curve(
        self,
        steps: int = 100
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Get input and output arrays sampled evenly across the fit domain."""
        if steps < 2:
            raise ValueError(f"At least two preview steps are required, got {steps}.")
        xs = np.linspace(self.domain.lower, self.domain.upper, num=steps)
        return xs, np.asarray(self.evaluate(xs), dtype=np.float64)


# Cubic fit to get Plato from specific gravity measured at 20°C relative to
# water at 20°C: P = -616.868 + 1111.14(SG) - 630.272(SG)^2 + 135.997(SG)^3
PLATO_FROM_SG_20C20C = FittedPolynomial(
    name="plato_from_sg_20c20c",
    polynomial=Polynomial([-616.868, 1111.14, -630.272, 135.997]),
    domain=SG_DOMAIN,
    unit="°P",
)

# Water density in kg/L as a function of °C
WATER_DENSITY_VS_CELSIUS = FittedPolynomial(
    name="water_density_vs_celsius",
    polynomial=Polynomial([
        0.9999776532, 6.557692037e-5, -1.007534371e-5,
        1.372076106e-7, -1.414581892e-9, 5.6890971e-12
    ]),
    domain=WATER_CELSIUS_DOMAIN,
    unit="kg/L",
)

# Additive correction (in SG units after scaling) for a hydrometer
# calibrated at 15°C and read at another temperature in °C
HYDROMETER_15C_CORRECTION = FittedPolynomial(
    name="hydrometer_15c_correction",
    polynomial=Polynomial([-0.911045, -16.2853e-3, 5.84346e-3, -15.3243e-6]),
    domain=HYDROMETER_CELSIUS_DOMAIN,
    scale=1e-3,
)

ALL_FITS: dict[str, FittedPolynomial] = {
    fit.name: fit for fit in (PLATO_FROM_SG_20C20C, WATER_DENSITY_VS_CELSIUS, HYDROMETER_15C_CORRECTION)
}
