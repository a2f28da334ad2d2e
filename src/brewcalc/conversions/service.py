"""
Brewing Conversion Service
==========================
Beer-related formulas: Plato and specific gravity, alcohol content,
refractive index and real extract.

Some operations evaluate a fixed fit directly, some invert a fit with the
secant root finder, and the rest are closed-form relations. All of them are
pure functions of their arguments, so one service instance can be shared
between threads.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from brewcalc.config import SecantSettings, DEFAULT_SECANT_SETTINGS
from brewcalc.constants import SUCROSE_DENSITY_KGL
from brewcalc.conversions.fits import (
    FittedPolynomial,
    InputDomain,
    PLATO_FROM_SG_20C20C,
    WATER_DENSITY_VS_CELSIUS,
    HYDROMETER_15C_CORRECTION,
    SG_DOMAIN,
    PLATO_DOMAIN,
)
from brewcalc.numerics.polynomial import Polynomial, RootResult

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, "npt.NDArray[np.float64]"]

# Starting guesses for the secant searches
SG_GUESSES: tuple[float, float] = (1.000, 1.050)
PLATO_GUESSES: tuple[float, float] = (3.0, 5.0)

# SG from original and current (refractometer) Plato:
# SG = 1.001843 - 0.002318474(OP) - 0.000007775(OP^2) - 0.000000034(OP^3)
#      + 0.00574(CP) + 0.00003344(CP^2) + 0.000000086(CP^3)
STARTING_PLATO_TERMS = Polynomial([1.001843, -0.002318474, -0.000007775, -0.000000034])
CURRENT_PLATO_TERMS = Polynomial([0.0, 0.00574, 0.00003344, 0.000000086])


class ConversionService:
    """
    Exposes the brewing conversions.

    Attributes:
        settings: Tolerances used by every root search of this service.
        strict: Reject inputs outside the plausible domains instead of
            logging a warning and extrapolating.
    """

    def __init__(
        self,
        settings: Optional[SecantSettings] = None,
        strict: bool = False,
        sucrose_density_kgL: float = SUCROSE_DENSITY_KGL
    ) -> None:
        """
        Initialize the service.

        Args:
            settings: Secant tolerances; defaults to DEFAULT_SECANT_SETTINGS.
            strict: Enable input range validation.
            sucrose_density_kgL: Density of dissolved sucrose used by plato().
        """
        if sucrose_density_kgL <= 0.0:
            raise ValueError(f"Sucrose density must be positive, got {sucrose_density_kgL}.")

        self.settings = settings or DEFAULT_SECANT_SETTINGS
        self.strict = strict
        self.sucrose_density_kgL = sucrose_density_kgL

        self.plato_from_sg: FittedPolynomial = PLATO_FROM_SG_20C20C
        self.water_density: FittedPolynomial = WATER_DENSITY_VS_CELSIUS
        self.hydrometer_correction: FittedPolynomial = HYDROMETER_15C_CORRECTION

    def _check(self, domain: InputDomain, value: ArrayOrFloat) -> None:
        domain.check(value, strict=self.strict)

    # ---- Fits evaluated directly ----

    def sg_to_plato_20c20c(self, sg: ArrayOrFloat) -> ArrayOrFloat:
        """Plato of a specific gravity measured at 20°C/20°C."""
        self._check(SG_DOMAIN, sg)
        return self.plato_from_sg.evaluate(sg)

    def water_density_kgL(self, celsius: ArrayOrFloat) -> ArrayOrFloat:
        """Density of water in kg/L at ``celsius``."""
        self._check(self.water_density.domain, celsius)
        return self.water_density.evaluate(celsius)

    def hydrometer_15c_correction(self, celsius: ArrayOrFloat) -> ArrayOrFloat:
        """Additive correction for a 15°C hydrometer read at ``celsius``."""
        self._check(self.hydrometer_correction.domain, celsius)
        return self.hydrometer_correction.evaluate(celsius)

    def correct_hydrometer_15c(self, sg: ArrayOrFloat, celsius: ArrayOrFloat) -> ArrayOrFloat:
        """SG a 15°C hydrometer reading ``sg`` at ``celsius`` would show at 15°C."""
        self._check(SG_DOMAIN, sg)
        return sg + self.hydrometer_15c_correction(celsius)

    # ---- Fits inverted by root finding ----

    def plato_to_sg_20c20c_result(self, plato: float) -> RootResult:
        """Root search behind plato_to_sg_20c20c(), without raising."""
        self._check(PLATO_DOMAIN, plato)
        poly = self.plato_from_sg.polynomial.shift_constant(-plato)
        return poly.root_find(*SG_GUESSES, settings=self.settings)

    def plato_to_sg_20c20c(self, plato: float) -> float:
        """
        Specific gravity (20°C/20°C) of a wort at ``plato``.

        Raises:
            DivergenceError: If the secant search diverged.
            DegenerateSecantError: If the secant search hit a flat step.
        """
        return self.plato_to_sg_20c20c_result(plato).unwrap()

    def og_fg_to_plato_result(self, og: float, fg: float) -> RootResult:
        """Root search behind og_fg_to_plato(), without raising."""
        self._check(SG_DOMAIN, og)
        self._check(SG_DOMAIN, fg)
        sp = self.sg_to_plato_20c20c(og)

        # Quartic with the OG-dependent terms and FG folded into the linear term
        poly = (
            Polynomial()
            .push(1.001843)
            .push(0.002318474 * sp - 0.000007775 * sp ** 2 - 0.000000034 * sp ** 3 - fg)
            .push(0.00574)
            .push(0.00003344)
            .push(0.000000086)
        )
        return poly.root_find(*PLATO_GUESSES, settings=self.settings)

    def og_fg_to_plato(self, og: float, fg: float) -> float:
        """
        Convert FG to Plato, given the OG.

        Raises:
            DivergenceError: If the secant search diverged.
            DegenerateSecantError: If the secant search hit a flat step.
        """
        return self.og_fg_to_plato_result(og, fg).unwrap()

    def current_plato_from_og_fg_result(self, og: float, fg: float) -> RootResult:
        """Root search behind current_plato_from_og_fg(), without raising."""
        self._check(SG_DOMAIN, og)
        self._check(SG_DOMAIN, fg)
        starting_plato = self.sg_to_plato_20c20c(og)

        constant = STARTING_PLATO_TERMS.eval(starting_plato) - fg
        poly = CURRENT_PLATO_TERMS.shift_constant(constant)
        return poly.root_find(*PLATO_GUESSES, settings=self.settings)

    def current_plato_from_og_fg(self, og: float, fg: float) -> float:
        """
        Current (refractometer) Plato of a fermenting wort, given OG and FG.

        Inverts sg_from_starting_plato() in its second argument.

        Raises:
            DivergenceError: If the secant search diverged.
            DegenerateSecantError: If the secant search hit a flat step.
        """
        return self.current_plato_from_og_fg_result(og, fg).unwrap()

    # ---- Closed-form relations ----

    def plato(self, sugar_kg: float, wort_l: float) -> float:
        """
        Estimate Plato from dissolved sucrose (or equivalent) and wort volume.

        Assumes the sucrose volume and the water volume add up to the wort
        volume.

        Args:
            sugar_kg: Kilograms of dissolved sucrose.
            wort_l: Litres of wort.

        Raises:
            ValueError: If the total dissolved mass works out to zero.
        """
        if self.strict and (sugar_kg < 0.0 or wort_l < 0.0):
            raise ValueError(f"Sugar mass and wort volume must be non-negative, got ({sugar_kg}, {wort_l}).")

        water_kg = wort_l - sugar_kg / self.sucrose_density_kgL
        total_kg = sugar_kg + water_kg
        if total_kg == 0.0:
            raise ValueError(f"Wort of {wort_l} L with {sugar_kg} kg sugar has no mass.")
        return sugar_kg / total_kg * 100.0

    def abv_from_sg_plato(self, sg: ArrayOrFloat, plato: ArrayOrFloat) -> ArrayOrFloat:
        """
        ABV from the current gravity and the current refractometer reading.

        ABV = [277.8851 - 277.4(SG) + 0.9956(Brix) + 0.00523(Brix^2)
               + 0.000013(Brix^3)] x (SG/0.79)
        """
        self._check(SG_DOMAIN, sg)
        self._check(PLATO_DOMAIN, plato)
        return (
            277.8851 - 277.4 * sg + 0.9956 * plato + 0.00523 * plato ** 2 + 0.000013 * plato ** 3
        ) * (sg / 0.79)

    def abw_from_sg_plato(self, sg: ArrayOrFloat, plato: ArrayOrFloat) -> ArrayOrFloat:
        """ABW from the current gravity and current Plato."""
        self._check(SG_DOMAIN, sg)
        ri = self.refractive_index(plato)
        return 1017.5596 - 277.4 * sg + ri * (937.8135 * ri - 1805.1228)

    def sg_from_starting_plato(
        self,
        starting_plato: ArrayOrFloat,
        current_plato: ArrayOrFloat
    ) -> ArrayOrFloat:
        """SG from the original Plato and the current (refractometer) Plato."""
        self._check(PLATO_DOMAIN, starting_plato)
        self._check(PLATO_DOMAIN, current_plato)
        return (
            STARTING_PLATO_TERMS.eval(starting_plato)
            + CURRENT_PLATO_TERMS.eval(current_plato)
        )

    def refractive_index(self, plato: ArrayOrFloat) -> ArrayOrFloat:
        """Refractive index of a solution at ``plato``."""
        self._check(PLATO_DOMAIN, plato)
        return 1.33302 + 0.001427193 * plato + 0.000005791157 * plato ** 2

    def real_extract(self, sg: ArrayOrFloat, plato: ArrayOrFloat) -> ArrayOrFloat:
        """Correct the apparent extract ``plato`` to real extract using gravity ``sg``."""
        self._check(SG_DOMAIN, sg)
        ri = self.refractive_index(plato)
        return 194.5935 + 129.8 * sg + ri * (410.8815 * ri - 790.8732)
