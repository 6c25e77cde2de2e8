"""Physical characteristics of a dynamic pressure reducing valve's main valve and actuator.

The flow coefficient ``Cv`` relates flow and head loss through the main valve as
``q = Cv * sqrt(h)``, i.e. ``h = q^2 / Cv^2``. Above ``SMALL_OPENING`` it follows a cubic fit in the
actuator position, below it falls off linearly to zero so that the characteristic is continuous at
the transition.
"""

import typing as t

# cubic fit of Cv / CV_MAX as a function of the actuator position
CV_POLYNOMIAL: t.Tuple[float, float, float, float] = (0.09, -1.21, 2.33, -0.21)
CV_MAX = 0.074  # m^2.5/s
SMALL_OPENING = 0.12

# control chamber geometry
CONTROL_VOLUME = 0.0047  # m3
ACTUATOR_LIFT = 0.057  # m
CROSS_SECTION_COEFFICIENTS: t.Tuple[float, float] = (1.30, 0.56)


def _cubic_coefficient(position: float) -> float:
    k1, k2, k3, k4 = CV_POLYNOMIAL
    return (((k1 * position + k2) * position + k3) * position + k4) * CV_MAX


CV_TRANSITION = _cubic_coefficient(SMALL_OPENING)


def clamp_position(position: float) -> float:
    return min(max(position, 0.0), 1.0)


def flow_coefficient(position: float) -> float:
    """Flow coefficient (m^2.5/s) of the main valve at a given actuator position. Positions outside
    ``[0, 1]`` are clamped
    """
    position = clamp_position(position)
    if position < SMALL_OPENING:
        return CV_TRANSITION * position / SMALL_OPENING
    return min(_cubic_coefficient(position), CV_MAX)


def loss_factor(position: float) -> float:
    """Head loss factor ``1 / Cv^2`` at a given actuator position. Infinite when fully closed"""
    cv = flow_coefficient(position)
    if cv <= 0:
        return float("inf")
    return 1.0 / (cv * cv)


def actuator_cross_section(position: float) -> float:
    """Effective cross-section (m2) of the actuator's control chamber, which grows with the square
    of the actuator travel
    """
    k5, k6 = CROSS_SECTION_COEFFICIENTS
    return (k5 * position * position + k6) * CONTROL_VOLUME / ACTUATOR_LIFT
