"""Translate the single intensity slider into per-filter parameter values."""

from __future__ import annotations

import math
from typing import Callable, Mapping

from .catalog import FilterDescriptor, ParameterName

INTENSITY_MIN = 0.0
INTENSITY_MAX = 1.0

# One formula per parameter name.  Radius spans a usable pixel range and the
# scale factor a usable block size; intensity is passed through untouched.
PARAMETER_FORMULAS: Mapping[ParameterName, Callable[[float], float]] = {
    ParameterName.INTENSITY: lambda value: value,
    ParameterName.RADIUS: lambda value: value * 200.0,
    ParameterName.SCALE: lambda value: value * 10.0,
}


def clamp_intensity(value: float) -> float:
    """Return *value* limited to the inclusive ``[0.0, 1.0]`` range.

    ``NaN`` collapses to the lower bound so a malformed slider value can never
    reach the backend.
    """

    value = float(value)
    if math.isnan(value):
        return INTENSITY_MIN
    if value < INTENSITY_MIN:
        return INTENSITY_MIN
    if value > INTENSITY_MAX:
        return INTENSITY_MAX
    return value


def map_intensity(intensity: float, descriptor: FilterDescriptor) -> dict[ParameterName, float]:
    """Return the parameter assignment for *descriptor* at *intensity*.

    Only the names the descriptor declares are emitted.  A descriptor without
    any tunable input yields an empty mapping rather than an error.
    """

    value = clamp_intensity(intensity)
    return {
        name: PARAMETER_FORMULAS[name](value)
        for name in ParameterName
        if descriptor.accepts(name)
    }


__all__ = [
    "INTENSITY_MAX",
    "INTENSITY_MIN",
    "PARAMETER_FORMULAS",
    "clamp_intensity",
    "map_intensity",
]
