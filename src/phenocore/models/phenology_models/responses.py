# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Environmental response functions.

Each function turns a driver matrix into a rate matrix of the same shape.
They are elementwise, never modify their input and always return a new
array.
"""

import numpy as np

from phenocore.utils import ContractViolation

FULL_DAY = 24
"""Hours in a day, relative daylength of the PTT and sequential M1 models."""

M1_REFERENCE = 10
"""Daylength (hours) at which the M1 photoperiod factor is 1."""


def degree_days(T, T_base):
    """Forcing above a base temperature, ``max(T - T_base, 0)``."""
    return np.maximum(np.asarray(T) - T_base, 0.0)


def chill_days(T, T_base):
    """One chilling unit for every day below the base temperature."""
    return (np.asarray(T) < T_base).astype(float)


def chilling_degree_days(T, T_base):
    """Temperature deficit below the base temperature, ``min(T - T_base, 0)``."""
    return np.minimum(np.asarray(T) - T_base, 0.0)


def triangular(T, T_opt, T_min, T_max):
    """Triangular temperature response.

    Rises linearly from 0 at ``T_min`` to 1 at ``T_opt`` and falls back to 0
    at ``T_max``. Temperatures outside ``[T_min, T_max]`` give 0.

    Raises:
        ContractViolation: unless ``T_min < T_opt < T_max``.
    """
    if not T_min < T_opt < T_max:
        raise ContractViolation(
            f"triangular response needs T_min < T_opt < T_max, "
            f"got T_min={T_min}, T_opt={T_opt}, T_max={T_max}"
        )
    T = np.asarray(T, dtype=float)
    rate = np.zeros_like(T)

    rising = (T >= T_min) & (T < T_opt)
    rate[rising] = (T[rising] - T_min) / (T_opt - T_min)

    falling = (T >= T_opt) & (T < T_max)
    rate[falling] = (T_max - T[falling]) / (T_max - T_opt)
    return rate


def bell_shaped(T, a, b, c):
    """Bell shaped response ``1 / (1 + exp(a (T - c)^2 + b (T - c)))``."""
    dT = np.asarray(T, dtype=float) - c
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(a * dT**2 + b * dT))


def sigmoid(T, b, c):
    """Sigmoid forcing response ``1 / (1 + exp(-b (T - c)))``."""
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-b * (np.asarray(T, dtype=float) - c)))


def daylength_scaling(L, reference, k=1.0):
    """Scale by relative daylength, ``(L / reference) ** k``.

    ``k`` may itself be a matrix, which is how the M1 style models couple
    the photoperiod exponent to chilling progress.
    """
    return (np.asarray(L, dtype=float) / reference) ** k


def daylength_gate(L, L_crit):
    """1 where daylength reached ``L_crit`` and is not decreasing, else 0.

    The first row has no previous day and counts as non-decreasing.
    """
    L = np.asarray(L, dtype=float)
    increasing = np.ones(L.shape, dtype=bool)
    increasing[1:] = np.diff(L, axis=0) >= 0
    return ((L >= L_crit) & increasing).astype(float)


def linear_ramp(x, low, high, decreasing=False):
    """Rescale x to [0, 1] between low and high.

    Values at or beyond the limits saturate to 0 or 1. With
    ``decreasing=True`` the ramp runs from 1 at ``low`` to 0 at ``high``.
    """
    if high == low:
        raise ContractViolation(f"ramp limits must differ, got {low} twice")
    x = np.asarray(x, dtype=float)
    scaled = (x - low) / (high - low)
    if decreasing:
        scaled = 1.0 - scaled
        scaled[x >= high] = 0.0
        scaled[x <= low] = 1.0
    else:
        scaled[x <= low] = 0.0
        scaled[x >= high] = 1.0
    return scaled
