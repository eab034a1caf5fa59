# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Accumulation of daily rates and coupling between phases.

Rows are days, columns are sites. Every function returns a new array so the
caller's drivers stay untouched.
"""

import numpy as np
import pandas as pd

from phenocore.utils import ContractViolation

from .responses import daylength_scaling


def start_index(t0) -> int:
    """Round a start parameter to a whole row index (half to even)."""
    if not np.isfinite(t0):
        raise ContractViolation(f"start should be a finite day, got {t0}")
    return int(np.round(t0))


def anchor_index(doy, anchor: int, default: int) -> int:
    """Row following the first day labelled ``anchor``.

    Used by models that start accumulating at a fixed calendar day rather
    than at a fitted start parameter. Returns ``default`` when the series
    does not contain the anchor day.
    """
    rows = np.flatnonzero(np.asarray(doy) == anchor)
    if rows.size == 0:
        return default
    return int(rows[0]) + 1


def zero_before(rate, start: int):
    """Copy of rate with all rows before ``start`` set to zero."""
    rate = np.array(rate, dtype=float, copy=True)
    rate[: max(start, 0)] = 0.0
    return rate


def zero_from(rate, stop: int):
    """Copy of rate with row ``stop`` and all later rows set to zero."""
    rate = np.array(rate, dtype=float, copy=True)
    rate[max(stop, 0) :] = 0.0
    return rate


def accumulate(rate):
    """Running total of rate along time, per site."""
    return np.cumsum(rate, axis=0)


def gate_on(rate, state, requirement):
    """Zero rate wherever the accumulated state is below its requirement."""
    return np.where(state < requirement, 0.0, rate)


def hard_gate(Sc, C_req):
    """Binary chilling switch: 1 once ``Sc`` reached ``C_req``, else 0."""
    return (np.asarray(Sc) >= C_req).astype(float)


def soft_ramp(Sc, C_ini, C_req):
    """Linear chilling efficacy from ``C_ini`` up to 1 at ``C_req``."""
    Sc = np.asarray(Sc, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        k = C_ini + Sc * (1 - C_ini) / C_req
    return np.where(Sc >= C_req, 1.0, k)


def scale_rate(Rf, k):
    """Couple phases by multiplying the forcing rate with the efficacy."""
    return Rf * k


def photoperiod_exponent(L, reference):
    """Couple phases through the daylength exponent, ``Rf (L / reference) ** k``.

    With a hard gate this leaves forcing untouched until chilling is met and
    scales it by relative daylength afterwards.
    """

    def couple(Rf, k):
        return Rf * daylength_scaling(L, reference, k)

    return couple


def exponential_threshold(Sc, w, f, offset=0.0):
    """Critical forcing that decays with chilling, ``offset + w exp(f Sc)``."""
    with np.errstate(over="ignore"):
        return offset + w * np.exp(f * np.asarray(Sc, dtype=float))


def lagged_window(x, width: int, lag: int, how: str = "mean"):
    """Right aligned rolling mean or sum, delayed by ``lag`` rows.

    Rows without a complete window are 0, as are the first ``lag`` rows of
    the delayed series.
    """
    if width < 1:
        raise ContractViolation(f"window width should be at least 1, got {width}")
    if lag < 0:
        raise ContractViolation(f"lag should not be negative, got {lag}")
    rolling = pd.DataFrame(np.asarray(x, dtype=float)).rolling(width)
    windowed = getattr(rolling, how)().fillna(0.0)
    return windowed.shift(lag, fill_value=0.0).to_numpy()
