# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Models where chilling lowers the forcing requirement.

Instead of gating the forcing rate, accumulated forcing ``Sf`` is compared
against a critical curve that decays exponentially with accumulated
chilling ``Sc``. The event occurs on the first day ``Sf`` rises above it.
"""

from .accumulation import (
    accumulate,
    exponential_threshold,
    hard_gate,
    photoperiod_exponent,
    scale_rate,
    start_index,
    zero_before,
)
from .phenology_model import PhenologyModel
from .responses import M1_REFERENCE, chill_days, degree_days, triangular
from .search import sign_change, to_doy


def crossing_doy(data, Sf, critical):
    """First DOY on which accumulated forcing exceeds the critical curve."""
    return to_doy(sign_change(Sf - critical), data.doy)


def unified_doy(data, t0, T_base, T_opt, T_min, T_max, f, w, C_req, couple=scale_rate):
    t0 = start_index(t0)
    Sc = accumulate(zero_before(triangular(data.Ti, T_opt, T_min, T_max), t0))
    Rf = couple(degree_days(data.Ti, T_base), hard_gate(Sc, C_req))
    Sf = accumulate(zero_before(Rf, t0))
    return crossing_doy(data, Sf, exponential_threshold(Sc, w, f))


def predict_unified(data, t0, T_base, T_opt, T_min, T_max, f, w, C_req):
    """Unified model (Chuine 2000) as used by Basler 2016."""
    return unified_doy(data, t0, T_base, T_opt, T_min, T_max, f, w, C_req)


def predict_unified_m1(data, t0, T_base, T_opt, T_min, T_max, f, w, C_req):
    """Unified model with chilling switching on photoperiod scaling."""
    couple = photoperiod_exponent(data.Li, M1_REFERENCE)
    return unified_doy(data, t0, T_base, T_opt, T_min, T_max, f, w, C_req, couple)


def predict_alternating(data, t0, T_base, a, b, c):
    """Alternating model (Murray 1989).

    Every day below ``T_base`` counts as one chill day, and the required
    forcing is ``a + b exp(c Sc)``.
    """
    t0 = start_index(t0)
    Sc = accumulate(zero_before(chill_days(data.Ti, T_base), t0))
    Sf = accumulate(zero_before(degree_days(data.Ti, T_base), t0))
    return crossing_doy(data, Sf, exponential_threshold(Sc, b, c, offset=a))


unified = PhenologyModel(
    name="UN",
    predict=predict_unified,
    params_names=("t0", "T_base", "T_opt", "T_min", "T_max", "f", "w", "C_req"),
    params_defaults=(1, 5, 2, -5, 10, -0.02, 600, 40),
    drivers=("Ti",),
    description="Unified, triangular chilling",
)

unified_m1 = PhenologyModel(
    name="UM1",
    predict=predict_unified_m1,
    params_names=("t0", "T_base", "T_opt", "T_min", "T_max", "f", "w", "C_req"),
    params_defaults=(1, 5, 2, -5, 10, -0.02, 600, 40),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Unified M1, triangular chilling",
)

alternating = PhenologyModel(
    name="AT",
    predict=predict_alternating,
    params_names=("t0", "T_base", "a", "b", "c"),
    params_defaults=(1, 5, 100, 600, -0.02),
    drivers=("Ti",),
    description="Alternating, chill days",
)
