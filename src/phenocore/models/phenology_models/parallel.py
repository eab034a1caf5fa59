# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Parallel chilling-forcing models (Basler 2016).

Chilling and forcing accumulate side by side. Forcing efficacy ramps up
linearly from ``C_ini`` to 1 while chilling progresses to ``C_req``.
"""

import logging

from .accumulation import (
    accumulate,
    photoperiod_exponent,
    scale_rate,
    soft_ramp,
    start_index,
    zero_before,
)
from .phenology_model import PhenologyModel
from .responses import M1_REFERENCE, bell_shaped, degree_days, triangular
from .search import no_event
from .thermaltime import forcing_doy

logger = logging.getLogger(__name__)


def parallel_doy(data, Rc, t0, t0_chill, T_base, C_ini, F_crit, C_req, couple=scale_rate):
    """Event DOY of a parallel model given its chilling rate.

    Returns ``NO_EVENT`` for every site when chilling would not start before
    forcing.
    """
    t0, t0_chill = start_index(t0), start_index(t0_chill)
    if t0 <= t0_chill:
        logger.debug(f"Chilling start {t0_chill} not before forcing start {t0}")
        return no_event(data.n_sites)

    Sc = accumulate(zero_before(Rc, t0_chill))
    Rf = couple(degree_days(data.Ti, T_base), soft_ramp(Sc, C_ini, C_req))
    return forcing_doy(data, Rf, t0, F_crit)


def predict_parallel(data, t0, t0_chill, T_base, T_opt, T_min, T_max, C_ini, F_crit, C_req):
    Rc = triangular(data.Ti, T_opt, T_min, T_max)
    return parallel_doy(data, Rc, t0, t0_chill, T_base, C_ini, F_crit, C_req)


def predict_parallel_bell(data, t0, t0_chill, T_base, C_a, C_b, C_c, C_ini, F_crit, C_req):
    Rc = bell_shaped(data.Ti, C_a, C_b, C_c)
    return parallel_doy(data, Rc, t0, t0_chill, T_base, C_ini, F_crit, C_req)


def parallel_m1_doy(data, Rc, t0, T_base, C_ini, F_crit, C_req):
    """Parallel M1: chilling efficacy is the photoperiod exponent.

    Chilling and forcing both accumulate from ``t0``.
    """
    t0 = start_index(t0)
    Sc = accumulate(zero_before(Rc, t0))
    couple = photoperiod_exponent(data.Li, M1_REFERENCE)
    Rf = couple(degree_days(data.Ti, T_base), soft_ramp(Sc, C_ini, C_req))
    return forcing_doy(data, Rf, t0, F_crit)


def predict_parallel_m1(data, t0, T_base, T_opt, T_min, T_max, C_ini, F_crit, C_req):
    Rc = triangular(data.Ti, T_opt, T_min, T_max)
    return parallel_m1_doy(data, Rc, t0, T_base, C_ini, F_crit, C_req)


def predict_parallel_m1_bell(data, t0, T_base, C_a, C_b, C_c, C_ini, F_crit, C_req):
    Rc = bell_shaped(data.Ti, C_a, C_b, C_c)
    return parallel_m1_doy(data, Rc, t0, T_base, C_ini, F_crit, C_req)


parallel = PhenologyModel(
    name="PA",
    predict=predict_parallel,
    params_names=(
        "t0", "t0_chill", "T_base", "T_opt", "T_min", "T_max", "C_ini", "F_crit", "C_req",
    ),
    params_defaults=(90, 1, 5, 2, -5, 10, 0.5, 150, 40),
    drivers=("Ti",),
    description="Parallel, triangular chilling",
)

parallel_bell = PhenologyModel(
    name="PAb",
    predict=predict_parallel_bell,
    params_names=(
        "t0", "t0_chill", "T_base", "C_a", "C_b", "C_c", "C_ini", "F_crit", "C_req",
    ),
    params_defaults=(90, 1, 5, 0.05, 0.5, 2, 0.5, 150, 30),
    drivers=("Ti",),
    description="Parallel, bell shaped chilling",
)

parallel_m1 = PhenologyModel(
    name="PM1",
    predict=predict_parallel_m1,
    params_names=("t0", "T_base", "T_opt", "T_min", "T_max", "C_ini", "F_crit", "C_req"),
    params_defaults=(1, 5, 2, -5, 10, 0.5, 300, 40),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Parallel M1, triangular chilling",
)

parallel_m1_bell = PhenologyModel(
    name="PM1b",
    predict=predict_parallel_m1_bell,
    params_names=("t0", "T_base", "C_a", "C_b", "C_c", "C_ini", "F_crit", "C_req"),
    params_defaults=(1, 5, 0.05, 0.5, 2, 0.5, 300, 30),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Parallel M1, bell shaped chilling",
)
