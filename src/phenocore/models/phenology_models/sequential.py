# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Sequential chilling-forcing models (Basler 2016).

Chilling accumulates between ``t0_chill`` and the forcing start ``t0``.
Forcing only counts once the chilling requirement ``C_req`` is met.
"""

import logging

from .accumulation import (
    accumulate,
    hard_gate,
    photoperiod_exponent,
    scale_rate,
    start_index,
    zero_before,
    zero_from,
)
from .phenology_model import PhenologyModel
from .responses import FULL_DAY, bell_shaped, degree_days, triangular
from .search import no_event
from .thermaltime import forcing_doy

logger = logging.getLogger(__name__)


def sequential_doy(data, Rc, t0, t0_chill, T_base, F_crit, C_req, couple=scale_rate):
    """Event DOY of a sequential model given its chilling rate.

    Returns ``NO_EVENT`` for every site when chilling would not start before
    forcing.
    """
    t0, t0_chill = start_index(t0), start_index(t0_chill)
    if t0 <= t0_chill:
        logger.debug(f"Chilling start {t0_chill} not before forcing start {t0}")
        return no_event(data.n_sites)

    Sc = accumulate(zero_from(zero_before(Rc, t0_chill), t0))
    Rf = couple(degree_days(data.Ti, T_base), hard_gate(Sc, C_req))
    return forcing_doy(data, Rf, t0, F_crit)


def predict_sequential(data, t0, t0_chill, T_base, T_opt, T_min, T_max, F_crit, C_req):
    Rc = triangular(data.Ti, T_opt, T_min, T_max)
    return sequential_doy(data, Rc, t0, t0_chill, T_base, F_crit, C_req)


def predict_sequential_bell(data, t0, t0_chill, T_base, C_a, C_b, C_c, F_crit, C_req):
    Rc = bell_shaped(data.Ti, C_a, C_b, C_c)
    return sequential_doy(data, Rc, t0, t0_chill, T_base, F_crit, C_req)


def predict_sequential_m1(data, t0, t0_chill, T_base, T_opt, T_min, T_max, F_crit, C_req):
    """Sequential model where chilling switches on photoperiod scaling."""
    Rc = triangular(data.Ti, T_opt, T_min, T_max)
    couple = photoperiod_exponent(data.Li, FULL_DAY)
    return sequential_doy(data, Rc, t0, t0_chill, T_base, F_crit, C_req, couple)


def predict_sequential_m1_bell(data, t0, t0_chill, T_base, C_a, C_b, C_c, F_crit, C_req):
    Rc = bell_shaped(data.Ti, C_a, C_b, C_c)
    couple = photoperiod_exponent(data.Li, FULL_DAY)
    return sequential_doy(data, Rc, t0, t0_chill, T_base, F_crit, C_req, couple)


sequential = PhenologyModel(
    name="SQ",
    predict=predict_sequential,
    params_names=("t0", "t0_chill", "T_base", "T_opt", "T_min", "T_max", "F_crit", "C_req"),
    params_defaults=(90, 1, 5, 2, -5, 10, 150, 40),
    drivers=("Ti",),
    description="Sequential, triangular chilling",
)

sequential_bell = PhenologyModel(
    name="SQb",
    predict=predict_sequential_bell,
    params_names=("t0", "t0_chill", "T_base", "C_a", "C_b", "C_c", "F_crit", "C_req"),
    params_defaults=(90, 1, 5, 0.05, 0.5, 2, 150, 30),
    drivers=("Ti",),
    description="Sequential, bell shaped chilling",
)

sequential_m1 = PhenologyModel(
    name="SM1",
    predict=predict_sequential_m1,
    params_names=("t0", "t0_chill", "T_base", "T_opt", "T_min", "T_max", "F_crit", "C_req"),
    params_defaults=(90, 1, 5, 2, -5, 10, 100, 40),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Sequential M1, triangular chilling",
)

sequential_m1_bell = PhenologyModel(
    name="SM1b",
    predict=predict_sequential_m1_bell,
    params_names=("t0", "t0_chill", "T_base", "C_a", "C_b", "C_c", "F_crit", "C_req"),
    params_defaults=(90, 1, 5, 0.05, 0.5, 2, 100, 30),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Sequential M1, bell shaped chilling",
)
