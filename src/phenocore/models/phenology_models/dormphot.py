# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""DormPhot model (Caffarra, Donnelly & Chuine 2011).

Three nested phases: dormancy induction (``DS``) driven by cooling and
shortening days, chilling (``CS``) once induction reached ``D_crit``, and
forcing whose temperature response shifts with chilling and daylength.
"""

from .accumulation import accumulate, anchor_index, gate_on, zero_before
from .phenology_model import PhenologyModel
from .responses import bell_shaped, sigmoid
from .search import cumulative_threshold, to_doy

INDUCTION_START = -121
"""Dormancy induction starts the day after this DOY (~September 1st)."""


def predict_dormphot(data, a, b, c, d, e, f, g, F_crit, C_crit, L_crit, D_crit):
    start = anchor_index(data.doy, INDUCTION_START, default=0)
    DR = sigmoid(data.Ti, -a, b) * sigmoid(data.Li, -10, L_crit)
    DS = accumulate(zero_before(DR, start))

    CR = gate_on(bell_shaped(data.Ti, c, 1, d), DS, D_crit)
    CS = accumulate(CR)

    # daylength and temperature at which forcing is half its maximum
    dl50 = 24 * sigmoid(CS, -f, C_crit)
    t50 = 60 * sigmoid(data.Li, -g, dl50)
    Rf = gate_on(sigmoid(data.Ti, -e, t50), DS, D_crit)

    return to_doy(cumulative_threshold(accumulate(Rf), F_crit), data.doy)


dormphot = PhenologyModel(
    name="DP",
    predict=predict_dormphot,
    params_names=(
        "a", "b", "c", "d", "e", "f", "g", "F_crit", "C_crit", "L_crit", "D_crit",
    ),
    params_defaults=(0.5, 13, 0.05, 3, -0.5, 0.05, 0.5, 20, 60, 13, 10),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="DormPhot",
)
