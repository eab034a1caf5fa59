# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Rainfall and chilling pulse models.

DU and CU (Chen 2017) trigger flowering once a lagged running statistic of
precipitation or chilling reaches a critical value. GRP (Garcia-Mozo 2009)
only starts forcing after a rainfall pulse on lengthening days.
"""

import numpy as np

from .accumulation import accumulate, lagged_window, start_index
from .phenology_model import PhenologyModel
from .responses import daylength_gate, sigmoid
from .search import cumulative_threshold, pulse_gate, to_doy

PULSE_WINDOW = 8
"""Number of days over which a rainfall pulse is summed."""


def predict_drought(data, ni, nd, P_base, F_crit):
    """Lagged ``ni`` day mean precipitation in excess of ``P_base``.

    Args:
        ni: Length of the induction window (days).
        nd: Delay between induction and flowering (days).
        P_base: Precipitation that does not count towards induction.
        F_crit: Induction required for flowering.
    """
    Fd = lagged_window(data.Pi, start_index(ni), start_index(nd), how="mean")
    Fd = np.maximum(Fd - P_base, 0.0)
    return to_doy(cumulative_threshold(Fd, F_crit), data.doy)


def predict_chilling_units(data, ni, nd, T_base, F_crit):
    """Lagged ``ni`` day sum of absolute temperatures not above ``T_base``."""
    chill = np.abs(np.where(data.Ti > T_base, 0.0, data.Ti))
    Fd = lagged_window(chill, start_index(ni), start_index(nd), how="sum")
    return to_doy(cumulative_threshold(Fd, F_crit), data.doy)


def predict_grass_pollen(data, b, c, F_crit, P_crit, L_crit):
    """Thermal time started by a rainfall pulse.

    Only rain on days at least ``L_crit`` long with non-decreasing daylength
    counts. Forcing starts on the first day of the first 8 day spell with
    at least ``P_crit`` of such rain.
    """
    rain = data.Pi * daylength_gate(data.Li, L_crit)
    Rf = sigmoid(data.Ti, -b, -c) * pulse_gate(rain, P_crit, window=PULSE_WINDOW)
    return to_doy(cumulative_threshold(accumulate(Rf), F_crit), data.doy)


drought = PhenologyModel(
    name="DU",
    predict=predict_drought,
    params_names=("ni", "nd", "P_base", "F_crit"),
    params_defaults=(30, 10, 1, 2),
    drivers=("Pi",),
    description="Drought (rainfall induction)",
)

chilling_units = PhenologyModel(
    name="CU",
    predict=predict_chilling_units,
    params_names=("ni", "nd", "T_base", "F_crit"),
    params_defaults=(30, 10, 15, 150),
    drivers=("Ti",),
    description="Chilling units (lagged chilling induction)",
)

grass_pollen = PhenologyModel(
    name="GRP",
    predict=predict_grass_pollen,
    params_names=("b", "c", "F_crit", "P_crit", "L_crit"),
    params_defaults=(-0.2, -10, 20, 20, 11),
    drivers=("Ti", "Pi", "Li"),
    daylength_unit="hours",
    description="Grassland pollen, rainfall pulse triggered",
)
