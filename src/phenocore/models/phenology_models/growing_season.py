# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Growing season index models (Jolly 2005, Xin 2015).

The daily growing season index is the product of three ramps on minimum
temperature, vapour-pressure deficit and daylength. No clear start of
accumulation is given in the literature, we use the day after December
21st when present in the series.
"""

from .accumulation import accumulate, anchor_index, zero_before
from .phenology_model import PhenologyModel
from .responses import linear_ramp
from .search import cumulative_threshold, smoothed_threshold, to_doy

ACCUMULATION_START = -11
SMOOTHING_WINDOW = 21


def growing_season_index(data, Tmmin, Tmmax, VPDmin, VPDmax, photo_min, photo_max):
    """Daily growing season index, zero before the accumulation start."""
    GSI = (
        linear_ramp(data.Tmini, Tmmin, Tmmax)
        * linear_ramp(data.VPDi, VPDmin, VPDmax, decreasing=True)
        * linear_ramp(data.Li, photo_min, photo_max)
    )
    return zero_before(GSI, anchor_index(data.doy, ACCUMULATION_START, default=1))


def predict_sgsi(data, Tmmin, Tmmax, F_crit, VPDmin, VPDmax, photo_min, photo_max):
    """First day the 21 day running mean of the index reaches ``F_crit``."""
    GSI = growing_season_index(data, Tmmin, Tmmax, VPDmin, VPDmax, photo_min, photo_max)
    rows = smoothed_threshold(GSI, F_crit, window=SMOOTHING_WINDOW)
    return to_doy(rows, data.doy)


def predict_agsi(data, Tmmin, Tmmax, F_crit, VPDmin, VPDmax, photo_min, photo_max):
    """First day the accumulated index reaches ``F_crit``."""
    GSI = growing_season_index(data, Tmmin, Tmmax, VPDmin, VPDmax, photo_min, photo_max)
    return to_doy(cumulative_threshold(accumulate(GSI), F_crit), data.doy)


GSI_PARAMS = ("Tmmin", "Tmmax", "F_crit", "VPDmin", "VPDmax", "photo_min", "photo_max")

sgsi = PhenologyModel(
    name="SGSI",
    predict=predict_sgsi,
    params_names=GSI_PARAMS,
    params_defaults=(-2, 5, 0.5, 900, 4100, 10, 11),
    drivers=("Tmini", "VPDi", "Li"),
    daylength_unit="hours",
    description="Standard growing season index",
)

agsi = PhenologyModel(
    name="AGSI",
    predict=predict_agsi,
    params_names=GSI_PARAMS,
    params_defaults=(-2, 5, 20, 900, 4100, 10, 11),
    drivers=("Tmini", "VPDi", "Li"),
    daylength_unit="hours",
    description="Accumulated growing season index",
)
