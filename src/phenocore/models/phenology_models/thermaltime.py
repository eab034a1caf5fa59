# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Forcing only models (Basler 2016, Jeong & Medvigy 2014).

Forcing accumulates from the start day ``t0`` onward and the event occurs
on the first day the accumulated forcing reaches ``F_crit``.
"""

from .accumulation import accumulate, start_index, zero_before
from .phenology_model import PhenologyModel
from .responses import (
    FULL_DAY,
    M1_REFERENCE,
    chilling_degree_days,
    daylength_scaling,
    degree_days,
    sigmoid,
)
from .search import cumulative_threshold, to_doy


def forcing_doy(data, Rf, t0, F_crit, below=False):
    """DOY on which the forcing accumulated from row ``t0`` reaches ``F_crit``.

    Args:
        data: DriverData providing the DOY labels.
        Rf: Daily forcing rate, shape (time, site).
        t0: First row that counts, rounded to a whole day.
        F_crit: Total forcing required.
        below: Accumulated forcing is a deficit that has to drop to
            ``F_crit`` instead.
    """
    Sf = accumulate(zero_before(Rf, start_index(t0)))
    return to_doy(cumulative_threshold(Sf, F_crit, below=below), data.doy)


def predict_thermaltime(data, t0, T_base, F_crit):
    """Make prediction with the thermal time model.

    Args:
        data: DriverData with daily mean temperatures ``Ti``.
        t0: The row at which forcing accumulation begins.
        T_base: The threshold above which forcing accumulates.
        F_crit: The total forcing units required.
    """
    return forcing_doy(data, degree_days(data.Ti, T_base), t0, F_crit)


def predict_thermaltime_sigmoid(data, t0, b, c, F_crit):
    """Thermal time with a sigmoidal temperature response (Kramer 1994)."""
    return forcing_doy(data, sigmoid(data.Ti, b, c), t0, F_crit)


def predict_photothermaltime(data, t0, T_base, F_crit):
    """Thermal time weighted by the fraction of the day with light."""
    Rf = degree_days(data.Ti, T_base) * daylength_scaling(data.Li, FULL_DAY)
    return forcing_doy(data, Rf, t0, F_crit)


def predict_photothermaltime_sigmoid(data, t0, b, c, F_crit):
    Rf = sigmoid(data.Ti, b, c) * daylength_scaling(data.Li, FULL_DAY)
    return forcing_doy(data, Rf, t0, F_crit)


def predict_m1(data, t0, T_base, k, F_crit):
    """Thermal time scaled by ``(L / 10) ** k`` (Blümel & Chmielewski 2012)."""
    Rf = degree_days(data.Ti, T_base) * daylength_scaling(data.Li, M1_REFERENCE, k)
    return forcing_doy(data, Rf, t0, F_crit)


def predict_m1_sigmoid(data, t0, b, c, k, F_crit):
    Rf = sigmoid(data.Ti, b, c) * daylength_scaling(data.Li, M1_REFERENCE, k)
    return forcing_doy(data, Rf, t0, F_crit)


def predict_chilling_degree_days(data, t0, T_base, F_crit):
    """Minimum temperature deficit below ``T_base`` reaching ``F_crit`` (< 0)."""
    Rf = chilling_degree_days(data.Tmini, T_base)
    return forcing_doy(data, Rf, t0, F_crit, below=True)


thermaltime = PhenologyModel(
    name="TT",
    predict=predict_thermaltime,
    params_names=("t0", "T_base", "F_crit"),
    params_defaults=(1, 5, 500),
    drivers=("Ti",),
    description="Thermal time",
)

thermaltime_sigmoid = PhenologyModel(
    name="TTs",
    predict=predict_thermaltime_sigmoid,
    params_names=("t0", "b", "c", "F_crit"),
    params_defaults=(1, 0.5, 10, 40),
    drivers=("Ti",),
    description="Thermal time, sigmoidal response",
)

photothermaltime = PhenologyModel(
    name="PTT",
    predict=predict_photothermaltime,
    params_names=("t0", "T_base", "F_crit"),
    params_defaults=(1, 5, 250),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Photothermal time",
)

photothermaltime_sigmoid = PhenologyModel(
    name="PTTs",
    predict=predict_photothermaltime_sigmoid,
    params_names=("t0", "b", "c", "F_crit"),
    params_defaults=(1, 0.5, 10, 20),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="Photothermal time, sigmoidal response",
)

m1 = PhenologyModel(
    name="M1",
    predict=predict_m1,
    params_names=("t0", "T_base", "k", "F_crit"),
    params_defaults=(1, 5, 0.5, 500),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="M1, photoperiod scaled thermal time",
)

m1_sigmoid = PhenologyModel(
    name="M1s",
    predict=predict_m1_sigmoid,
    params_names=("t0", "b", "c", "k", "F_crit"),
    params_defaults=(1, 0.5, 10, 0.5, 40),
    drivers=("Ti", "Li"),
    daylength_unit="hours",
    description="M1, sigmoidal response",
)

chilling_degree_day = PhenologyModel(
    name="CDD",
    predict=predict_chilling_degree_days,
    params_names=("t0", "T_base", "F_crit"),
    params_defaults=(1, 5, -200),
    drivers=("Tmini",),
    description="Chilling degree days",
)
