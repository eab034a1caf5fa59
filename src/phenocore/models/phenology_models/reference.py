# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Reference models to benchmark process models against (Basler 2016)."""

import numpy as np

from phenocore.utils import ContractViolation

from .phenology_model import PhenologyModel

SPRING = (60, 151)
"""March, April and May as DOY range (inclusive)."""


def predict_linear(data, a, b, spring=SPRING):
    """Linear regression on mean spring temperature, ``a * T_spring + b``.

    Args:
        spring: First and last DOY of spring, inclusive.
    """
    in_spring = (data.doy >= spring[0]) & (data.doy <= spring[1])
    if not in_spring.any():
        raise ContractViolation(f"No days of DOY range {spring} in the driver data")
    return a * data.Ti[in_spring].mean(axis=0) + b


def predict_null(data):
    """Mean observed transition date, rounded, for every site."""
    if np.isnan(data.transition_dates).all():
        raise ContractViolation("No observed transition dates to average")
    mean_date = np.round(np.nanmean(data.transition_dates))
    return np.full(data.n_sites, mean_date)


linear = PhenologyModel(
    name="LIN",
    predict=predict_linear,
    params_names=("a", "b"),
    params_defaults=(-2, 140),
    drivers=("Ti",),
    description="Linear on mean spring temperature",
)

null = PhenologyModel(
    name="null",
    predict=predict_null,
    params_names=(),
    params_defaults=(),
    drivers=("transition_dates",),
    column_independent=False,
    description="Mean observed date",
)
