# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Catalog of phenology models by name."""

from .dormphot import dormphot
from .growing_season import agsi, sgsi
from .parallel import parallel, parallel_bell, parallel_m1, parallel_m1_bell
from .phenology_model import PhenologyModel
from .reference import linear, null
from .search import NO_EVENT
from .sequential import sequential, sequential_bell, sequential_m1, sequential_m1_bell
from .thermaltime import (
    chilling_degree_day,
    m1,
    m1_sigmoid,
    photothermaltime,
    photothermaltime_sigmoid,
    thermaltime,
    thermaltime_sigmoid,
)
from .tropical import chilling_units, drought, grass_pollen
from .unified import alternating, unified, unified_m1

PHENOLOGY_MODELS: dict[str, PhenologyModel] = {
    model.name: model
    for model in (
        thermaltime,
        thermaltime_sigmoid,
        photothermaltime,
        photothermaltime_sigmoid,
        m1,
        m1_sigmoid,
        chilling_degree_day,
        sequential,
        sequential_bell,
        sequential_m1,
        sequential_m1_bell,
        parallel,
        parallel_bell,
        parallel_m1,
        parallel_m1_bell,
        unified,
        unified_m1,
        alternating,
        dormphot,
        sgsi,
        agsi,
        drought,
        chilling_units,
        grass_pollen,
        linear,
        null,
    )
}

__all__ = ["PHENOLOGY_MODELS", "NO_EVENT", "PhenologyModel"]
