# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Forward evaluation of plant phenology models."""

from phenocore.config import CONFIG
from phenocore.data import DriverData, GridLayout
from phenocore.models import NO_EVENT, PHENOLOGY_MODELS, evaluate
from phenocore.output import shape_model_output
from phenocore.utils import ContractViolation

__all__ = [
    "CONFIG",
    "ContractViolation",
    "DriverData",
    "GridLayout",
    "NO_EVENT",
    "PHENOLOGY_MODELS",
    "evaluate",
    "shape_model_output",
]
